"""Pure document operations: create, merge, version, revert, restore.

Every function returns a new Document and leaves its arguments untouched,
so a merge preview is just a merge whose result is not saved.
"""

import copy
import json

from ..models import (
    ConsolidationLogEntry,
    Document,
    ProcessResult,
    Section,
    SectionItem,
    Version,
    now_ms,
)

MAX_VERSIONS = 20

RESTORED_SECTION = "Restored"


def create_document(result: ProcessResult, now: int | None = None) -> Document:
    """Start a new document from a process result."""
    now = now or now_ms()
    return Document(
        id=f"doc_{now}",
        title=result.title or "Untitled",
        emoji=result.emoji or "📄",
        detected_type=result.detected_type,
        sections=copy.deepcopy(result.sections),
        consolidation_log=copy.deepcopy(result.consolidation_log),
        markdown=result.markdown,
        created=now,
        updated=now,
    )


def merge(document: Document, result: ProcessResult, now: int | None = None) -> Document:
    """Fold a process result into a copy of ``document``.

    Sections are matched by case-insensitive title. Items whose trimmed,
    lowercased name is already in the section are skipped; everything added
    is marked new.
    """
    merged = copy.deepcopy(document)

    for new_section in result.sections:
        existing = next(
            (s for s in merged.sections if s.title.lower() == new_section.title.lower()),
            None,
        )
        if existing is None:
            merged.sections.append(Section(
                title=new_section.title,
                emoji=new_section.emoji,
                category=new_section.category,
                items=[_as_new(i) for i in new_section.items],
            ))
            continue

        present = {i.name.lower().strip() for i in existing.items}
        for item in new_section.items:
            key = item.name.lower().strip()
            if key not in present:
                existing.items.append(_as_new(item))
                present.add(key)

    merged.consolidation_log.extend(copy.deepcopy(result.consolidation_log))
    merged.updated = now or now_ms()
    if result.markdown:
        merged.markdown = result.markdown
    return merged


def _as_new(item: SectionItem) -> SectionItem:
    return SectionItem(name=item.name, note=item.note, is_new=True)


def _snapshot(document: Document) -> str:
    return json.dumps({
        "sections": [s.to_dict() for s in document.sections],
        "consolidation_log": [e.to_dict() for e in document.consolidation_log],
    }, ensure_ascii=False)


def push_version(
    document: Document,
    label: str,
    max_versions: int = MAX_VERSIONS,
    now: int | None = None,
) -> Document:
    """Copy of ``document`` with its current state saved as the newest version."""
    versioned = copy.deepcopy(document)
    versioned.versions.insert(0, Version(ts=now or now_ms(), label=label, snapshot=_snapshot(document)))
    del versioned.versions[max_versions:]
    return versioned


def revert(document: Document, index: int, max_versions: int = MAX_VERSIONS) -> Document:
    """Restore version ``index``, first saving the current state as a version."""
    if not 0 <= index < len(document.versions):
        raise IndexError(f"Document {document.id!r} has no version {index}")

    target = document.versions[index]
    snapshot = json.loads(target.snapshot)

    reverted = push_version(document, f"Before revert to: {target.label}", max_versions)
    reverted.sections = [Section.from_dict(s) for s in snapshot.get("sections", [])]
    reverted.consolidation_log = [
        ConsolidationLogEntry.from_dict(e) for e in snapshot.get("consolidation_log", [])
    ]
    reverted.updated = now_ms()
    return reverted


def restore_item(document: Document, name: str) -> Document:
    """Put a consolidated item back into the document's Restored section."""
    restored = copy.deepcopy(document)
    section = next((s for s in restored.sections if s.title == RESTORED_SECTION), None)
    if section is None:
        section = Section(title=RESTORED_SECTION, emoji="↩️", category="other")
        restored.sections.append(section)
    section.items.append(SectionItem(name=name, note="manually restored", is_new=True))
    restored.updated = now_ms()
    return restored
