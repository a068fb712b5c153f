"""Data models used throughout Confract."""

import time
from dataclasses import dataclass, field
from typing import Any

from .errors import MalformedExistingDocumentError


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SectionDefinition:
    """A section a content type can sort lines into."""
    key: str
    keywords: tuple[str, ...]
    emoji: str
    category: str


@dataclass(frozen=True)
class ContentTypeProfile:
    """Static description of one content type and its ordered sections."""
    type: str
    label: str
    emoji: str
    keywords: tuple[str, ...]
    sections: tuple[SectionDefinition, ...]
    default_title: str

    def section(self, key: str) -> SectionDefinition | None:
        for definition in self.sections:
            if definition.key == key:
                return definition
        return None

    @property
    def section_keys(self) -> list[str]:
        return [definition.key for definition in self.sections]


@dataclass
class Line:
    """A segment of pasted input."""
    text: str
    normalized: str
    word_count: int


@dataclass
class Detection:
    """Outcome of content type detection."""
    profile: ContentTypeProfile
    avg_words: float
    scores: dict[str, int] = field(default_factory=dict)


@dataclass
class ClassifiedItem:
    """A line assigned to a section of the detected content type."""
    name: str
    section: str
    category: str
    raw: str
    note: str = ""
    is_new: bool = False


@dataclass
class SectionItem:
    """An item as it lives inside a built section."""
    name: str
    note: str = ""
    is_new: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "note": self.note, "is_new": self.is_new}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SectionItem":
        return cls(
            name=str(data.get("name", "")),
            note=data.get("note") or "",
            is_new=bool(data.get("is_new", False)),
        )


@dataclass
class Section:
    """A titled, emoji-tagged group of items."""
    title: str
    emoji: str
    category: str
    items: list[SectionItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "emoji": self.emoji,
            "category": self.category,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Section":
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise MalformedExistingDocumentError(f"Section has no items list: {data!r}")
        return cls(
            title=str(data.get("title", "")),
            emoji=data.get("emoji") or "◈",
            category=data.get("category") or "notes",
            items=[SectionItem.from_dict(i) for i in items if isinstance(i, dict)],
        )


@dataclass
class ConsolidationLogEntry:
    """Record of a new item folded into an existing one."""
    removed: str
    kept_as: str
    reason: str
    section: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "removed": self.removed,
            "kept_as": self.kept_as,
            "reason": self.reason,
            "section": self.section,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConsolidationLogEntry":
        return cls(
            removed=str(data.get("removed", "")),
            kept_as=str(data.get("kept_as", "")),
            reason=str(data.get("reason", "")),
            section=str(data.get("section", "")),
        )


@dataclass
class Version:
    """A snapshot of a document's sections and log, taken before a change."""
    ts: int
    label: str
    snapshot: str  # JSON: {"sections": [...], "consolidation_log": [...]}

    def to_dict(self) -> dict[str, Any]:
        return {"ts": self.ts, "label": self.label, "snapshot": self.snapshot}


@dataclass
class Document:
    """A structured document owned by the caller."""
    id: str
    title: str
    emoji: str = "📄"
    detected_type: str = ""
    sections: list[Section] = field(default_factory=list)
    consolidation_log: list[ConsolidationLogEntry] = field(default_factory=list)
    markdown: str = ""
    created: int = field(default_factory=now_ms)
    updated: int = field(default_factory=now_ms)
    versions: list[Version] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "emoji": self.emoji,
            "detected_type": self.detected_type,
            "sections": [s.to_dict() for s in self.sections],
            "consolidation_log": [e.to_dict() for e in self.consolidation_log],
            "markdown": self.markdown,
            "created": self.created,
            "updated": self.updated,
            "versions": [v.to_dict() for v in self.versions],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Document":
        """Build a Document from its JSON form.

        Raises MalformedExistingDocumentError when ``data`` is not an object,
        when ``sections`` is not a list of sections that each carry an items
        list, or when ``versions`` is not a list.
        """
        if not isinstance(data, dict):
            raise MalformedExistingDocumentError(f"Document is not an object: {data!r}")
        raw_sections = data.get("sections", [])
        if not isinstance(raw_sections, list):
            raise MalformedExistingDocumentError(
                f"Document {data.get('id')!r} has no sections list"
            )
        raw_versions = data.get("versions") or []
        if not isinstance(raw_versions, list):
            raise MalformedExistingDocumentError(
                f"Document {data.get('id')!r} has no versions list"
            )
        raw_log = data.get("consolidation_log")
        if not isinstance(raw_log, list):
            raw_log = []
        created = data.get("created") or now_ms()
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "Untitled",
            emoji=data.get("emoji") or "📄",
            detected_type=data.get("detected_type") or "",
            sections=[Section.from_dict(s) for s in raw_sections],
            consolidation_log=[
                ConsolidationLogEntry.from_dict(e)
                for e in raw_log
                if isinstance(e, dict)
            ],
            markdown=data.get("markdown") or "",
            created=created,
            updated=data.get("updated") or created,
            versions=[
                Version(ts=v.get("ts", 0), label=v.get("label", ""), snapshot=v.get("snapshot", "{}"))
                for v in raw_versions
                if isinstance(v, dict)
            ],
        )


@dataclass
class MatchResult:
    """Which existing document, if any, new input belongs to."""
    match_id: str | None
    confidence: str  # "high" | "medium" | "low"
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"match_id": self.match_id, "confidence": self.confidence, "reason": self.reason}


@dataclass
class ProcessResult:
    """Structured output of one pipeline run."""
    title: str
    emoji: str
    detected_type: str
    sections: list[Section]
    consolidation_log: list[ConsolidationLogEntry]
    new_additions_count: int
    overlap_count: int
    markdown: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "emoji": self.emoji,
            "detected_type": self.detected_type,
            "sections": [s.to_dict() for s in self.sections],
            "consolidation_log": [e.to_dict() for e in self.consolidation_log],
            "new_additions_count": self.new_additions_count,
            "overlap_count": self.overlap_count,
            "markdown": self.markdown,
        }
