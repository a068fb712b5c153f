"""Group classified items into ordered, titled sections."""

from ..models import ClassifiedItem, ContentTypeProfile, Section, SectionItem
from ..text import title_case

PLACEHOLDER_EMOJI = "◈"

SECTION_NAMES = {
    "watchlist": {"movies": "Movies", "tv": "TV Shows", "anime": "Anime", "unclear": "Unclear"},
    "research": {"concepts": "Core Concepts", "data": "Key Data", "sources": "Sources",
                 "questions": "Open Questions"},
    "tasks": {"urgent": "Urgent", "pending": "To Do", "done": "Done", "blocked": "Blocked"},
    "documentation": {"overview": "Overview", "installation": "Installation", "usage": "Usage",
                      "api": "API Reference", "config": "Configuration", "notes": "Notes"},
    "notes": {"main": "Notes", "unclear": "Unclear"},
}


def section_name(key: str, content_type: str) -> str:
    """Display title for a section key, e.g. ``tv`` -> ``TV Shows``."""
    name = SECTION_NAMES.get(content_type, {}).get(key)
    return name or title_case(key.replace("_", " "))


def build_sections(items: list[ClassifiedItem], profile: ContentTypeProfile) -> list[Section]:
    """Build non-empty sections: declared keys first, then extra keys as first seen."""
    groups: dict[str, list[ClassifiedItem]] = {}
    for item in items:
        key = item.section or item.category or "other"
        groups.setdefault(key, []).append(item)

    ordered = list(dict.fromkeys([*profile.section_keys, *groups]))

    sections = []
    for key in ordered:
        group = groups.get(key)
        if not group:
            continue
        definition = profile.section(key)
        sections.append(Section(
            title=section_name(key, profile.type),
            emoji=definition.emoji if definition else PLACEHOLDER_EMOJI,
            category=definition.category if definition else key,
            items=[SectionItem(name=i.name, note=i.note, is_new=i.is_new) for i in group],
        ))
    return sections
