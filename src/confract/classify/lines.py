"""Assign each line to a section of the detected content type."""

from ..models import ClassifiedItem, ContentTypeProfile, Line
from ..text import title_case, truncate_words
from .media import lookup_media

LONG_LINE_WORDS = 8
TRUNCATED_NAME_WORDS = 6
DEFAULT_SECTION = "main"
DEFAULT_CATEGORY = "notes"


def best_section(normalized: str, profile: ContentTypeProfile) -> str:
    """Section key with the most keyword hits; first declared wins ties and all-zero."""
    best_key, best_score = None, -1
    for definition in profile.sections:
        score = sum(1 for kw in definition.keywords if kw in normalized)
        if score > best_score:
            best_key, best_score = definition.key, score
    return best_key or DEFAULT_SECTION


def classify_line(line: Line, profile: ContentTypeProfile) -> ClassifiedItem:
    """Classify one line under ``profile``."""
    if profile.type == "watchlist":
        # Offline knowledge base, no embedding needed
        category = lookup_media(line.normalized)
        return ClassifiedItem(
            name=title_case(line.text),
            section=category,
            category=category,
            raw=line.normalized,
        )

    key = best_section(line.normalized, profile)
    definition = profile.section(key)
    is_long = line.word_count > LONG_LINE_WORDS

    return ClassifiedItem(
        name=truncate_words(line.text, TRUNCATED_NAME_WORDS) if is_long else title_case(line.text),
        note=line.text if is_long else "",
        section=key,
        category=definition.category if definition else DEFAULT_CATEGORY,
        raw=line.normalized,
    )


def classify_lines(lines: list[Line], profile: ContentTypeProfile) -> list[ClassifiedItem]:
    """Classify every line, preserving input order."""
    return [classify_line(line, profile) for line in lines]
