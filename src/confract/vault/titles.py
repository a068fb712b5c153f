"""Pick a title and emoji for a processed document."""

import re

from ..models import ContentTypeProfile, Document
from ..text import title_case

_LEADING_MARKUP = re.compile(r"^[#*\-\s]+")


def generate_title(
    raw_input: str,
    profile: ContentTypeProfile,
    existing_document: Document | None = None,
) -> tuple[str, str]:
    """Return ``(title, emoji)``.

    Merging into an existing document never retitles it. Otherwise the
    first input line becomes the title when it is 4-59 characters long.
    """
    if existing_document is not None:
        return existing_document.title, existing_document.emoji or profile.emoji

    first_line = _LEADING_MARKUP.sub("", raw_input.split("\n", 1)[0]).strip()
    if 3 < len(first_line) < 60:
        return title_case(first_line), profile.emoji
    return profile.default_title, profile.emoji
