"""Split pasted text into candidate line items."""

import re
from collections.abc import Iterator

from ..models import Line
from ..text import normalize, word_count

MAX_LINE_CHARS = 400

# Newlines, semicolons, and a comma right before a capitalized word
# ("Inception, Dune, Arrival").
_SPLIT = re.compile(r"\n|(?<=\w),\s*(?=[A-Z])|;")

# Leading bullets, arrows, heading markers and "1." / "2)" style numbering.
_LEADING_MARKERS = re.compile(r"^(?:[\s\-–—•*▪·◦▸►→>#]+|\d+[.)\]:](?=\s|$))+")

_BARE_URL = re.compile(r"^https?://\S+$", re.IGNORECASE)


def clean_segment(segment: str) -> str:
    """Strip leading list markers and surrounding whitespace."""
    return _LEADING_MARKERS.sub("", segment).strip()


def iter_lines(raw_input: str, max_line_chars: int = MAX_LINE_CHARS) -> Iterator[Line]:
    """Yield usable lines from raw input in input order.

    Segments that are empty, a single character, longer than
    ``max_line_chars`` or a bare URL are dropped.
    """
    for segment in _SPLIT.split(raw_input):
        text = clean_segment(segment)
        if len(text) <= 1 or len(text) > max_line_chars:
            continue
        if _BARE_URL.match(text):
            continue
        yield Line(text=text, normalized=normalize(text), word_count=word_count(text))


def segment(raw_input: str, max_line_chars: int = MAX_LINE_CHARS) -> list[Line]:
    """Split raw input into a list of lines."""
    return list(iter_lines(raw_input, max_line_chars=max_line_chars))
