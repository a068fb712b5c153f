"""Detect what kind of content a paste is by keyword scoring."""

import logging

from ..models import Detection, Line
from ..text import normalize
from .profiles import FALLBACK, PROFILES, RESEARCH, DOCUMENTATION, WATCHLIST

logger = logging.getLogger(__name__)

SHORT_LINE_WORDS = 5
LONG_LINE_WORDS = 15


def average_words(lines: list[Line]) -> float:
    """Mean word count per line (0 for no lines)."""
    return sum(line.word_count for line in lines) / (len(lines) or 1)


def detect_content_type(raw_input: str, lines: list[Line]) -> Detection:
    """Score every profile against the whole input and pick one.

    Each keyword found as a substring of the normalized input counts once.
    Short lines favour a watchlist; long lines favour research and
    documentation. Ties go to the earliest profile, and a best score of
    zero falls back to general notes.
    """
    text = normalize(raw_input)
    scores = {
        profile.type: sum(1 for kw in profile.keywords if kw in text)
        for profile in PROFILES
    }

    avg = average_words(lines)
    if avg < SHORT_LINE_WORDS:
        scores[WATCHLIST.type] += 3
    if avg > LONG_LINE_WORDS:
        scores[RESEARCH.type] += 2
        scores[DOCUMENTATION.type] += 1

    best = PROFILES[0]
    for profile in PROFILES[1:]:
        if scores[profile.type] > scores[best.type]:
            best = profile
    if scores[best.type] <= 0:
        best = FALLBACK

    logger.debug(f"Detected {best.type} (avg {avg:.1f} words/line, scores {scores})")
    return Detection(profile=best, avg_words=avg, scores=scores)
