"""Small text helpers shared by the pipeline stages."""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")

# Lowercased by title_case unless they start the string.
MINOR_WORDS = frozenset({
    "a", "an", "the", "and", "but", "or", "for", "nor",
    "on", "at", "to", "by", "in", "of", "up", "vs",
})


def normalize(text: str) -> str:
    """Lowercase and strip everything but ASCII letters, digits and whitespace."""
    return _NON_ALNUM.sub("", str(text).lower()).strip()


def word_count(text: str) -> int:
    return len(str(text).split())


def title_case(text: str) -> str:
    """Capitalize each word except minor words that are not first."""
    words = str(text).split(" ")
    out = []
    for i, word in enumerate(words):
        if i == 0 or word.lower() not in MINOR_WORDS:
            out.append(word[:1].upper() + word[1:].lower())
        else:
            out.append(word.lower())
    return " ".join(out)


def truncate_words(text: str, words: int) -> str:
    """First ``words`` words followed by an ellipsis, or the title-cased text if short."""
    parts = str(text).split()
    if len(parts) > words:
        return " ".join(parts[:words]) + "…"
    return title_case(text)
