"""Derives URL fragment anchors for breaking change and deprecation sections."""

import re

ANCHOR_SEPARATOR = "-"
ANCHOR_STOP_WORDS = frozenset({"the", "a", "an", "now", "is"})

_NON_WORD_PATTERN = re.compile(r"\W+")


def generate_anchor(title: str | None) -> str:
    """Generate a deterministic anchor slug from a title.

    Non-word characters become separators and stop words are dropped, so
    "The Quick Fox" becomes "quick-fox". Anchors are always recomputed from the
    title; they are never stored on their own.
    """
    if not title:
        return ""
    words = _NON_WORD_PATTERN.sub(ANCHOR_SEPARATOR, title).strip(ANCHOR_SEPARATOR).split(ANCHOR_SEPARATOR)
    return ANCHOR_SEPARATOR.join(word.lower() for word in words if word and word.lower() not in ANCHOR_STOP_WORDS)
