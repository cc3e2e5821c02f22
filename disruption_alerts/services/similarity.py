"""Word-set (Jaccard) similarity between two short texts."""

from __future__ import annotations

from typing import FrozenSet


def _tokens(text: str) -> FrozenSet[str]:
    return frozenset((text or "").lower().split())


def text_similarity(text_a: str, text_b: str) -> float:
    """Return ``|A ∩ B| / |A ∪ B|`` over the lower-cased whitespace tokens.

    Two empty texts have similarity ``0.0``. No stemming or stop-word removal
    is applied.
    """
    words_a = _tokens(text_a)
    words_b = _tokens(text_b)
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


__all__ = ["text_similarity"]
