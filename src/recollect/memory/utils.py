"""Token estimation and summary helpers."""

import math
from collections.abc import Sequence
from typing import Protocol

from recollect.vector.schema import SearchResult

SUMMARY_PREFIX = "Previous context: "
SUMMARY_ELLIPSIS = "..."


class TokenEstimator(Protocol):
    """Anything that can estimate the token cost of a text."""

    def estimate(self, text: str) -> int: ...


class CharRatioEstimator:
    """Estimate tokens as ``ceil(len(text) * ratio)``.

    Not a tokenizer: a fixed ratio of 0.25 (about four characters per
    token) is close enough for English prose. A real tokenizer can be
    dropped in anywhere a :class:`TokenEstimator` is accepted.
    """

    def __init__(self, tokens_per_char: float = 0.25):
        if tokens_per_char <= 0:
            raise ValueError("tokens_per_char must be positive")
        self.tokens_per_char = tokens_per_char

    def estimate(self, text: str) -> int:
        return math.ceil(len(text) * self.tokens_per_char)


def create_summary(
    results: Sequence[SearchResult],
    max_results: int = 3,
    max_chars: int = 500,
) -> str:
    """Condense the top results into a short summary string.

    Concatenates the text of up to ``max_results`` results, truncates it to
    ``max_chars`` characters and frames it as previous context.

    Args:
        results: Ranked search results
        max_results: Number of leading results to include
        max_chars: Maximum characters of concatenated text

    Returns:
        Summary string
    """
    texts = [r.document.text for r in results[:max_results]]
    return f"{SUMMARY_PREFIX}{' '.join(texts)[:max_chars]}{SUMMARY_ELLIPSIS}"
