"""Cosine similarity between embedding vectors."""

import logging
import math
from collections.abc import Sequence

import numpy as np

logger = logging.getLogger(__name__)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute dot(a, b) / (|a| * |b|).

    Vectors of different length, zero-norm vectors and vectors holding NaN
    or infinite components score 0.0 instead of raising. The result is clipped to [-1, 1] to absorb rounding error.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Similarity in [-1, 1]
    """
    if len(a) != len(b):
        logger.debug("Dimension mismatch in similarity (%d != %d), scoring 0", len(a), len(b))
        return 0.0

    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)

    norm_a = float(np.linalg.norm(vec_a))
    norm_b = float(np.linalg.norm(vec_b))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    similarity = float(np.dot(vec_a, vec_b)) / (norm_a * norm_b)
    if not math.isfinite(similarity):
        logger.debug("Non-finite similarity, scoring 0")
        return 0.0
    return max(-1.0, min(1.0, similarity))
