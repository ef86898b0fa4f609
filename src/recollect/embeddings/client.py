"""Abstract embedding provider interface."""

import asyncio
from collections.abc import Awaitable
from typing import Protocol, TypeVar

import numpy as np

from recollect.exceptions import ProviderTimeout

T = TypeVar("T")


class EmbeddingProvider(Protocol):
    """Protocol for embedding providers.

    Providers are lazily initialized: ``initialize()`` performs the one-time
    model acquisition and ``embed()`` triggers it on first use. Returned
    vectors are unit length so cosine similarity is comparable across calls.
    """

    async def initialize(self) -> None:
        """Acquire the model. Idempotent; concurrent callers share one load.

        Raises:
            ProviderInitError: If the model cannot be loaded
        """
        ...

    async def embed(self, text: str) -> list[float]:
        """Generate a normalized embedding for a single text.

        Args:
            text: Text string to embed

        Returns:
            Embedding vector

        Raises:
            ProviderInitError: If lazy initialization fails
            EmbeddingError: If the provider fails to embed the text
        """
        ...

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate normalized embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of embedding vectors (one per input text)
        """
        ...

    def is_initialized(self) -> bool:
        """Return True once the model has been acquired."""
        ...

    @property
    def dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        ...

    @property
    def model_name(self) -> str:
        """Get the name of the embedding model."""
        ...


def l2_normalize(vector: list[float]) -> list[float]:
    """Scale a vector to unit length. Zero vectors are returned unchanged.

    Args:
        vector: Raw embedding

    Returns:
        Unit-length embedding
    """
    arr = np.asarray(vector, dtype=np.float64)
    norm = float(np.linalg.norm(arr))
    if norm == 0.0:
        return arr.tolist()
    normalized: list[float] = (arr / norm).tolist()
    return normalized


async def bounded(awaitable: Awaitable[T], timeout: float | None, what: str) -> T:
    """Await with an optional timeout, raising ProviderTimeout on expiry.

    Args:
        awaitable: The embedding call to wait for
        timeout: Seconds to wait (None waits indefinitely)
        what: Short description used in the error message

    Returns:
        The awaited result
    """
    if timeout is None:
        return await awaitable
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise ProviderTimeout(f"{what} timed out after {timeout}s") from e
