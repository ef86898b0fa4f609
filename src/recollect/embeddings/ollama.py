"""Ollama embedding provider (local, via Ollama API)."""

import asyncio
import logging

import httpx

from recollect.embeddings.client import bounded, l2_normalize
from recollect.exceptions import EmbeddingError, ProviderInitError, ProviderTimeout

logger = logging.getLogger(__name__)


class OllamaEmbedding:
    """Embedding generation using Ollama's embedding models.

    Alternative to sentence-transformers that uses Ollama's API.
    Ollama does not normalize its output, so vectors are scaled to unit
    length on the client side.
    """

    def __init__(
        self,
        model: str = "nomic-embed-text",
        host: str = "http://localhost:11434",
        timeout: float | None = 30,
    ):
        """Initialize Ollama embedding provider.

        Args:
            model: Ollama model name (e.g., "nomic-embed-text")
            host: Ollama server URL
            timeout: Request timeout in seconds
        """
        self._model = model
        self._host = host.rstrip("/")
        self._timeout = timeout
        self._dimension: int | None = None
        self._init_lock = asyncio.Lock()

    async def _request(self, client: httpx.AsyncClient, text: str) -> list[float]:
        response = await client.post(
            f"{self._host}/api/embeddings",
            json={"model": self._model, "prompt": text},
        )
        response.raise_for_status()
        embedding: list[float] = response.json()["embedding"]
        return embedding

    async def _embed_all(self, texts: list[str]) -> list[list[float]]:
        embeddings = []
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            for text in texts:
                embedding = await self._request(client, text)
                embeddings.append(l2_normalize(embedding))
        return embeddings

    async def initialize(self) -> None:
        """Send one test request to confirm the model is available.

        Raises:
            ProviderInitError: If the server is unreachable or the model is missing
        """
        if self._dimension is not None:
            return

        async with self._init_lock:
            if self._dimension is not None:
                return

            try:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    sample = await self._request(client, "initialize")
            except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
                raise ProviderInitError(
                    f"Ollama model {self._model} unavailable at {self._host}: {e}"
                ) from e

            self._dimension = len(sample)
            logger.info("Ollama embedding model %s ready (dimension=%s)", self._model, self._dimension)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of unit-length embedding vectors

        Raises:
            ProviderInitError: If the server cannot be reached on first use
            EmbeddingError: If a request fails
            ProviderTimeout: If the whole batch exceeds the timeout
        """
        if not texts:
            return []

        await self.initialize()

        try:
            return await bounded(
                self._embed_all(texts),
                self._timeout,
                f"Ollama embedding of {len(texts)} text(s)",
            )
        except ProviderTimeout:
            raise
        except httpx.TimeoutException as e:
            raise ProviderTimeout(f"Ollama embedding timed out after {self._timeout}s") from e
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            raise EmbeddingError(f"Ollama embedding failed: {e}") from e

    async def embed(self, text: str) -> list[float]:
        """Generate embedding for a single text.

        Args:
            text: Text string to embed

        Returns:
            Embedding vector
        """
        embeddings = await self.embed_batch([text])
        return embeddings[0]

    def is_initialized(self) -> bool:
        return self._dimension is not None

    @property
    def dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            # nomic-embed-text is known ahead of the first request
            if "nomic-embed-text" in self._model:
                return 768
            msg = "Dimension unknown until the provider is initialized"
            raise ValueError(msg)
        return self._dimension

    @property
    def model_name(self) -> str:
        """Get the name of the embedding model."""
        return self._model
