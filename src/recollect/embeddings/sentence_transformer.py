"""Sentence-transformers embedding provider (local, privacy-first)."""

import asyncio
import logging
from typing import Any

import numpy as np

from recollect.embeddings.client import bounded
from recollect.exceptions import EmbeddingError, ProviderInitError

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedding:
    """Local embedding generation using sentence-transformers.

    This is the default provider for recollect:
    - Fully local execution (no API calls)
    - Mean-pooled, L2-normalized sentence embeddings
    - Model loading and inference run in a worker thread so the event loop
      stays responsive
    """

    def __init__(
        self,
        model_name: str = "sentence-transformers/all-MiniLM-L6-v2",
        device: str | None = None,
        cache_dir: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize sentence-transformers provider.

        Args:
            model_name: HuggingFace model identifier
            device: Device to run on ("cuda", "mps", "cpu", or None for auto)
            cache_dir: Directory to cache models (None uses default)
            timeout: Seconds allowed per embedding call (None for no limit)
        """
        self._model_name = model_name
        self._device = device
        self._cache_dir = cache_dir
        self._timeout = timeout
        self._model: Any = None
        self._dimension: int | None = None
        self._init_lock = asyncio.Lock()

    def _load_model(self) -> Any:
        """Load the sentence-transformers model (blocking)."""
        try:
            from sentence_transformers import SentenceTransformer  # type: ignore[import-not-found]
        except ImportError as e:
            msg = (
                "sentence-transformers is required for local embeddings. "
                "Install with: pip install sentence-transformers"
            )
            raise ProviderInitError(msg) from e

        logger.info("Loading embedding model: %s (device=%s)", self._model_name, self._device)
        return SentenceTransformer(
            self._model_name,
            device=self._device,
            cache_folder=self._cache_dir,
        )

    async def initialize(self) -> None:
        """Load the model once; later calls are no-ops.

        Raises:
            ProviderInitError: If the model cannot be loaded
        """
        if self._model is not None:
            return

        async with self._init_lock:
            # Another caller may have finished loading while we waited
            if self._model is not None:
                return

            loop = asyncio.get_running_loop()
            try:
                model = await loop.run_in_executor(None, self._load_model)
            except ProviderInitError:
                raise
            except Exception as e:
                raise ProviderInitError(
                    f"Failed to load embedding model {self._model_name}: {e}"
                ) from e

            self._dimension = model.get_sentence_embedding_dimension()
            self._model = model
            logger.info("Embedding model loaded (dimension=%s)", self._dimension)

    def _encode(self, texts: list[str]) -> Any:
        return self._model.encode(texts, normalize_embeddings=True)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for a list of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            List of unit-length embedding vectors

        Raises:
            ProviderInitError: If the model cannot be loaded
            EmbeddingError: If encoding fails or times out
        """
        if not texts:
            return []

        await self.initialize()

        loop = asyncio.get_running_loop()
        try:
            embeddings_raw = await bounded(
                loop.run_in_executor(None, self._encode, texts),
                self._timeout,
                f"Embedding {len(texts)} text(s)",
            )
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Embedding failed: {e}") from e

        if isinstance(embeddings_raw, np.ndarray):
            embeddings: list[list[float]] = embeddings_raw.tolist()
            return embeddings
        return [emb.tolist() if isinstance(emb, np.ndarray) else emb for emb in embeddings_raw]

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
        return self._model is not None

    @property
    def dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        if self._dimension is None:
            msg = "Dimension unknown until the model is initialized"
            raise ValueError(msg)
        return self._dimension

    @property
    def model_name(self) -> str:
        """Get the name of the embedding model."""
        return self._model_name
