"""Factory function for creating embedding providers from configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recollect.embeddings.ollama import OllamaEmbedding
from recollect.embeddings.sentence_transformer import SentenceTransformerEmbedding

if TYPE_CHECKING:
    from recollect.config.schema import EmbeddingConfig
    from recollect.embeddings.client import EmbeddingProvider

DEFAULT_SENTENCE_TRANSFORMER_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_OLLAMA_MODEL = "nomic-embed-text"


def create_embedding_provider(config: EmbeddingConfig) -> EmbeddingProvider:
    """Create an embedding provider based on configuration.

    Construction is cheap; the model is only acquired on ``initialize()``
    or the first ``embed()``.

    Args:
        config: Embedding section of the recollect configuration.

    Returns:
        An embedding provider for the configured backend.

    Raises:
        ValueError: If the provider is not recognised.
    """
    if config.provider == "sentence-transformers":
        return SentenceTransformerEmbedding(
            model_name=config.model or DEFAULT_SENTENCE_TRANSFORMER_MODEL,
            device=config.device,
            cache_dir=config.cache_dir,
            timeout=config.timeout,
        )
    elif config.provider == "ollama":
        return OllamaEmbedding(
            model=config.model or DEFAULT_OLLAMA_MODEL,
            host=config.ollama_host,
            timeout=config.timeout,
        )
    else:
        raise ValueError(f"Unknown embedding provider: {config.provider}")
