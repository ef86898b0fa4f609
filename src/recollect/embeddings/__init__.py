"""Embedding generation for semantic memory."""

from recollect.embeddings.client import EmbeddingProvider
from recollect.embeddings.factory import create_embedding_provider
from recollect.embeddings.ollama import OllamaEmbedding
from recollect.embeddings.sentence_transformer import SentenceTransformerEmbedding

__all__ = [
    "EmbeddingProvider",
    "OllamaEmbedding",
    "SentenceTransformerEmbedding",
    "create_embedding_provider",
]
