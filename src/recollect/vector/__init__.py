"""Bounded in-memory vector store for semantic search."""

from recollect.vector.schema import Document, Role, SearchResult, normalize_role
from recollect.vector.similarity import cosine_similarity
from recollect.vector.store import DEFAULT_MAX_DOCUMENTS, InMemoryVectorStore

__all__ = [
    "DEFAULT_MAX_DOCUMENTS",
    "Document",
    "InMemoryVectorStore",
    "Role",
    "SearchResult",
    "cosine_similarity",
    "normalize_role",
]
