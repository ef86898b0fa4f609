"""Bounded in-memory vector store with brute-force cosine search."""

import itertools
import logging
import time
import uuid
from typing import TYPE_CHECKING

from recollect.exceptions import StoreInvariantViolation
from recollect.vector.schema import Document, SearchResult, normalize_role
from recollect.vector.similarity import cosine_similarity

if TYPE_CHECKING:
    from recollect.embeddings.client import EmbeddingProvider

logger = logging.getLogger(__name__)

DEFAULT_MAX_DOCUMENTS = 1000


class InMemoryVectorStore:
    """Capacity-bounded collection of embedded conversation turns.

    Search is a linear scan over every stored vector, O(n * D) per query.
    At the default capacity of 1000 documents this is well under a
    millisecond of numpy work; past roughly 100k documents an approximate
    index (HNSW, e.g. ChromaDB) would be the better trade.

    Concurrency: ``insert`` and ``search`` suspend only while the embedding
    provider runs. Callers racing each other may therefore search a
    snapshot that misses a concurrent insert. The append and eviction step
    runs without suspending, so capacity is never exceeded once an insert
    returns. An insert whose embedding was still running when ``clear()``
    was called is dropped, so a turn from a previous conversation never
    lands in memory rebuilt after the clear.
    """

    def __init__(
        self,
        embedding_provider: "EmbeddingProvider",
        max_documents: int = DEFAULT_MAX_DOCUMENTS,
    ):
        """Initialize vector store.

        Args:
            embedding_provider: Provider used to embed inserted texts and queries
            max_documents: Maximum documents kept before evicting the oldest
        """
        if max_documents < 1:
            raise ValueError("max_documents must be at least 1")

        self.embedding_provider = embedding_provider
        self.max_documents = max_documents
        self._documents: list[Document] = []
        self._dimension: int | None = None
        self._sequence = itertools.count()
        self._last_timestamp = 0.0
        self._generation = 0  # bumped by clear()

    def _next_timestamp(self) -> float:
        # Wall clock can step backwards; keep insertion times non-decreasing
        self._last_timestamp = max(time.time(), self._last_timestamp)
        return self._last_timestamp

    def _check_dimension(self, vector: list[float]) -> None:
        if self._dimension is None:
            self._dimension = len(vector)
        elif len(vector) != self._dimension:
            msg = f"Vector has dimension {len(vector)}, store holds dimension {self._dimension}"
            raise StoreInvariantViolation(msg)

    def _evict(self) -> None:
        """Drop the oldest documents until the store is back within capacity."""
        ordered = sorted(self._documents, key=lambda doc: (doc.timestamp, doc.sequence))
        evicted = len(ordered) - self.max_documents
        self._documents = ordered[evicted:]
        logger.debug("Evicted %d oldest document(s)", evicted)

    async def insert(self, text: str, role: str, source_message_id: str) -> Document | None:
        """Embed a turn and add it to the store.

        Embedding failures are logged and the insert is abandoned with the
        store unchanged; memory is best-effort and must not block the chat.

        Args:
            text: Turn content
            role: Sender ("user", "assistant" or the "expert" alias)
            source_message_id: ID of the originating chat message

        Returns:
            The stored document, or None if embedding failed or the store
            was cleared while embedding

        Raises:
            ValueError: If the role is not recognised
        """
        stored_role = normalize_role(role)
        generation = self._generation

        try:
            vector = await self.embedding_provider.embed(text)
        except Exception as e:
            logger.warning("Failed to add message %s to vector store: %s", source_message_id, e)
            return None

        if generation != self._generation:
            logger.debug("Dropping message %s embedded before the store was cleared", source_message_id)
            return None

        try:
            self._check_dimension(vector)
        except StoreInvariantViolation as e:
            logger.warning("Failed to add message %s to vector store: %s", source_message_id, e)
            return None

        document = Document(
            id=f"doc_{uuid.uuid4().hex}",
            text=text,
            vector=tuple(vector),
            timestamp=self._next_timestamp(),
            sequence=next(self._sequence),
            role=stored_role,
            source_message_id=source_message_id,
        )
        self._documents.append(document)

        if len(self._documents) > self.max_documents:
            self._evict()

        return document

    async def search(
        self,
        query: str,
        top_k: int = 5,
        min_score: float = 0.3,
    ) -> list[SearchResult]:
        """Find the stored documents most similar to a query.

        Args:
            query: Query text
            top_k: Maximum number of results
            min_score: Minimum cosine similarity to keep a result

        Returns:
            Results sorted by descending score; equal scores keep store order

        Raises:
            EmbeddingError: If the query cannot be embedded
        """
        if not self._documents:
            return []

        query_vector = await self.embedding_provider.embed(query)

        # Scan a snapshot; the list may be replaced while we were suspended
        snapshot = list(self._documents)
        results = [
            SearchResult(document=doc, score=cosine_similarity(query_vector, doc.vector))
            for doc in snapshot
        ]
        results = [r for r in results if r.score >= min_score]
        results.sort(key=lambda r: r.score, reverse=True)

        return results[: max(top_k, 0)]

    def documents(self) -> tuple[Document, ...]:
        """Read-only snapshot of stored documents in store order."""
        return tuple(self._documents)

    def clear(self) -> None:
        """Remove every document. Irreversible."""
        self._documents = []
        self._dimension = None
        self._generation += 1

    def get_document_count(self) -> int:
        return len(self._documents)

    @property
    def dimension(self) -> int | None:
        """Dimension of stored vectors, or None while the store is empty."""
        return self._dimension
