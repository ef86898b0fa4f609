"""Context retriever: the engine's interface to the chat application."""

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from recollect.config.schema import MemoryConfig
from recollect.embeddings.factory import create_embedding_provider
from recollect.memory.schema import Context, ConversationMessage, RetrievedMessage
from recollect.memory.utils import CharRatioEstimator, TokenEstimator, create_summary
from recollect.vector.store import InMemoryVectorStore

if TYPE_CHECKING:
    from recollect.config.schema import RecollectConfig
    from recollect.embeddings.client import EmbeddingProvider

logger = logging.getLogger(__name__)


class ContextRetriever:
    """Semantic conversation memory with token-bounded context assembly.

    Error policy:
    - ``initialize()`` propagates :class:`ProviderInitError`; without a
      model the feature is unavailable and the user should be told.
    - Everything per-message (adding turns, retrieving context) is
      best-effort: failures are logged and turned into empty results so
      the chat flow is never interrupted.
    """

    def __init__(
        self,
        embedding_provider: "EmbeddingProvider",
        config: MemoryConfig | None = None,
        token_estimator: TokenEstimator | None = None,
    ):
        """Initialize context retriever.

        Args:
            embedding_provider: Provider used for turns and queries
            config: Memory limits and retrieval thresholds (defaults if None)
            token_estimator: Token cost estimator (character ratio if None)
        """
        self.config = config or MemoryConfig()
        self.embedding_provider = embedding_provider
        self.vector_store = InMemoryVectorStore(
            embedding_provider,
            max_documents=self.config.max_documents,
        )
        self.token_estimator = token_estimator or CharRatioEstimator(
            self.config.avg_tokens_per_char
        )

    @classmethod
    def from_config(cls, config: "RecollectConfig") -> "ContextRetriever":
        """Build a retriever and its embedding provider from configuration."""
        return cls(create_embedding_provider(config.embeddings), config.memory)

    @property
    def packing_budget(self) -> int:
        """Tokens available for retrieved text after overhead and safety margin."""
        margin = round(self.config.max_context_tokens * self.config.safety_margin)
        budget = self.config.max_context_tokens - margin - self.config.overhead_tokens
        return max(budget, 0)

    async def initialize(self) -> None:
        """Make sure the embedding model is loaded. Safe to call repeatedly.

        Raises:
            ProviderInitError: If the embedding model cannot be loaded
        """
        await self.embedding_provider.initialize()

    async def add_message(self, text: str, role: str, message_id: str) -> None:
        """Remember a conversation turn. Never raises.

        Args:
            text: Turn content
            role: "user" or "assistant" ("expert" is accepted as assistant)
            message_id: ID of the originating chat message
        """
        if not text.strip():
            logger.debug("Skipping empty message %s", message_id)
            return

        try:
            await self.vector_store.insert(text, role, message_id)
        except Exception as e:
            logger.warning("Could not remember message %s: %s", message_id, e)

    async def get_relevant_context(self, query: str) -> Context:
        """Assemble the context block for a new query.

        Ranked results are accepted greedily in rank order while the running
        token estimate fits the packing budget. The first result that would
        overflow ends selection, even if a later, smaller one would fit.
        If results exist but none fit, a short summary of the top results
        is returned instead.

        Args:
            query: The user's new message

        Returns:
            Selected messages or a summary, with the estimated token cost.
            Empty if nothing relevant was found or retrieval failed.
        """
        try:
            results = await self.vector_store.search(
                query,
                top_k=self.config.top_k,
                min_score=self.config.min_score,
            )
        except Exception as e:
            logger.warning("Context retrieval failed, continuing without memory: %s", e)
            return Context()

        budget = self.packing_budget
        selected: list[RetrievedMessage] = []
        total_tokens = 0

        for result in results:
            cost = self.token_estimator.estimate(result.document.text)
            if total_tokens + cost > budget:
                break
            selected.append(RetrievedMessage.from_result(result))
            total_tokens += cost

        summary = None
        if not selected and results:
            summary = create_summary(
                results,
                max_results=self.config.summary_max_results,
                max_chars=self.config.summary_max_chars,
            )
            total_tokens = self.token_estimator.estimate(summary)

        logger.debug(
            "Context for query: %d of %d result(s), %d token(s)%s",
            len(selected),
            len(results),
            total_tokens,
            " (summary)" if summary else "",
        )
        return Context(relevant_messages=selected, summary=summary, total_tokens=total_tokens)

    async def rehydrate_from_messages(
        self,
        messages: Iterable[ConversationMessage | Mapping[str, Any]],
    ) -> int:
        """Replace memory with the messages of a stored conversation.

        Used when switching conversations. Messages are re-inserted in order;
        one that cannot be embedded is skipped rather than aborting the reload.

        Args:
            messages: Conversation messages (models or ``{id, text, role}`` dicts)

        Returns:
            Number of messages now held in memory

        Raises:
            ProviderInitError: If the embedding model cannot be loaded; memory
                is left untouched in that case
        """
        await self.initialize()
        self.vector_store.clear()

        skipped = 0
        for raw in messages:
            try:
                message = (
                    raw
                    if isinstance(raw, ConversationMessage)
                    else ConversationMessage.model_validate(raw)
                )
            except Exception as e:
                logger.warning("Skipping malformed message during rehydration: %s", e)
                skipped += 1
                continue

            if not message.text.strip():
                continue

            document = await self.vector_store.insert(message.text, message.role, message.id)
            if document is None:
                skipped += 1

        count = self.get_memory_size()
        logger.info("Rehydrated memory with %d message(s), %d skipped", count, skipped)
        return count

    async def clear_memory(self) -> None:
        """Forget every remembered turn."""
        self.vector_store.clear()

    def get_memory_size(self) -> int:
        return self.vector_store.get_document_count()
