"""Retrieval-augmented conversation memory.

Turns embedded conversation history into a token-bounded context block for
a downstream language-model request.

Components:

- :class:`ContextRetriever` - Facade used by the chat application
- :class:`Context` - Retrieved messages or a fallback summary, with a token estimate
- :class:`CharRatioEstimator` - Character-ratio token estimation
"""

from recollect.memory.retriever import ContextRetriever
from recollect.memory.schema import Context, ConversationMessage, RetrievedMessage
from recollect.memory.utils import CharRatioEstimator, TokenEstimator, create_summary

__all__ = [
    "CharRatioEstimator",
    "Context",
    "ContextRetriever",
    "ConversationMessage",
    "RetrievedMessage",
    "TokenEstimator",
    "create_summary",
]
