"""Recollect - Semantic conversation memory for chat assistants.

Recollect embeds conversation turns into vectors, ranks them against a new
query and packs the best matches into a token-bounded context block that
can be prepended to a downstream language-model request.

Key modules:

- :mod:`recollect.embeddings` - Embedding providers (sentence-transformers, Ollama)
- :mod:`recollect.vector` - Bounded in-memory vector store with cosine search
- :mod:`recollect.memory` - Context retriever, token budgeting and data models
- :mod:`recollect.config` - YAML configuration loading and validation
"""

__version__ = "0.1.0"
