"""Pydantic models for recollect.yaml configuration."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class MemoryConfig(BaseModel):
    """Semantic memory and context budget configuration.

    Values are fixed at startup; the section is frozen so a running
    retriever never sees its limits change underneath it.
    """

    model_config = ConfigDict(frozen=True)

    max_documents: int = Field(
        default=1000,
        description="Maximum number of embedded turns kept in memory (oldest are evicted)",
        ge=1,
    )
    max_context_tokens: int = Field(
        default=3000,
        description="Total estimated token budget for a retrieved context block",
        ge=1,
    )
    avg_tokens_per_char: float = Field(
        default=0.25,
        description="Character-to-token ratio used to estimate token cost",
        gt=0.0,
        le=1.0,
    )
    top_k: int = Field(
        default=6,
        description="Number of ranked results to consider for the context block",
        ge=1,
        le=100,
    )
    min_score: float = Field(
        default=0.35,
        description="Minimum cosine similarity for a turn to be considered relevant",
        ge=-1.0,
        le=1.0,
    )
    overhead_tokens: int = Field(
        default=300,
        description="Tokens reserved for prompt framing around the context block",
        ge=0,
    )
    safety_margin: float = Field(
        default=0.10,
        description="Fraction of the budget held back to absorb estimation error",
        ge=0.0,
        lt=1.0,
    )
    summary_max_results: int = Field(
        default=3,
        description="Number of top results folded into the fallback summary",
        ge=1,
    )
    summary_max_chars: int = Field(
        default=500,
        description="Maximum characters of result text in the fallback summary",
        ge=1,
    )


class EmbeddingConfig(BaseModel):
    """Embedding provider configuration."""

    provider: Literal["sentence-transformers", "ollama"] = Field(
        default="sentence-transformers",
        description="Embedding provider: 'sentence-transformers' (local) or 'ollama'",
    )
    model: str | None = Field(
        default=None,
        description="Embedding model name (None uses the provider's default model)",
    )
    device: str | None = Field(
        default=None,
        description="Device for local models ('cpu', 'cuda', 'mps' or None for auto)",
    )
    cache_dir: str | None = Field(
        default=None,
        description="Directory to cache downloaded models (None uses the library default)",
    )
    ollama_host: str = Field(
        default="http://localhost:11434",
        description="Ollama server URL (ollama provider only)",
    )
    timeout: float | None = Field(
        default=30.0,
        description="Timeout in seconds for a single embedding call (None disables it)",
        gt=0.0,
    )


class RecollectConfig(BaseModel):
    """Root configuration model for recollect."""

    memory: MemoryConfig = Field(default_factory=MemoryConfig)
    embeddings: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
