"""Pytest configuration and shared fixtures."""

import asyncio
import re
import zlib

import numpy as np
import pytest

from recollect.config.schema import MemoryConfig, RecollectConfig
from recollect.exceptions import EmbeddingError, ProviderInitError

_WORD = re.compile(r"[a-z0-9]+")


class KeywordEmbedding:
    """Deterministic bag-of-words embedding for tests.

    Each word is hashed into one of ``dim`` buckets; texts that share
    words point in similar directions.
    """

    def __init__(self, dim: int = 256, fail_on: set[str] | None = None, delay: float = 0.0):
        self.dim = dim
        self.fail_on = fail_on or set()
        self.delay = delay
        self.calls: list[str] = []
        self.init_calls = 0
        self._initialized = False

    async def initialize(self) -> None:
        if self._initialized:
            return
        self.init_calls += 1
        self._initialized = True

    async def embed(self, text: str) -> list[float]:
        await self.initialize()
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if text in self.fail_on:
            raise EmbeddingError(f"cannot embed {text!r}")
        vec = np.zeros(self.dim)
        for word in _WORD.findall(text.lower()):
            vec[zlib.crc32(word.encode()) % self.dim] += 1.0
        norm = np.linalg.norm(vec)
        return (vec / norm).tolist() if norm else vec.tolist()

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        return [await self.embed(t) for t in texts]

    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def dimension(self) -> int:
        return self.dim

    @property
    def model_name(self) -> str:
        return "keyword-test"


class ConstantEmbedding(KeywordEmbedding):
    """Maps every text to the same unit vector (every pair scores 1.0)."""

    async def embed(self, text: str) -> list[float]:
        await self.initialize()
        self.calls.append(text)
        if text in self.fail_on:
            raise EmbeddingError(f"cannot embed {text!r}")
        return [1.0] + [0.0] * (self.dim - 1)


class BrokenEmbedding(KeywordEmbedding):
    """Provider whose model can never be loaded."""

    async def initialize(self) -> None:
        self.init_calls += 1
        raise ProviderInitError("model download failed")

    async def embed(self, text: str) -> list[float]:
        await self.initialize()
        return []


@pytest.fixture
def keyword_provider() -> KeywordEmbedding:
    """Bag-of-words embedding provider."""
    return KeywordEmbedding()


@pytest.fixture
def constant_provider() -> ConstantEmbedding:
    """Provider that scores every document 1.0 against every query."""
    return ConstantEmbedding()


@pytest.fixture
def broken_provider() -> BrokenEmbedding:
    """Provider that fails to initialize."""
    return BrokenEmbedding()


@pytest.fixture
def make_keyword_provider():
    """Factory for keyword providers with custom failure behaviour."""
    return KeywordEmbedding


@pytest.fixture
def default_config() -> RecollectConfig:
    """Provide a default configuration for tests."""
    return RecollectConfig()


@pytest.fixture
def memory_config() -> MemoryConfig:
    """Provide default memory limits for tests."""
    return MemoryConfig()


@pytest.fixture
def make_constant_provider():
    """Factory for constant providers with custom failure behaviour."""
    return ConstantEmbedding
