"""Tests for Ollama embedding provider."""

import asyncio

import httpx
import pytest
import respx
from httpx import Response

from recollect.embeddings.ollama import OllamaEmbedding
from recollect.exceptions import EmbeddingError, ProviderInitError, ProviderTimeout

EMBED_URL = "http://localhost:11434/api/embeddings"


@pytest.fixture
def mock_ollama():
    """Mock Ollama API responses."""
    with respx.mock:
        yield


@pytest.fixture
def embedding_provider():
    """Create an Ollama embedding provider."""
    return OllamaEmbedding(
        model="nomic-embed-text",
        host="http://localhost:11434",
        timeout=30,
    )


@pytest.mark.asyncio
async def test_initialize_queries_server(mock_ollama, embedding_provider):
    """Test that initialize learns the dimension from a test request."""
    route = respx.post(EMBED_URL).mock(return_value=Response(200, json={"embedding": [0.5] * 768}))

    assert embedding_provider.is_initialized() is False
    await embedding_provider.initialize()
    await embedding_provider.initialize()

    assert embedding_provider.is_initialized() is True
    assert embedding_provider.dimension == 768
    assert route.call_count == 1


@pytest.mark.asyncio
async def test_initialize_failure_raises_init_error(mock_ollama, embedding_provider):
    """Test that an unreachable server is a ProviderInitError."""
    respx.post(EMBED_URL).mock(side_effect=httpx.ConnectError("connection refused"))

    with pytest.raises(ProviderInitError):
        await embedding_provider.initialize()
    assert embedding_provider.is_initialized() is False


@pytest.mark.asyncio
async def test_initialize_missing_model(mock_ollama, embedding_provider):
    """Test that a 404 for an unknown model is a ProviderInitError."""
    respx.post(EMBED_URL).mock(return_value=Response(404, json={"error": "model not found"}))

    with pytest.raises(ProviderInitError):
        await embedding_provider.initialize()


@pytest.mark.asyncio
async def test_embed_initializes_and_normalizes(mock_ollama, embedding_provider):
    """Test that embed initializes lazily and returns a unit vector."""
    route = respx.post(EMBED_URL).mock(return_value=Response(200, json={"embedding": [3.0, 4.0]}))

    embedding = await embedding_provider.embed("This is a test sentence.")

    assert embedding == pytest.approx([0.6, 0.8])
    assert embedding_provider.is_initialized() is True
    assert route.call_count == 2


@pytest.mark.asyncio
async def test_embed_batch(mock_ollama, embedding_provider):
    """Test embedding multiple texts."""
    respx.post(EMBED_URL).mock(return_value=Response(200, json={"embedding": [0.1] * 768}))

    texts = ["This is the first sentence.", "This is the second sentence."]
    embeddings = await embedding_provider.embed_batch(texts)

    assert len(embeddings) == len(texts)
    assert all(len(emb) == 768 for emb in embeddings)


@pytest.mark.asyncio
async def test_embed_batch_empty(embedding_provider):
    """Test embedding an empty list makes no requests."""
    assert await embedding_provider.embed_batch([]) == []
    assert embedding_provider.is_initialized() is False


@pytest.mark.asyncio
async def test_embed_http_error_raises_embedding_error(mock_ollama, embedding_provider):
    """Test that a failed request after initialization is an EmbeddingError."""
    respx.post(EMBED_URL).mock(
        side_effect=[
            Response(200, json={"embedding": [1.0, 0.0]}),
            Response(500, text="Internal Server Error"),
        ]
    )
    await embedding_provider.initialize()

    with pytest.raises(EmbeddingError):
        await embedding_provider.embed("Test")


@pytest.mark.asyncio
async def test_embed_timeout_raises_provider_timeout(mock_ollama, embedding_provider):
    """Test that a timed-out request is a ProviderTimeout."""
    respx.post(EMBED_URL).mock(
        side_effect=[
            Response(200, json={"embedding": [1.0, 0.0]}),
            httpx.ReadTimeout("timed out"),
        ]
    )
    await embedding_provider.initialize()

    with pytest.raises(ProviderTimeout):
        await embedding_provider.embed("Test")


def test_dimension_known_for_nomic(embedding_provider):
    """Test that nomic-embed-text reports its dimension before initialization."""
    assert embedding_provider.dimension == 768


def test_dimension_unknown_for_other_models():
    """Test that other models need initialization to report a dimension."""
    provider = OllamaEmbedding(model="custom-embed-model")
    with pytest.raises(ValueError):
        _ = provider.dimension


def test_model_name():
    """Test that model_name returns the configured model."""
    assert OllamaEmbedding(model="custom-embed-model").model_name == "custom-embed-model"


def test_host_trailing_slash():
    """Test that trailing slash is stripped from host."""
    provider = OllamaEmbedding(host="http://localhost:11434/")
    assert provider._host == "http://localhost:11434"


@pytest.mark.asyncio
async def test_embed_non_object_body_raises_embedding_error(mock_ollama, embedding_provider):
    """Test that a JSON list instead of an object is an EmbeddingError."""
    respx.post(EMBED_URL).mock(
        side_effect=[
            Response(200, json={"embedding": [1.0, 0.0]}),
            Response(200, json=[1.0, 0.0]),
        ]
    )
    await embedding_provider.initialize()

    with pytest.raises(EmbeddingError):
        await embedding_provider.embed("Test")


@pytest.mark.asyncio
async def test_initialize_non_object_body_raises_init_error(mock_ollama, embedding_provider):
    """Test that a malformed test response is a ProviderInitError."""
    respx.post(EMBED_URL).mock(return_value=Response(200, json="not an object"))

    with pytest.raises(ProviderInitError):
        await embedding_provider.initialize()


@pytest.mark.asyncio
async def test_embed_batch_bounded_by_total_timeout(monkeypatch):
    """Test that the timeout bounds the whole batch, not each request phase."""
    provider = OllamaEmbedding(timeout=0.1)
    provider._dimension = 2

    async def slow_request(client, text):
        await asyncio.sleep(0.06)
        return [1.0, 0.0]

    monkeypatch.setattr(provider, "_request", slow_request)

    with pytest.raises(ProviderTimeout):
        await provider.embed_batch(["one", "two", "three"])
