"""Tests for embedding provider factory."""

import pytest

from recollect.config.schema import EmbeddingConfig
from recollect.embeddings.factory import create_embedding_provider
from recollect.embeddings.ollama import OllamaEmbedding
from recollect.embeddings.sentence_transformer import SentenceTransformerEmbedding


def test_default_is_sentence_transformers():
    """Test that the default config builds the local provider."""
    provider = create_embedding_provider(EmbeddingConfig())

    assert isinstance(provider, SentenceTransformerEmbedding)
    assert provider.model_name == "sentence-transformers/all-MiniLM-L6-v2"
    assert provider.is_initialized() is False


def test_sentence_transformers_custom_model():
    """Test that model, device and timeout are passed through."""
    config = EmbeddingConfig(model="custom/model", device="cpu", timeout=5)
    provider = create_embedding_provider(config)

    assert provider.model_name == "custom/model"
    assert provider._device == "cpu"
    assert provider._timeout == 5


def test_ollama_provider():
    """Test that the ollama provider gets its own default model."""
    config = EmbeddingConfig(provider="ollama", ollama_host="http://gpu-box:11434/")
    provider = create_embedding_provider(config)

    assert isinstance(provider, OllamaEmbedding)
    assert provider.model_name == "nomic-embed-text"
    assert provider._host == "http://gpu-box:11434"


def test_unknown_provider():
    """Test that an unknown provider is rejected."""
    config = EmbeddingConfig.model_construct(provider="word2vec")
    with pytest.raises(ValueError, match="Unknown embedding provider"):
        create_embedding_provider(config)
