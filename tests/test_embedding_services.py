"""Tests for the sentence-transformers provider (model is mocked)."""

from unittest.mock import MagicMock, patch

import numpy as np
import pytest

from core.domain import ErrorCode, SearchPipelineError
from infrastructure.embedding_services import SentenceTransformerEmbedding


@pytest.fixture(autouse=True)
def clear_model_cache():
    """Each test starts with no loaded models."""
    SentenceTransformerEmbedding._models.clear()
    yield
    SentenceTransformerEmbedding._models.clear()


@pytest.fixture
def mock_model() -> MagicMock:
    model = MagicMock()
    model.get_sentence_embedding_dimension.return_value = 3
    model.encode.side_effect = lambda texts, **kwargs: np.array(
        [[3.0, 4.0, 0.0] if t else [0.0, 0.0, 0.0] for t in texts], dtype="float32"
    )
    return model


class TestModelLoading:
    """Test cache-first loading and failure reporting."""

    def test_loads_from_local_cache_first(self, mock_model: MagicMock) -> None:
        with patch("infrastructure.embedding_services.SentenceTransformer",
                   return_value=mock_model) as factory:
            provider = SentenceTransformerEmbedding("some/model")

        factory.assert_called_once_with("some/model", local_files_only=True)
        assert provider.model is mock_model

    def test_falls_back_to_download(self, mock_model: MagicMock) -> None:
        with patch("infrastructure.embedding_services.SentenceTransformer",
                   side_effect=[OSError("not cached"), mock_model]) as factory:
            provider = SentenceTransformerEmbedding("some/model")

        assert factory.call_count == 2
        assert factory.call_args.args == ("some/model",)
        assert provider.model is mock_model

    def test_model_is_loaded_once_per_name(self, mock_model: MagicMock) -> None:
        with patch("infrastructure.embedding_services.SentenceTransformer",
                   return_value=mock_model) as factory:
            first = SentenceTransformerEmbedding("some/model")
            second = SentenceTransformerEmbedding("some/model")

        assert factory.call_count == 1
        assert first.model is second.model

    def test_load_failure_raises_pipeline_error(self) -> None:
        with patch("infrastructure.embedding_services.SentenceTransformer",
                   side_effect=OSError("no such model")):
            with pytest.raises(SearchPipelineError) as exc_info:
                SentenceTransformerEmbedding("missing/model")

        assert exc_info.value.error_code == ErrorCode.MODEL_LOAD_FAILED
        assert "missing/model" in str(exc_info.value)


class TestEncoding:
    """Test batch encoding and normalization."""

    def test_rows_are_unit_norm(self, mock_model: MagicMock) -> None:
        with patch("infrastructure.embedding_services.SentenceTransformer", return_value=mock_model):
            provider = SentenceTransformerEmbedding("some/model")

        embeddings = provider.encode(["a", "b"])

        assert embeddings.shape == (2, 3)
        assert embeddings.dtype == np.float32
        np.testing.assert_allclose(embeddings[0], [0.6, 0.8, 0.0], rtol=1e-6)

    def test_zero_rows_stay_zero(self, mock_model: MagicMock) -> None:
        with patch("infrastructure.embedding_services.SentenceTransformer", return_value=mock_model):
            provider = SentenceTransformerEmbedding("some/model")

        embeddings = provider.encode([""])

        assert not np.isnan(embeddings).any()
        assert not embeddings.any()

    def test_normalization_can_be_disabled(self, mock_model: MagicMock) -> None:
        with patch("infrastructure.embedding_services.SentenceTransformer", return_value=mock_model):
            provider = SentenceTransformerEmbedding("some/model", normalize=False)

        np.testing.assert_array_equal(provider.encode(["a"])[0], [3.0, 4.0, 0.0])

    def test_empty_batch_skips_model(self, mock_model: MagicMock) -> None:
        with patch("infrastructure.embedding_services.SentenceTransformer", return_value=mock_model):
            provider = SentenceTransformerEmbedding("some/model")

        assert provider.encode([]).shape == (0, 3)
        mock_model.encode.assert_not_called()

    def test_reports_dimension(self, mock_model: MagicMock) -> None:
        with patch("infrastructure.embedding_services.SentenceTransformer", return_value=mock_model):
            assert SentenceTransformerEmbedding("some/model").dimension == 3
