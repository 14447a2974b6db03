"""Sentence embedding gateway for job postings and search queries."""

import logging

import numpy as np

from services.errors import EmbeddingError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
DEFAULT_DIMENSION = 384

# Lazy-loaded SentenceTransformer models, keyed by model name (~90MB for MiniLM)
_models: dict = {}


def _get_model(model_name: str):
    """Load a SentenceTransformer model lazily on first call."""
    if model_name not in _models:
        try:
            from sentence_transformers import SentenceTransformer

            _models[model_name] = SentenceTransformer(model_name)
            logger.info("Embedding model %s loaded successfully", model_name)
        except Exception as e:
            logger.warning("Failed to load embedding model %s: %s", model_name, e)
            return None
    return _models[model_name]


class EmbeddingGateway:
    """Maps text to fixed-dimension vectors.

    Never returns an empty or wrongly sized vector: every failure surfaces
    as EmbeddingError so callers cannot feed a bad vector into search.
    """

    def __init__(self, model_name: str = DEFAULT_MODEL, dimension: int = DEFAULT_DIMENSION):
        self.model_name = model_name
        self.dimension = dimension

    @classmethod
    def from_settings(cls, settings) -> "EmbeddingGateway":
        return cls(settings.embedding_model, settings.embedding_dimension)

    def embed(self, text: str) -> list[float]:
        """Embed a single text."""
        return self.embed_batch([text])[0]

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed several texts; output order matches input order."""
        if not texts:
            return []
        if any(not t or not t.strip() for t in texts):
            raise EmbeddingError("Cannot embed empty text")

        model = _get_model(self.model_name)
        if model is None:
            raise EmbeddingError(f"Embedding model {self.model_name} unavailable")

        try:
            vectors = model.encode(texts, convert_to_numpy=True)
        except Exception as e:
            raise EmbeddingError(f"Embedding generation failed: {e}") from e

        return self._validate(np.asarray(vectors, dtype=np.float32), len(texts))

    def _validate(self, vectors: np.ndarray, expected_rows: int) -> list[list[float]]:
        if vectors.ndim != 2 or vectors.shape[0] != expected_rows:
            raise EmbeddingError(
                f"Expected {expected_rows} embeddings, got shape {vectors.shape}"
            )
        if vectors.shape[1] != self.dimension:
            raise EmbeddingError(
                f"Expected {self.dimension}-dim embeddings, got {vectors.shape[1]}"
            )
        if not np.isfinite(vectors).all():
            raise EmbeddingError("Embedding contains non-finite values")
        return vectors.tolist()
