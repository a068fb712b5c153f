"""Text embedding providers.

The pipeline awaits ``embed``; that call is its only suspension point.
"""

import asyncio
import hashlib
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from ..errors import EmbeddingUnavailableError
from ..text import normalize

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"


class EmbeddingProvider(ABC):
    """Turns text into a fixed-length, unit-normalized vector."""

    model_name: str = ""

    @property
    def ready(self) -> bool:
        return True

    def load(self) -> None:
        """Prepare the provider eagerly. No-op unless the provider loads a model."""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Embed a single text."""

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Embed several texts. Providers that can batch should override this."""
        return [await self.embed(text) for text in texts]


class SentenceTransformerProvider(EmbeddingProvider):
    """Mean-pooled, normalized sentence-transformers embeddings."""

    def __init__(self, model_name: str = DEFAULT_MODEL):
        self.model_name = model_name
        self._model = None
        self._lock = threading.Lock()

    @property
    def ready(self) -> bool:
        return self._model is not None

    @property
    def model(self):
        """Lazy-load the embedding model."""
        if self._model is None:
            with self._lock:
                if self._model is None:
                    try:
                        from sentence_transformers import SentenceTransformer
                        logger.info(f"Loading embedding model {self.model_name}")
                        self._model = SentenceTransformer(self.model_name)
                    except Exception as e:
                        raise EmbeddingUnavailableError(
                            f"Could not load embedding model {self.model_name}: {e}"
                        ) from e
        return self._model

    def load(self) -> None:
        _ = self.model

    def _encode(self, texts: list[str]) -> list[list[float]]:
        try:
            vectors = self.model.encode(texts, normalize_embeddings=True, convert_to_numpy=True)
        except EmbeddingUnavailableError:
            raise
        except Exception as e:
            raise EmbeddingUnavailableError(f"Embedding failed: {e}") from e
        return vectors.tolist()

    async def embed(self, text: str) -> list[float]:
        vectors = await self.embed_many([text])
        return vectors[0]

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        return await asyncio.to_thread(self._encode, list(texts))


class HashingProvider(EmbeddingProvider):
    """Model-free embeddings from hashed word and character trigram features.

    Deterministic and dependency-light; useful offline and in tests. Only
    lexical overlap is captured, so paraphrases score lower than with a
    real sentence model.
    """

    def __init__(self, dimensions: int = 256):
        self.dimensions = dimensions
        self.model_name = f"hashing-{dimensions}"

    def _features(self, text: str) -> list[str]:
        words = normalize(text).split()
        features = [f"w:{w}" for w in words]
        for word in words:
            padded = f" {word} "
            features.extend(f"c:{padded[i:i + 3]}" for i in range(len(padded) - 2))
        return features

    def _vector(self, text: str) -> list[float]:
        vec = np.zeros(self.dimensions)
        for feature in self._features(text):
            digest = hashlib.sha256(feature.encode("utf-8")).digest()
            index = int.from_bytes(digest[:4], "big") % self.dimensions
            vec[index] += 1.0 if digest[4] % 2 == 0 else -1.0
        norm = np.linalg.norm(vec)
        if norm > 0:
            vec = vec / norm
        return vec.tolist()

    async def embed(self, text: str) -> list[float]:
        return self._vector(text)


def get_embedding_provider(config: dict[str, Any]) -> EmbeddingProvider:
    """Factory: return the provider named by ``embedding_provider``."""
    backend = config.get("embedding_provider", "sentence-transformers")

    if backend == "sentence-transformers":
        return SentenceTransformerProvider(config.get("embedding_model", DEFAULT_MODEL))
    elif backend == "hashing":
        return HashingProvider(config.get("hashing_dimensions", 256))
    else:
        raise ValueError(f"Unknown embedding_provider: {backend}")
