"""Memoize embeddings so each distinct text is encoded once."""

import hashlib
import logging

from .provider import EmbeddingProvider

logger = logging.getLogger(__name__)


class EmbeddingCache:
    """Insert-if-absent embedding cache in front of a provider.

    Keys are SHA-256 digests of the full text, so texts sharing a long
    prefix never share a vector. Entries are never evicted.
    """

    def __init__(self, provider: EmbeddingProvider):
        self.provider = provider
        self._vectors: dict[str, list[float]] = {}

    @staticmethod
    def key(text: str) -> str:
        return hashlib.sha256(text.encode("utf-8")).hexdigest()

    async def embed(self, text: str) -> list[float]:
        k = self.key(text)
        cached = self._vectors.get(k)
        if cached is not None:
            return cached
        vector = await self.provider.embed(text)
        return self._vectors.setdefault(k, vector)

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Embed texts in order, sending only cache misses to the provider in one batch."""
        keys = [self.key(t) for t in texts]

        missing: dict[str, str] = {}
        for k, text in zip(keys, texts):
            if k not in self._vectors and k not in missing:
                missing[k] = text

        if missing:
            logger.debug(f"Embedding {len(missing)} uncached text(s)")
            vectors = await self.provider.embed_many(list(missing.values()))
            for k, vector in zip(missing, vectors):
                self._vectors.setdefault(k, vector)

        return [self._vectors[k] for k in keys]

    def __contains__(self, text: str) -> bool:
        return self.key(text) in self._vectors

    def __len__(self) -> int:
        return len(self._vectors)

    def clear(self) -> None:
        self._vectors.clear()
