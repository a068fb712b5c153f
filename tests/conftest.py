"""Shared fixtures: a deterministic embedding provider that counts calls."""

import pytest

from confract.embeddings.provider import EmbeddingProvider
from confract.errors import EmbeddingUnavailableError


class FakeProvider(EmbeddingProvider):
    """Returns preset vectors; unknown texts get their own orthogonal axis."""

    model_name = "fake"

    def __init__(self, vectors: dict[str, list[float]] | None = None, dimensions: int = 64):
        self.dimensions = dimensions
        self.vectors = {k: self._pad(v) for k, v in (vectors or {}).items()}
        self.calls: list[str] = []
        self.batches: list[list[str]] = []
        self._next_axis = dimensions - 1

    def _pad(self, vector):
        return list(vector) + [0.0] * (self.dimensions - len(vector))

    def _vector(self, text):
        if text not in self.vectors:
            axis = [0.0] * self.dimensions
            axis[self._next_axis] = 1.0
            self._next_axis -= 1
            self.vectors[text] = axis
        return self.vectors[text]

    async def embed(self, text):
        self.calls.append(text)
        return self._vector(text)

    async def embed_many(self, texts):
        self.batches.append(list(texts))
        self.calls.extend(texts)
        return [self._vector(t) for t in texts]


class BrokenProvider(EmbeddingProvider):
    model_name = "broken"

    @property
    def ready(self):
        return False

    async def embed(self, text):
        raise EmbeddingUnavailableError("model not loaded")


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def broken_provider():
    return BrokenProvider()


@pytest.fixture
def make_provider():
    """Build a FakeProvider with preset vectors."""
    return FakeProvider
