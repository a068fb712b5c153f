"""Embedding providers, cache and similarity."""

from .cache import EmbeddingCache
from .provider import EmbeddingProvider, HashingProvider, SentenceTransformerProvider, get_embedding_provider
from .similarity import cosine_similarity

__all__ = [
    "EmbeddingCache",
    "EmbeddingProvider",
    "HashingProvider",
    "SentenceTransformerProvider",
    "get_embedding_provider",
    "cosine_similarity",
]
