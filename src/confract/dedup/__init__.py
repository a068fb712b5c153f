"""Duplicate detection against existing documents."""

from .deduplicator import SemanticDeduplicator, existing_items

__all__ = ["SemanticDeduplicator", "existing_items"]
