"""Document routing."""

from .matcher import DocumentMatcher, document_summary

__all__ = ["DocumentMatcher", "document_summary"]
