"""The Confract pipeline: classify, deduplicate, structure."""

import logging
from typing import Any

from . import __version__
from .classify.detector import detect_content_type
from .classify.lines import classify_lines
from .config import DEFAULT_CONFIG
from .dedup.deduplicator import SemanticDeduplicator
from .embeddings.cache import EmbeddingCache
from .embeddings.provider import EmbeddingProvider, get_embedding_provider
from .errors import EmptyInputError, MalformedExistingDocumentError
from .ingest.segmenter import segment
from .matching.matcher import DocumentMatcher
from .models import Document, MatchResult, ProcessResult
from .vault.sections import build_sections
from .vault.templates import render_markdown
from .vault.titles import generate_title

logger = logging.getLogger(__name__)


def as_document(value: Document | dict[str, Any]) -> Document:
    """Accept a Document or its JSON form; malformed sections degrade to none."""
    if isinstance(value, Document):
        return value
    try:
        return Document.from_dict(value)
    except MalformedExistingDocumentError as e:
        logger.warning(f"Ignoring sections of malformed document: {e}")
        return Document.from_dict({**value, "sections": [], "versions": []})


class Engine:
    """Runs the pipeline against one shared embedding provider and cache."""

    def __init__(
        self,
        provider: EmbeddingProvider,
        config: dict[str, Any] | None = None,
        cache: EmbeddingCache | None = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.provider = provider
        self.cache = cache or EmbeddingCache(provider)

        matching = self.config.get("matching", {})
        self.deduplicator = SemanticDeduplicator(
            self.cache, threshold=self.config.get("dedup", {}).get("threshold", 0.88),
        )
        self.matcher = DocumentMatcher(
            self.cache,
            high_threshold=matching.get("high_threshold", 0.55),
            medium_threshold=matching.get("medium_threshold", 0.40),
            summary_chars=matching.get("summary_chars", 400),
            items_per_section=matching.get("items_per_section", 6),
        )
        self.input_chars = matching.get("input_chars", 600)
        self.max_line_chars = self.config.get("segmenter", {}).get("max_line_chars", 400)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Engine":
        return cls(get_embedding_provider(config), config)

    async def process(
        self,
        text: str,
        existing_document: Document | dict[str, Any] | None = None,
    ) -> ProcessResult:
        """Turn raw input into titled sections, deduplicated against an existing document.

        Raises EmptyInputError for blank input and lets
        EmbeddingUnavailableError propagate; nothing partial is returned.
        """
        if not text or not text.strip():
            raise EmptyInputError("No input provided")
        text = text.strip()

        lines = segment(text, max_line_chars=self.max_line_chars)
        if not lines:
            raise EmptyInputError("Input contains no usable lines")

        detection = detect_content_type(text, lines)
        profile = detection.profile
        classified = classify_lines(lines, profile)

        existing = as_document(existing_document) if existing_document is not None else None
        if existing is not None:
            kept, log = await self.deduplicator.deduplicate(classified, existing)
        else:
            kept, log = classified, []

        sections = build_sections(kept, profile)
        title, emoji = generate_title(text, profile, existing)
        markdown = render_markdown(title, sections)

        logger.info(
            f"Processed {len(lines)} line(s) as {profile.type}: "
            f"{len(kept)} new, {len(log)} consolidated"
        )
        return ProcessResult(
            title=title,
            emoji=emoji,
            detected_type=profile.label,
            sections=sections,
            consolidation_log=log,
            new_additions_count=len(kept),
            overlap_count=len(log),
            markdown=markdown,
        )

    async def detect_match(
        self,
        text: str,
        documents: list[Document | dict[str, Any]] | None,
    ) -> MatchResult:
        """Find the existing document new input belongs to. Never raises."""
        if not text or not text.strip() or documents is None:
            return MatchResult(match_id=None, confidence="low", reason="Missing data")
        try:
            docs = [as_document(d) for d in documents]
            return await self.matcher.detect_match(text[:self.input_chars], docs)
        except Exception as e:
            logger.warning(f"Match detection failed: {e}")
            return MatchResult(match_id=None, confidence="low", reason="Detection failed")

    def health(self) -> dict[str, Any]:
        return {
            "status": "healthy",
            "service": "Confract",
            "version": __version__,
            "model": self.provider.model_name,
            "ready": self.provider.ready,
            "cached_embeddings": len(self.cache),
        }
