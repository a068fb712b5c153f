"""Route new input to the existing document it most likely belongs to."""

import logging

from ..embeddings.cache import EmbeddingCache
from ..embeddings.similarity import cosine_similarity, percent
from ..errors import MalformedExistingDocumentError
from ..models import Document, MatchResult, Section

logger = logging.getLogger(__name__)

HIGH_THRESHOLD = 0.55
MEDIUM_THRESHOLD = 0.40
SUMMARY_CHARS = 400
ITEMS_PER_SECTION = 6


def document_summary(
    document: Document,
    items_per_section: int = ITEMS_PER_SECTION,
    max_chars: int = SUMMARY_CHARS,
) -> str:
    """Title, type label, and each section title with its first few item names.

    A document without well-formed sections is summarized from its title
    and type label alone.
    """
    parts = [document.title, document.detected_type or ""]
    try:
        parts.extend(_section_parts(document, items_per_section))
    except MalformedExistingDocumentError as e:
        logger.warning(f"Summarizing without sections: {e}")
    return " ".join(parts)[:max_chars]


def _section_parts(document: Document, items_per_section: int) -> list[str]:
    if not isinstance(document.sections, list):
        raise MalformedExistingDocumentError(f"Document {document.id!r} has no sections list")
    parts = []
    for section in document.sections:
        if not isinstance(section, Section) or not isinstance(section.items, list):
            raise MalformedExistingDocumentError(
                f"Document {document.id!r} has a section without an items list"
            )
        parts.append(section.title)
        parts.extend(item.name for item in section.items[:items_per_section])
    return parts


class DocumentMatcher:
    """Compare input against document summaries and bucket the best score."""

    def __init__(
        self,
        cache: EmbeddingCache,
        high_threshold: float = HIGH_THRESHOLD,
        medium_threshold: float = MEDIUM_THRESHOLD,
        summary_chars: int = SUMMARY_CHARS,
        items_per_section: int = ITEMS_PER_SECTION,
    ):
        self.cache = cache
        self.high_threshold = high_threshold
        self.medium_threshold = medium_threshold
        self.summary_chars = summary_chars
        self.items_per_section = items_per_section

    async def detect_match(self, text: str, documents: list[Document]) -> MatchResult:
        if not documents:
            return MatchResult(match_id=None, confidence="low", reason="No existing documents")

        input_vector = await self.cache.embed(text)
        summaries = [
            document_summary(d, self.items_per_section, self.summary_chars) for d in documents
        ]
        summary_vectors = await self.cache.embed_many(summaries)

        best: Document | None = None
        best_score = 0.0
        for document, vector in zip(documents, summary_vectors):
            score = cosine_similarity(input_vector, vector)
            if score > best_score:
                best, best_score = document, score

        logger.debug(f"Best document match {best.id if best else None} at {best_score:.3f}")

        if best is not None and best_score > self.high_threshold:
            return MatchResult(
                match_id=best.id,
                confidence="high",
                reason=f'Strong match with "{best.title}" ({percent(best_score)}% similar)',
            )
        if best is not None and best_score > self.medium_threshold:
            return MatchResult(
                match_id=best.id,
                confidence="medium",
                reason=f'Possible match with "{best.title}", confirm before merging',
            )
        return MatchResult(match_id=None, confidence="low", reason="Content appears to be a new topic")
