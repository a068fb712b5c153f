"""Drop new items that repeat content already in a document."""

import logging
from dataclasses import dataclass, replace

from ..embeddings.cache import EmbeddingCache
from ..embeddings.similarity import cosine_similarity, percent
from ..errors import MalformedExistingDocumentError
from ..models import ClassifiedItem, ConsolidationLogEntry, Document, Section
from ..text import normalize

logger = logging.getLogger(__name__)

DEDUP_THRESHOLD = 0.88

EXACT_DUPLICATE = "exact duplicate"


@dataclass
class ExistingItem:
    """An item of the existing document with the title of its section."""
    name: str
    section: str

    @property
    def normalized(self) -> str:
        return normalize(self.name)


def existing_items(document: Document) -> list[ExistingItem]:
    """Flatten a document's sections into items, in document order.

    Raises MalformedExistingDocumentError if the sections are not a list of
    sections that each hold an items list.
    """
    sections = document.sections
    if not isinstance(sections, list):
        raise MalformedExistingDocumentError(f"Document {document.id!r} has no sections list")

    items = []
    for section in sections:
        if not isinstance(section, Section) or not isinstance(section.items, list):
            raise MalformedExistingDocumentError(
                f"Document {document.id!r} has a section without an items list"
            )
        items.extend(ExistingItem(name=item.name, section=section.title) for item in section.items)
    return items


class SemanticDeduplicator:
    """Exact-then-semantic duplicate detection against one existing document."""

    def __init__(self, cache: EmbeddingCache, threshold: float = DEDUP_THRESHOLD):
        self.cache = cache
        self.threshold = threshold

    async def deduplicate(
        self,
        new_items: list[ClassifiedItem],
        existing_document: Document,
    ) -> tuple[list[ClassifiedItem], list[ConsolidationLogEntry]]:
        """Split new items into kept items and a consolidation log.

        An exact normalized-name match never reaches the embedding model.
        Otherwise the first existing item (in document order) whose cosine
        similarity strictly exceeds the threshold absorbs the new item.
        Kept items come back as copies with ``is_new=True``.
        """
        try:
            existing = existing_items(existing_document)
        except MalformedExistingDocumentError as e:
            logger.warning(f"Treating existing document as empty: {e}")
            existing = []

        exact_index: dict[str, ExistingItem] = {}
        for item in existing:
            exact_index.setdefault(item.normalized, item)

        # Existing-item vectors are computed once, on first semantic comparison
        existing_vectors: list[list[float]] | None = None

        kept: list[ClassifiedItem] = []
        log: list[ConsolidationLogEntry] = []

        for item in new_items:
            match = exact_index.get(normalize(item.name))
            if match is not None:
                logger.debug(f"'{item.name}' is an exact duplicate of '{match.name}'")
                log.append(ConsolidationLogEntry(
                    removed=item.name,
                    kept_as=match.name,
                    reason=EXACT_DUPLICATE,
                    section=match.section,
                ))
                continue

            if not existing:
                kept.append(replace(item, is_new=True))
                continue

            if existing_vectors is None:
                existing_vectors = await self.cache.embed_many([e.normalized for e in existing])

            vector = await self.cache.embed(item.raw or normalize(item.name))
            entry = self._first_semantic_match(item, vector, existing, existing_vectors)
            if entry is not None:
                log.append(entry)
            else:
                kept.append(replace(item, is_new=True))

        return kept, log

    def _first_semantic_match(
        self,
        item: ClassifiedItem,
        vector: list[float],
        existing: list[ExistingItem],
        existing_vectors: list[list[float]],
    ) -> ConsolidationLogEntry | None:
        for candidate, candidate_vector in zip(existing, existing_vectors):
            similarity = cosine_similarity(vector, candidate_vector)
            if similarity > self.threshold:
                logger.debug(f"'{item.name}' matches '{candidate.name}' at {similarity:.3f}")
                return ConsolidationLogEntry(
                    removed=item.name,
                    kept_as=candidate.name,
                    reason=f"semantic match ({percent(similarity)}% similar)",
                    section=candidate.section,
                )
        return None
