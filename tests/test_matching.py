"""Tests for document routing."""

import asyncio
import math

from confract.embeddings.cache import EmbeddingCache
from confract.matching.matcher import DocumentMatcher, document_summary
from confract.models import Document, Section, SectionItem


def _doc(doc_id, title, detected_type="", sections=()):
    return Document(
        id=doc_id,
        title=title,
        detected_type=detected_type,
        sections=[
            Section(title=t, emoji="📝", category="notes", items=[SectionItem(name=n) for n in names])
            for t, names in sections
        ],
    )


def _at(similarity):
    return [similarity, math.sqrt(1 - similarity ** 2)]


def _match(provider, text, documents):
    return asyncio.run(DocumentMatcher(EmbeddingCache(provider)).detect_match(text, documents))


def test_no_documents(make_provider):
    provider = make_provider()
    result = _match(provider, "anything", [])
    assert result.to_dict() == {"match_id": None, "confidence": "low", "reason": "No existing documents"}
    assert provider.calls == []


def test_summary_layout():
    doc = _doc("d1", "Watchlist", "Entertainment watchlist", [
        ("Movies", ["A1", "B2", "C3", "D4", "E5", "F6", "G7"]),
        ("TV Shows", ["Dark"]),
    ])
    assert document_summary(doc) == (
        "Watchlist Entertainment watchlist Movies A1 B2 C3 D4 E5 F6 TV Shows Dark"
    )


def test_summary_is_truncated():
    doc = _doc("d1", "T" * 500)
    assert len(document_summary(doc)) == 400


def test_summary_of_malformed_document_uses_title_and_type():
    doc = _doc("d1", "Recipes", "General notes")
    doc.sections = None
    assert document_summary(doc) == "Recipes General notes"


def test_unrelated_input_is_a_new_topic(make_provider):
    cooking = _doc("cook", "Cooking Recipes", "General notes", [("Notes", ["Pasta Carbonara"])])
    result = _match(make_provider(), "quarterly research findings on soil data", [cooking])
    assert result.match_id is None
    assert result.confidence == "low"
    assert "new topic" in result.reason


def _tiered(make_provider, similarity):
    doc = _doc("d1", "Soil Study")
    provider = make_provider({
        "input": [1.0, 0.0],
        document_summary(doc): _at(similarity),
    })
    return _match(provider, "input", [doc])


def test_high_confidence(make_provider):
    result = _tiered(make_provider, 0.7)
    assert result.match_id == "d1"
    assert result.confidence == "high"
    assert result.reason == 'Strong match with "Soil Study" (70% similar)'


def test_medium_confidence(make_provider):
    result = _tiered(make_provider, 0.5)
    assert result.match_id == "d1"
    assert result.confidence == "medium"
    assert "confirm" in result.reason


def test_tier_boundaries_are_strict(make_provider):
    assert _tiered(make_provider, 0.55).confidence == "medium"
    assert _tiered(make_provider, 0.40).confidence == "low"


def test_best_document_wins(make_provider):
    weak = _doc("weak", "Weak")
    strong = _doc("strong", "Strong")
    provider = make_provider({
        "input": [1.0, 0.0],
        document_summary(weak): _at(0.6),
        document_summary(strong): _at(0.9),
    })
    assert _match(provider, "input", [weak, strong]).match_id == "strong"


def test_summaries_embedded_in_one_batch(make_provider):
    docs = [_doc("a", "Alpha"), _doc("b", "Beta"), _doc("c", "Gamma")]
    provider = make_provider()
    _match(provider, "input", docs)
    assert provider.batches == [[document_summary(d) for d in docs]]
