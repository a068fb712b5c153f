"""Tests for the command line interface."""

import yaml
from click.testing import CliRunner

from confract.cli import cli
from confract.engine import Engine
from confract.models import MatchResult
from confract.vault.store import DocumentStore


def _setup(tmp_path):
    store_path = tmp_path / "documents"
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml.dump({"embedding_provider": "hashing", "store_path": str(store_path)}))
    return str(config_file), DocumentStore(str(store_path))


def test_process_creates_document(tmp_path):
    config, store = _setup(tmp_path)
    runner = CliRunner()

    result = runner.invoke(cli, ["-c", config, "process"], input="Breaking Bad\nInception\n")

    assert result.exit_code == 0, result.output
    (doc,) = store.list_documents()
    assert doc.title == "Breaking Bad"
    assert [s.title for s in doc.sections] == ["Movies", "TV Shows"]


def test_dry_run_saves_nothing(tmp_path):
    config, store = _setup(tmp_path)
    result = CliRunner().invoke(cli, ["-c", config, "process", "--dry-run"], input="Breaking Bad\n")
    assert result.exit_code == 0, result.output
    assert store.list_documents() == []


def test_process_into_existing_document(tmp_path):
    config, store = _setup(tmp_path)
    runner = CliRunner()
    runner.invoke(cli, ["-c", config, "process"], input="Breaking Bad\nInception\n")
    doc_id = store.list_documents()[0].id

    result = runner.invoke(cli, ["-c", config, "process", "--into", doc_id], input="breaking bad\nDune\n")

    assert result.exit_code == 0, result.output
    doc = store.get(doc_id)
    assert [e.reason for e in doc.consolidation_log] == ["exact duplicate"]
    movies = next(s for s in doc.sections if s.title == "Movies")
    assert [(i.name, i.is_new) for i in movies.items] == [("Inception", False), ("Dune", True)]
    assert len(doc.versions) == 1


def test_empty_input_fails(tmp_path):
    config, _ = _setup(tmp_path)
    result = CliRunner().invoke(cli, ["-c", config, "process"], input="   \n")
    assert result.exit_code == 1
    assert "Processing failed" in result.output


def test_show_formats(tmp_path):
    config, store = _setup(tmp_path)
    runner = CliRunner()
    runner.invoke(cli, ["-c", config, "process"], input="Breaking Bad\nInception\n")
    doc_id = store.list_documents()[0].id

    markdown = runner.invoke(cli, ["-c", config, "show", doc_id])
    assert markdown.output.startswith("# Breaking Bad")

    text = runner.invoke(cli, ["-c", config, "show", doc_id, "--format", "text"])
    assert "1. Inception" in text.output

    as_json = runner.invoke(cli, ["-c", config, "show", doc_id, "--format", "json"])
    assert '"title": "Breaking Bad"' in as_json.output


def test_restore_revert_and_delete(tmp_path):
    config, store = _setup(tmp_path)
    runner = CliRunner()
    runner.invoke(cli, ["-c", config, "process"], input="Breaking Bad\n")
    doc_id = store.list_documents()[0].id
    runner.invoke(cli, ["-c", config, "process", "--into", doc_id], input="Dark\n")

    assert runner.invoke(cli, ["-c", config, "restore", doc_id, "Lost Show"]).exit_code == 0
    assert store.get(doc_id).sections[-1].title == "Restored"

    assert runner.invoke(cli, ["-c", config, "revert", doc_id, "0"]).exit_code == 0
    assert [s.title for s in store.get(doc_id).sections] == ["TV Shows"]
    assert [i.name for i in store.get(doc_id).sections[0].items] == ["Breaking Bad"]

    assert runner.invoke(cli, ["-c", config, "revert", doc_id, "9"]).exit_code == 1

    assert runner.invoke(cli, ["-c", config, "delete", doc_id]).exit_code == 0
    assert store.list_documents() == []


def test_missing_document(tmp_path):
    config, _ = _setup(tmp_path)
    result = CliRunner().invoke(cli, ["-c", config, "show", "doc_nope"])
    assert result.exit_code == 1


def test_list_and_detect(tmp_path):
    config, _ = _setup(tmp_path)
    runner = CliRunner()
    assert "No documents yet" in runner.invoke(cli, ["-c", config, "list"]).output
    runner.invoke(cli, ["-c", config, "process"], input="Breaking Bad\n")

    listed = runner.invoke(cli, ["-c", config, "list"])
    assert listed.exit_code == 0

    detected = runner.invoke(cli, ["-c", config, "detect"], input="Breaking Bad\n")
    assert detected.exit_code == 0
    assert "Confidence:" in detected.output


def test_health_with_hashing_provider(tmp_path):
    config, _ = _setup(tmp_path)
    result = CliRunner().invoke(cli, ["-c", config, "health"])
    assert result.exit_code == 0
    assert "ready: True" in result.output


def _stub_match(monkeypatch, confidence):
    async def detect_match(self, text, documents):
        return MatchResult(match_id=documents[0].id, confidence=confidence, reason="stubbed")

    monkeypatch.setattr(Engine, "detect_match", detect_match)


def _process_file(runner, config, tmp_path, answer="", *extra):
    source = tmp_path / "input.txt"
    source.write_text("Dune\nArrival\n")
    return runner.invoke(cli, ["-c", config, "process", str(source), *extra], input=answer)


def test_medium_match_asks_before_merging(tmp_path, monkeypatch):
    config, store = _setup(tmp_path)
    runner = CliRunner()
    runner.invoke(cli, ["-c", config, "process"], input="Breaking Bad\n")
    _stub_match(monkeypatch, "medium")

    declined = _process_file(runner, config, tmp_path, "n\n")
    assert declined.exit_code == 0, declined.output
    assert "Merge into" in declined.output
    assert len(store.list_documents()) == 2


def test_medium_match_merges_when_confirmed(tmp_path, monkeypatch):
    config, store = _setup(tmp_path)
    runner = CliRunner()
    runner.invoke(cli, ["-c", config, "process"], input="Breaking Bad\n")
    _stub_match(monkeypatch, "medium")

    accepted = _process_file(runner, config, tmp_path, "y\n")
    assert accepted.exit_code == 0, accepted.output
    (doc,) = store.list_documents()
    assert len(doc.versions) == 1


def test_medium_match_from_stdin_creates_new_document(tmp_path, monkeypatch):
    config, store = _setup(tmp_path)
    runner = CliRunner()
    runner.invoke(cli, ["-c", config, "process"], input="Breaking Bad\n")
    _stub_match(monkeypatch, "medium")

    result = runner.invoke(cli, ["-c", config, "process"], input="Dune\nArrival\n")
    assert result.exit_code == 0, result.output
    assert "Merge into" not in result.output
    assert len(store.list_documents()) == 2


def test_high_match_merges_unless_no_auto(tmp_path, monkeypatch):
    config, store = _setup(tmp_path)
    runner = CliRunner()
    runner.invoke(cli, ["-c", config, "process"], input="Breaking Bad\n")
    _stub_match(monkeypatch, "high")

    skipped = _process_file(runner, config, tmp_path, "", "--no-auto")
    assert skipped.exit_code == 0, skipped.output
    assert len(store.list_documents()) == 2

    merged = _process_file(runner, config, tmp_path)
    assert merged.exit_code == 0, merged.output
    assert len(store.list_documents()) == 2
    assert any(d.versions for d in store.list_documents())
