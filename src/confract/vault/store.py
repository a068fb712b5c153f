"""JSON-file document store used by the CLI."""

import json
import logging
import re
from pathlib import Path

from ..errors import MalformedExistingDocumentError
from ..models import Document

logger = logging.getLogger(__name__)


class DocumentStore:
    """One ``<id>.json`` file per document under a directory."""

    def __init__(self, store_path: str):
        self.store_path = Path(store_path)

    def _path(self, doc_id: str) -> Path:
        safe_id = re.sub(r"[^A-Za-z0-9_\-]", "", doc_id)
        if not safe_id:
            raise ValueError(f"Invalid document id: {doc_id!r}")
        return self.store_path / f"{safe_id}.json"

    def _load(self, path: Path) -> Document | None:
        try:
            return Document.from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (json.JSONDecodeError, MalformedExistingDocumentError) as e:
            logger.warning(f"Skipping unreadable document {path.name}: {e}")
            return None

    def list_documents(self) -> list[Document]:
        """All documents, most recently updated first."""
        if not self.store_path.exists():
            return []
        docs = [self._load(p) for p in sorted(self.store_path.glob("*.json"))]
        return sorted((d for d in docs if d is not None), key=lambda d: d.updated, reverse=True)

    def get(self, doc_id: str) -> Document | None:
        path = self._path(doc_id)
        if not path.exists():
            return None
        return self._load(path)

    def save(self, document: Document) -> Path:
        self.store_path.mkdir(parents=True, exist_ok=True)
        path = self._path(document.id)
        path.write_text(json.dumps(document.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        return path

    def delete(self, doc_id: str) -> bool:
        path = self._path(doc_id)
        if not path.exists():
            return False
        path.unlink()
        return True
