"""JSON-file document store.

Documents live in named collections inside a single JSON file. Ids are
24-character hex strings, assigned on insert to the document and to each
of its embedded questions.
"""

import json
import logging
import os
import re
import secrets
import tempfile
import threading
from pathlib import Path

from formsmith.config import get_settings
from formsmith.exceptions import StoreError

logger = logging.getLogger(__name__)

FORMS = "forms"
RESPONSES = "responses"

_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")
_lock = threading.Lock()


def new_id() -> str:
    return secrets.token_hex(12)


def is_valid_id(value) -> bool:
    return isinstance(value, str) and bool(_ID_PATTERN.match(value))


class DocumentStore:
    """Reads/writes documents to a local JSON file, keyed by collection and id."""

    def __init__(self, path: Path):
        self.path = path

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text())
        except (OSError, ValueError) as e:
            raise StoreError("Document store is unreadable", error=str(e)) from e

    def _write_all(self, data: dict) -> None:
        # Readers only ever see the old file or the complete new one.
        tmp_name = None
        try:
            payload = json.dumps(data, indent=2)
            with tempfile.NamedTemporaryFile(
                "w", dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp", delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError("Document store is not writable", error=str(e)) from e

    def insert(self, collection: str, document: dict) -> str:
        """Persist a copy of document and return its new id."""
        doc_id = new_id()
        stored = {**document, "id": doc_id}
        if "questions" in stored:
            stored["questions"] = [{**q, "id": new_id()} for q in stored["questions"]]
        with _lock:
            data = self._read_all()
            data.setdefault(collection, {})[doc_id] = stored
            self._write_all(data)
        logger.debug("Inserted %s/%s", collection, doc_id)
        return doc_id

    def find_by_id(self, collection: str, doc_id) -> dict | None:
        if not is_valid_id(doc_id):
            raise StoreError("Malformed document id", error=f"Cannot cast {doc_id!r} to an id")
        with _lock:
            return self._read_all().get(collection, {}).get(doc_id)

    def count(self, collection: str) -> int:
        with _lock:
            return len(self._read_all().get(collection, {}))


def get_store() -> DocumentStore:
    return DocumentStore(get_settings().store_file)
