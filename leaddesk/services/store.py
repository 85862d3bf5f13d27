"""
Document store — one JSON file holding every collection.

Reads and writes are whole-document. Read-modify-write cycles go through
transaction(), which holds a single-writer lock from load to save so that
concurrent requests cannot overwrite each other's changes. Writes land in a
temp file that is renamed over the target, so a reader never sees a partial
document.
"""
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from leaddesk.models.document import Document, empty_document
from leaddesk.services.migrations import migrate

logger = logging.getLogger('services.store')


class DocumentStore:
    """
    File-backed store for the lead document.

    Usage:
        store = DocumentStore('/srv/data/db.json')
        store.initialize()
        with store.transaction() as doc:
            doc.leads.append(lead)
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.RLock()

    def initialize(self):
        """Create the data directory and an empty document if missing."""
        with self._lock:
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            if not os.path.exists(self.path):
                self._write_raw(empty_document())
                logger.info("Created empty document at %s", self.path)

    def load(self) -> Document:
        """Read the whole document, migrating and persisting it if needed."""
        with self._lock:
            if not os.path.exists(self.path):
                self.initialize()
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            raw, changed = migrate(raw)
            if changed:
                logger.info("Persisting migrated document %s", self.path)
                self._write_raw(raw)
            return Document.from_dict(raw)

    def save(self, document: Document):
        """Overwrite the backing file with the given document."""
        with self._lock:
            self._write_raw(document.to_dict())

    @contextmanager
    def transaction(self) -> Iterator[Document]:
        """
        Load → yield for mutation → save, under the writer lock.

        Nothing is saved when the block raises.
        """
        with self._lock:
            document = self.load()
            yield document
            self.save(document)

    def _write_raw(self, raw: Dict[str, Any]):
        directory = os.path.dirname(os.path.abspath(self.path))
        fd, tmp_path = tempfile.mkstemp(prefix='.db-', suffix='.json', dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(raw, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
