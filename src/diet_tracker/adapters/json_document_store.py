"""Single-file JSON document store."""

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from diet_tracker.domain.errors import PersistenceError

_logger = logging.getLogger(__name__)

# Guards every read-modify-write cycle in this process.
_DOCUMENT_LOCK = threading.RLock()


def empty_document() -> dict[str, object]:
    """Return the document layout with no data."""
    return {
        "meals": {},
        "foodItems": {},
        "userProfile": None,
        "weightEntries": {},
    }


@dataclass
class JsonDocumentStore:
    """Reads and rewrites the whole JSON document on every access."""

    path: Path
    lock: threading.RLock = field(default=_DOCUMENT_LOCK, repr=False)

    def read(self) -> dict[str, object]:
        """Load the full document, filling in missing collections."""
        document = empty_document()
        if not self.path.exists():
            return document
        try:
            raw = self.path.read_text(encoding="utf-8")
            loaded = json.loads(raw) if raw.strip() else {}
        except (OSError, json.JSONDecodeError) as exc:
            _logger.exception("Failed to read data file", extra={"path": str(self.path)})
            raise PersistenceError("Failed to read data file") from exc
        if not isinstance(loaded, dict):
            raise PersistenceError("Data file is not a JSON object")
        document.update(loaded)
        for key in ("meals", "foodItems", "weightEntries"):
            if not isinstance(document[key], dict):
                document[key] = {}
        return document

    def write(self, document: dict[str, object]) -> None:
        """Atomically replace the file with the given document."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            _logger.exception(
                "Failed to write data file", extra={"path": str(self.path)}
            )
            raise PersistenceError("Failed to write data file") from exc
        _logger.debug("Data file written: %s", self.path)

    @contextmanager
    def transaction(self) -> Iterator[dict[str, object]]:
        """Yield the document for mutation and persist it on success."""
        with self.lock:
            document = self.read()
            yield document
            self.write(document)

    @contextmanager
    def snapshot(self) -> Iterator[dict[str, object]]:
        """Yield the document for reading without writing it back."""
        with self.lock:
            yield self.read()
