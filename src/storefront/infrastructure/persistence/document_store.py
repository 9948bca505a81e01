"""JSON document store.

Every collection lives in one JSON file::

    {"products": {"<id>": {...}}, "carts": {...}, "addresses": {...}, "orders": {...}}

Keeping all collections in one file makes a multi-collection commit a single
file swap: the new content is written to a temporary file next to the data
file and moved over it with ``os.replace``. A failure before the swap leaves
the previous file untouched.

Writers buffer their changes in a ``DocumentSession``. ``commit()`` takes the
store lock, re-reads the file, applies only the buffered puts and deletes, and
swaps the file, so concurrent sessions touching different documents do not
overwrite each other.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import structlog

from storefront.domain.exceptions import StorageTimeout, StorageUnavailable

logger = structlog.get_logger(__name__)

COLLECTIONS = ("products", "carts", "addresses", "orders")

Documents = dict[str, dict[str, dict]]


@dataclass(frozen=True)
class _Write:
    collection: str
    key: str
    document: dict | None  # None means delete


class DocumentStore:

    def __init__(self, file_path: Path, timeout: float = 5.0) -> None:
        self._file_path = file_path
        self._timeout = timeout
        self._lock = threading.Lock()
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def session(self) -> DocumentSession:
        return DocumentSession(self)

    def snapshot(self) -> Documents:
        """Return a private copy of every collection."""
        with self._locked():
            return self._read()

    def apply(self, writes: list[_Write]) -> None:
        """Apply buffered writes in one atomic file swap."""
        with self._locked():
            data = self._read()
            for write in writes:
                documents = data.setdefault(write.collection, {})
                if write.document is None:
                    documents.pop(write.key, None)
                else:
                    documents[write.key] = write.document
            self._write(data)
        logger.debug("store_committed", writes=len(writes))

    # --- File helpers ---------------------------------------------------------

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._timeout):
            raise StorageTimeout(
                f"Timed out after {self._timeout}s waiting for the document store"
            )
        try:
            yield
        finally:
            self._lock.release()

    def _read(self) -> Documents:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageUnavailable(
                f"Cannot read document store at {self._file_path}"
            ) from exc
        for name in COLLECTIONS:
            raw.setdefault(name, {})
        return raw

    def _write(self, data: Documents) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(data, indent=2) + "\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageUnavailable(
                f"Cannot write document store at {self._file_path}"
            ) from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._write({name: {} for name in COLLECTIONS})


class DocumentSession:
    """A read snapshot plus a buffer of pending writes.

    Reads see the session's own pending writes. Nothing reaches the file
    until ``commit()``.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store
        self._data: Documents | None = None
        self._writes: list[_Write] = []

    def get(self, collection: str, key: str) -> dict | None:
        return self._documents(collection).get(key)

    def all(self, collection: str) -> list[dict]:
        """Documents in insertion order."""
        return list(self._documents(collection).values())

    def put(self, collection: str, key: str, document: dict) -> None:
        self._documents(collection)[key] = document
        self._writes.append(_Write(collection, key, document))

    def delete(self, collection: str, key: str) -> None:
        self._documents(collection).pop(key, None)
        self._writes.append(_Write(collection, key, None))

    def commit(self) -> None:
        if self._writes:
            self._store.apply(self._writes)
        self._writes = []

    def discard(self) -> None:
        self._writes = []
        self._data = None

    def _documents(self, collection: str) -> dict[str, dict]:
        if self._data is None:
            self._data = self._store.snapshot()
        return self._data.setdefault(collection, {})
