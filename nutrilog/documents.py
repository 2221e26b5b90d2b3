# -*- coding: utf-8 -*-
"""Durable documents — whole-document JSON storage behind a read_all/write_all port."""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Optional, Protocol

from .errors import StorageReadFailure, StorageWriteFailure

logger = logging.getLogger(__name__)


class Document(Protocol):
    """A named durable collection that is always read and written as a whole."""

    key: str

    def read_all(self) -> Any: ...

    def write_all(self, data: Any) -> None: ...


def _encode(data: Any) -> str:
    try:
        return json.dumps(data, ensure_ascii=False, indent=2)
    except (TypeError, ValueError) as exc:
        raise StorageWriteFailure(f"Document is not JSON serializable: {exc}") from exc


def _decode(text: str, *, source: str) -> Any:
    if not text:
        # An empty document is an empty collection.
        return []
    try:
        return json.loads(text)
    except ValueError as exc:
        raise StorageReadFailure(f"Could not parse {source}: {exc}", parse_error=True) from exc


class JsonFileDocument:
    """A pretty-printed UTF-8 JSON file, created from ``default_factory`` on first read."""

    def __init__(self, path: Path, default_factory: Callable[[], Any] = list) -> None:
        self.path = Path(path)
        self.default_factory = default_factory

    @property
    def key(self) -> str:
        return str(self.path.expanduser().resolve())

    def read_all(self) -> Any:
        try:
            if not self.path.exists():
                logger.info("Creating document %s", self.path)
                self._write_text(_encode(self.default_factory()))
            text = self.path.read_text(encoding="utf-8")
        except StorageWriteFailure as exc:
            raise StorageReadFailure(f"Could not create {self.path}: {exc}") from exc
        except OSError as exc:
            raise StorageReadFailure(f"Could not read {self.path}: {exc}") from exc
        return _decode(text, source=str(self.path))

    def write_all(self, data: Any) -> None:
        # Plain overwrite: a crash mid-write can leave the file truncated.
        self._write_text(_encode(data))

    def _write_text(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise StorageWriteFailure(f"Could not write {self.path}: {exc}") from exc


class MemoryDocument:
    """In-process document holding serialized JSON text; used to substitute the file backend."""

    def __init__(
        self,
        key: str = "memory",
        *,
        raw: Optional[str] = None,
        default_factory: Callable[[], Any] = list,
    ) -> None:
        self.key = key
        self.raw = raw
        self.default_factory = default_factory

    def read_all(self) -> Any:
        if self.raw is None:
            self.raw = _encode(self.default_factory())
        return _decode(self.raw, source=f"memory document {self.key!r}")

    def write_all(self, data: Any) -> None:
        self.raw = _encode(data)


# Process-wide, keyed by document so separate store instances over one file share a lock.
_LOCKS: Dict[str, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


def document_lock(key: str) -> threading.Lock:
    with _LOCKS_GUARD:
        lock = _LOCKS.get(key)
        if lock is None:
            lock = threading.Lock()
            _LOCKS[key] = lock
        return lock


@contextmanager
def exclusive(document: Document, enabled: bool = True) -> Iterator[None]:
    """Hold the document's lock for the duration of the block when ``enabled``."""
    if not enabled:
        yield
        return
    with document_lock(document.key):
        yield
