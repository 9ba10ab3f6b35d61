from __future__ import annotations

import contextlib
import logging
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Iterator

from json_store import ReadStatus, atomic_write_json, read_json_document

from .exceptions import CorruptStoreError, StoreReadError, StoreWriteError
from .interfaces import JsonDocumentStore
from .locks import GLOBAL_PATH_LOCKS

logger = logging.getLogger(__name__)


class CorruptPolicy(str, Enum):
    LENIENT = "lenient"
    QUARANTINE = "quarantine"
    STRICT = "strict"


DEFAULT_CORRUPT_POLICY = CorruptPolicy.QUARANTINE


class DiskJsonDocumentStore(JsonDocumentStore):
    """
    Stores a single JSON document on disk at a fixed path.

    - Returns None on missing/empty documents.
    - Unreadable documents are handled according to the corrupt policy.
    - Writes atomically; write failures raise StoreWriteError.
    """

    def __init__(self, path: Path, *, corrupt_policy: CorruptPolicy = DEFAULT_CORRUPT_POLICY):
        self._path = Path(path)
        self._corrupt_policy = CorruptPolicy(corrupt_policy)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def corrupt_policy(self) -> CorruptPolicy:
        return self._corrupt_policy

    def exists(self) -> bool:
        return self._path.exists()

    @contextlib.contextmanager
    def locked(self) -> Iterator[None]:
        with GLOBAL_PATH_LOCKS.hold(self._path):
            yield

    def load(self) -> Any | None:
        with self.locked():
            try:
                result = read_json_document(self._path)
            except OSError as e:
                raise StoreReadError(f"failed to read {self._path}: {e}", path=self._path) from e
            if result.status is ReadStatus.CORRUPT:
                self.recover_corrupt(result.error or "invalid JSON")
                return None
            return result.payload

    def save(self, doc: Any) -> None:
        with self.locked():
            try:
                atomic_write_json(self._path, doc)
            except (OSError, TypeError, ValueError) as e:
                logger.warning("STORE SAVE: failed to write %s: %r", self._path, e)
                raise StoreWriteError(f"failed to write {self._path}: {e}", path=self._path) from e

    def recover_corrupt(self, reason: str) -> None:
        """
        Apply the corrupt policy to the current document.

        Returns normally when the caller should continue with an empty store.
        """
        if self._corrupt_policy is CorruptPolicy.STRICT:
            raise CorruptStoreError(f"unreadable document {self._path}: {reason}", path=self._path)

        if self._corrupt_policy is CorruptPolicy.LENIENT:
            logger.warning("STORE LOAD: could not parse %s, starting empty: %s", self._path, reason)
            return

        with self.locked():
            aside = self._quarantine_path()
            try:
                self._path.replace(aside)
            except FileNotFoundError:
                return
            except OSError as e:
                raise StoreReadError(f"failed to quarantine {self._path}: {e}", path=self._path) from e
        logger.warning("STORE LOAD: moved unreadable %s to %s, starting empty: %s", self._path, aside, reason)

    def _quarantine_path(self) -> Path:
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        return self._path.with_name(f"{self._path.name}.corrupt-{stamp}")
