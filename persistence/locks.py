from __future__ import annotations

import _thread
import contextlib
import threading
from pathlib import Path
from typing import Iterator


class PathLockRegistry:
    """
    Hands out one re-entrant lock per resolved document path.

    Re-entrancy lets a store's read-modify-write scope call its own load/save
    while it already holds the document's lock. Distinct documents never
    contend with each other.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, _thread.RLock] = {}

    @staticmethod
    def key_for(path: Path) -> str:
        return str(Path(path).resolve())

    def lock_for(self, path: Path) -> _thread.RLock:
        key = self.key_for(path)
        with self._guard:
            return self._locks.setdefault(key, threading.RLock())

    @contextlib.contextmanager
    def hold(self, path: Path) -> Iterator[None]:
        """Hold the lock for `path` for the duration of the block."""
        with self.lock_for(path):
            yield


GLOBAL_PATH_LOCKS = PathLockRegistry()
