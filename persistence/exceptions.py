from __future__ import annotations

from pathlib import Path


class RecordStoreError(Exception):
    """Base class for failures of a file-backed record store."""

    def __init__(self, message: str, *, path: Path):
        super().__init__(message)
        self.path = path


class StoreReadError(RecordStoreError):
    """The backing document exists but could not be read."""


class CorruptStoreError(RecordStoreError):
    """The backing document exists but does not hold a valid record set."""


class StoreWriteError(RecordStoreError):
    """Writing the backing document did not complete."""
