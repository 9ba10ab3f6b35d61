from __future__ import annotations

import contextlib
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Generic, Iterator, TypeVar, Union

from .disk_store import DEFAULT_CORRUPT_POLICY, CorruptPolicy, DiskJsonDocumentStore

RecordId = Union[str, int]
RecordSetT = TypeVar("RecordSetT")


def id_key(record_id: RecordId) -> str:
    """Comparison key for ids: 101 and "101" name the same record."""
    return str(record_id)


def same_id(a: RecordId | None, b: RecordId | None) -> bool:
    if a is None or b is None:
        return False
    return id_key(a) == id_key(b)


class Mutation(Generic[RecordSetT]):
    """Handle yielded by FileBackedRecordStore.mutate()."""

    def __init__(self, record_set: RecordSetT):
        self.record_set = record_set
        self.aborted = False

    def abort(self) -> None:
        """Leave the document untouched when the block exits."""
        self.aborted = True


class FileBackedRecordStore(ABC, Generic[RecordSetT]):
    """
    Keeps one record set in a single JSON document.

    Every call re-reads the document; every mutation rewrites it in full.
    Mutations hold the document's path lock for the whole read-modify-write
    cycle, which serializes writers inside this process only. Writers in
    other processes can still overwrite each other (last write wins).
    """

    def __init__(self, path: Path, *, corrupt_policy: CorruptPolicy = DEFAULT_CORRUPT_POLICY):
        self._store = DiskJsonDocumentStore(path, corrupt_policy=corrupt_policy)

    @property
    def path(self) -> Path:
        return self._store.path

    @abstractmethod
    def empty(self) -> RecordSetT:
        ...

    @abstractmethod
    def parse(self, doc: Any) -> RecordSetT:
        """Build a record set from a decoded document; raise ValueError if it does not fit."""
        ...

    @abstractmethod
    def dump(self, record_set: RecordSetT) -> Any:
        ...

    def load(self) -> RecordSetT:
        with self._store.locked():
            doc = self._store.load()
            if doc is None:
                return self.empty()
            try:
                return self.parse(doc)
            except (TypeError, ValueError) as e:
                self._store.recover_corrupt(str(e))
                return self.empty()

    def query_all(self) -> RecordSetT:
        return self.load()

    def write(self, record_set: RecordSetT) -> None:
        self._store.save(self.dump(record_set))

    @contextlib.contextmanager
    def mutate(self) -> Iterator[Mutation[RecordSetT]]:
        with self._store.locked():
            mutation = Mutation(self.load())
            yield mutation
            if not mutation.aborted:
                self.write(mutation.record_set)
