from __future__ import annotations

from typing import Any, ContextManager, Protocol


class JsonDocumentStore(Protocol):
    """
    Minimal DB-friendly interface: a single JSON document persisted under a key.
    """

    def load(self) -> Any | None:
        """Load the full document, or None when there is nothing stored yet."""
        ...

    def save(self, doc: Any) -> None:
        """Persist the full document atomically."""
        ...

    def locked(self) -> ContextManager[None]:
        """Hold exclusive access to the document for a read-modify-write cycle."""
        ...
