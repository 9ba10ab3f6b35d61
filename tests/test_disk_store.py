from __future__ import annotations

import json
from pathlib import Path

import pytest

from persistence.disk_store import CorruptPolicy, DiskJsonDocumentStore
from persistence.exceptions import CorruptStoreError, StoreReadError, StoreWriteError


def _corrupt(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text('{"products": [', encoding="utf-8")


def test_missing_document_loads_as_none(tmp_path: Path):
    store = DiskJsonDocumentStore(tmp_path / "data" / "cart.json")
    assert store.load() is None
    assert not store.exists()


def test_save_then_load(tmp_path: Path):
    store = DiskJsonDocumentStore(tmp_path / "data" / "cart.json")
    store.save({"products": [{"id": 1, "quantity": 2}], "totalPrice": 3.5})
    assert store.exists()
    assert store.load() == {"products": [{"id": 1, "quantity": 2}], "totalPrice": 3.5}


def test_lenient_policy_keeps_unreadable_document(tmp_path: Path):
    path = tmp_path / "cart.json"
    _corrupt(path)
    store = DiskJsonDocumentStore(path, corrupt_policy=CorruptPolicy.LENIENT)

    assert store.load() is None
    assert path.read_text(encoding="utf-8") == '{"products": ['


def test_quarantine_policy_moves_document_aside(tmp_path: Path):
    path = tmp_path / "cart.json"
    _corrupt(path)
    store = DiskJsonDocumentStore(path)
    assert store.corrupt_policy is CorruptPolicy.QUARANTINE

    assert store.load() is None
    assert not path.exists()
    aside = list(tmp_path.glob("cart.json.corrupt-*"))
    assert len(aside) == 1
    assert aside[0].read_text(encoding="utf-8") == '{"products": ['


def test_strict_policy_raises(tmp_path: Path):
    path = tmp_path / "cart.json"
    _corrupt(path)
    store = DiskJsonDocumentStore(path, corrupt_policy="strict")

    with pytest.raises(CorruptStoreError) as excinfo:
        store.load()
    assert excinfo.value.path == path
    assert path.exists()


def test_unreadable_path_raises_read_error(tmp_path: Path):
    path = tmp_path / "cart.json"
    path.mkdir()
    with pytest.raises(StoreReadError):
        DiskJsonDocumentStore(path).load()


def test_write_failure_is_reported(tmp_path: Path):
    # "data" exists as a plain file, so the parent directory cannot be created.
    (tmp_path / "data").write_text("", encoding="utf-8")
    store = DiskJsonDocumentStore(tmp_path / "data" / "cart.json")

    with pytest.raises(StoreWriteError) as excinfo:
        store.save({"products": [], "totalPrice": 0})
    assert excinfo.value.path == tmp_path / "data" / "cart.json"


def test_unserializable_document_is_a_write_failure(tmp_path: Path):
    path = tmp_path / "cart.json"
    store = DiskJsonDocumentStore(path)
    store.save({"v": 1})

    with pytest.raises(StoreWriteError):
        store.save({"v": {1, 2}})
    assert json.loads(path.read_text(encoding="utf-8")) == {"v": 1}


def _undecodable(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\xff[]")


def test_undecodable_document_lenient(tmp_path: Path):
    path = tmp_path / "cart.json"
    _undecodable(path)
    store = DiskJsonDocumentStore(path, corrupt_policy=CorruptPolicy.LENIENT)

    assert store.load() is None
    assert path.read_bytes() == b"\xff[]"


def test_undecodable_document_quarantined(tmp_path: Path):
    path = tmp_path / "cart.json"
    _undecodable(path)
    store = DiskJsonDocumentStore(path)

    assert store.load() is None
    assert not path.exists()
    aside = list(tmp_path.glob("cart.json.corrupt-*"))
    assert len(aside) == 1
    assert aside[0].read_bytes() == b"\xff[]"


def test_undecodable_document_strict(tmp_path: Path):
    path = tmp_path / "cart.json"
    _undecodable(path)
    store = DiskJsonDocumentStore(path, corrupt_policy=CorruptPolicy.STRICT)

    with pytest.raises(CorruptStoreError):
        store.load()
    assert path.read_bytes() == b"\xff[]"
