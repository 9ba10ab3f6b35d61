from __future__ import annotations

import json
from pathlib import Path

import pytest

from json_store import ReadStatus, atomic_write_json, read_json_document


def test_read_missing_file(tmp_path: Path):
    result = read_json_document(tmp_path / "nope.json")
    assert result.status is ReadStatus.MISSING
    assert result.payload is None


@pytest.mark.parametrize("content", ["", "   \n"])
def test_read_empty_file(tmp_path: Path, content: str):
    path = tmp_path / "empty.json"
    path.write_text(content, encoding="utf-8")
    assert read_json_document(path).status is ReadStatus.EMPTY


def test_read_corrupt_file_reports_parser_error(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    result = read_json_document(path)
    assert result.status is ReadStatus.CORRUPT
    assert result.error


def test_atomic_write_creates_parents_and_leaves_no_temp(tmp_path: Path):
    path = tmp_path / "data" / "cart.json"
    atomic_write_json(path, {"products": [], "totalPrice": 0})

    assert json.loads(path.read_text(encoding="utf-8")) == {"products": [], "totalPrice": 0}
    assert not path.with_suffix(".json.tmp").exists()
    result = read_json_document(path)
    assert result.status is ReadStatus.OK
    assert result.payload == {"products": [], "totalPrice": 0}


def test_atomic_write_failure_keeps_previous_document(tmp_path: Path):
    path = tmp_path / "cart.json"
    atomic_write_json(path, {"ok": True})

    with pytest.raises(TypeError):
        atomic_write_json(path, {"bad": object()})

    assert json.loads(path.read_text(encoding="utf-8")) == {"ok": True}
    assert not path.with_suffix(".json.tmp").exists()


@pytest.mark.parametrize("data", [b"\xff[]", b'{"products": []}\xff\xfe'])
def test_read_undecodable_bytes_is_corrupt(tmp_path: Path, data: bytes):
    path = tmp_path / "cart.json"
    path.write_bytes(data)
    result = read_json_document(path)
    assert result.status is ReadStatus.CORRUPT
    assert "utf-8" in result.error


def test_read_too_deeply_nested_json_is_corrupt(tmp_path: Path):
    path = tmp_path / "deep.json"
    path.write_text("[" * 200_000 + "]" * 200_000, encoding="utf-8")
    result = read_json_document(path)
    assert result.status is ReadStatus.CORRUPT
    assert result.error
