from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class ReadStatus(str, Enum):
    OK = "ok"
    MISSING = "missing"
    EMPTY = "empty"
    CORRUPT = "corrupt"


@dataclass(frozen=True)
class ReadResult:
    status: ReadStatus
    payload: Any = None
    error: str | None = None


def read_json_document(path: Path) -> ReadResult:
    """
    Read JSON from disk and classify the outcome.

    Missing files, empty files, undecodable bytes and invalid JSON are
    reported through the result status instead of raising. Other OS errors
    propagate.
    """
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        return ReadResult(ReadStatus.MISSING)
    try:
        raw = data.decode("utf-8")
    except UnicodeDecodeError as e:
        return ReadResult(ReadStatus.CORRUPT, error=str(e))
    if not raw.strip():
        return ReadResult(ReadStatus.EMPTY)
    try:
        return ReadResult(ReadStatus.OK, payload=json.loads(raw))
    except (json.JSONDecodeError, RecursionError) as e:
        return ReadResult(ReadStatus.CORRUPT, error=str(e) or type(e).__name__)


def atomic_write_json(path: Path, payload: Any, *, indent: int = 2, sort_keys: bool = True) -> None:
    """
    Atomically write JSON to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=indent, sort_keys=sort_keys)
            f.write("\n")
        tmp_path.replace(path)
    except BaseException:
        if tmp_path.is_file():
            tmp_path.unlink()
        raise
