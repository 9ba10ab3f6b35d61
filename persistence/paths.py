from __future__ import annotations

from pathlib import Path


def data_dir(root: Path) -> Path:
    return Path(root) / "data"


def store_path(root: Path, name: str) -> Path:
    # root is injected by the caller (settings or a test tmp dir); the
    # directory is created on first write.
    return data_dir(root) / f"{name}.json"
