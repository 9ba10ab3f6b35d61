from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for imports like `import persistence...` under pytest import modes
# that don't automatically prepend the cwd/rootdir to sys.path.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """
    A temp project directory so tests never touch a real ./data.
    """
    return tmp_path


@pytest.fixture
def settings(data_root: Path):
    from persistence.disk_store import CorruptPolicy
    from settings import Settings

    return Settings(
        data_root=data_root,
        corrupt_policy=CorruptPolicy.QUARANTINE,
        log_level="DEBUG",
        debug_log_requests=True,
        cors_allow_origins=("*",),
    )


@pytest.fixture
def client(settings):
    from fastapi.testclient import TestClient

    import app as app_module

    return TestClient(app_module.create_app(settings))
