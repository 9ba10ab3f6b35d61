from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from persistence.disk_store import DEFAULT_CORRUPT_POLICY, CorruptPolicy


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_corrupt_policy(name: str, default: CorruptPolicy) -> CorruptPolicy:
    raw = (os.getenv(name) or "").strip().lower()
    try:
        return CorruptPolicy(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    # Storage
    data_root: Path
    corrupt_policy: CorruptPolicy

    # Logging
    log_level: str
    debug_log_requests: bool

    # HTTP
    cors_allow_origins: tuple[str, ...]


def get_settings() -> Settings:
    data_root = Path(os.getenv("SHOP_DATA_ROOT") or Path.cwd()).expanduser()
    corrupt_policy = _env_corrupt_policy("STORE_CORRUPT_POLICY", DEFAULT_CORRUPT_POLICY)

    log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)

    origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
    cors_allow_origins = tuple(o.strip() for o in origins.split(",") if o.strip()) or ("*",)

    return Settings(
        data_root=data_root,
        corrupt_policy=corrupt_policy,
        log_level=log_level,
        debug_log_requests=debug_log_requests,
        cors_allow_origins=cors_allow_origins,
    )
