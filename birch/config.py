from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


def repo_root() -> Path:
    # Project root is the directory that contains the `birch/` package.
    return Path(__file__).resolve().parents[1]


def load_env() -> None:
    # Prefer a project-local `.env`, fall back to searching from CWD.
    root_env = repo_root() / ".env"
    env_path = str(root_env) if root_env.exists() else (find_dotenv(usecwd=True) or str(root_env))
    load_dotenv(env_path)


@dataclass(frozen=True)
class BirchSettings:
    trace: bool
    max_steps: int | None


def _parse_max_steps(raw: str | None) -> int | None:
    raw = (raw or "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"BIRCH_MAX_STEPS must be an integer: {raw!r}") from e
    if value < 0:
        raise ValueError(f"BIRCH_MAX_STEPS must be >= 0: {raw!r}")
    return value


def load_settings() -> BirchSettings:
    load_env()
    return BirchSettings(
        trace=(os.getenv("BIRCH_TRACE") or "").strip().lower() in _TRUTHY,
        max_steps=_parse_max_steps(os.getenv("BIRCH_MAX_STEPS")),
    )
