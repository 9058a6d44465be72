"""Runtime settings resolved from the environment and an optional .env file."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

DEFAULT_BACKEND_URL = "http://localhost:3000"
DEFAULT_TIMEOUT_S = 15.0
DRAFT_KIND_PG = "PG"
DRAFT_MODES = ("http", "memory")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class WizardSettings:
    backend_url: str = DEFAULT_BACKEND_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    draft_kind: str = DRAFT_KIND_PG
    draft_mode: str = "http"
    auth_token: str | None = None
    log_level: str = "WARNING"
    notes: tuple[str, ...] = ()


def load_settings(env_path: str | Path = ".env") -> WizardSettings:
    """Build settings from ``PGWIZARD_*`` variables; values already in the environment win over .env."""
    load_dotenv(env_path)
    notes: list[str] = []

    timeout_raw = os.getenv("PGWIZARD_TIMEOUT_S")
    timeout_s = DEFAULT_TIMEOUT_S
    if timeout_raw:
        try:
            timeout_s = float(timeout_raw)
        except ValueError:
            notes.append(f"PGWIZARD_TIMEOUT_S={timeout_raw!r} is not a number; using {DEFAULT_TIMEOUT_S}.")
        else:
            if timeout_s <= 0:
                notes.append("PGWIZARD_TIMEOUT_S must be positive; using the default.")
                timeout_s = DEFAULT_TIMEOUT_S

    draft_mode = (os.getenv("PGWIZARD_DRAFT_MODE") or "http").strip().lower()
    if draft_mode not in DRAFT_MODES:
        notes.append(f"Unknown PGWIZARD_DRAFT_MODE {draft_mode!r}; using http.")
        draft_mode = "http"

    log_level = (os.getenv("PGWIZARD_LOG_LEVEL") or "WARNING").strip().upper()
    if log_level not in LOG_LEVELS:
        notes.append(f"Unknown PGWIZARD_LOG_LEVEL {log_level!r}; using WARNING.")
        log_level = "WARNING"

    return WizardSettings(
        backend_url=(os.getenv("PGWIZARD_BACKEND_URL") or DEFAULT_BACKEND_URL).rstrip("/"),
        timeout_s=timeout_s,
        draft_kind=os.getenv("PGWIZARD_DRAFT_KIND") or DRAFT_KIND_PG,
        draft_mode=draft_mode,
        auth_token=os.getenv("PGWIZARD_AUTH_TOKEN") or None,
        log_level=log_level,
        notes=tuple(notes),
    )


def load_dotenv(path: str | Path = ".env") -> bool:
    env_path = Path(path)
    if not env_path.is_file():
        return False
    try:
        text = env_path.read_text(encoding="utf-8")
    except OSError:
        return False

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        if stripped.startswith("export "):
            stripped = stripped[len("export "):].lstrip()
        key, value = (part.strip() for part in stripped.split("=", 1))
        if not key or not value:
            continue
        if len(value) > 1 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]
        os.environ.setdefault(key, value)
    return True
