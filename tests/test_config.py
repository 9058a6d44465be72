from __future__ import annotations

from pathlib import Path

import pytest

from pgwizard.config import DEFAULT_TIMEOUT_S, load_settings

ENV_KEYS = (
    "PGWIZARD_BACKEND_URL",
    "PGWIZARD_TIMEOUT_S",
    "PGWIZARD_DRAFT_KIND",
    "PGWIZARD_DRAFT_MODE",
    "PGWIZARD_AUTH_TOKEN",
    "PGWIZARD_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "missing.env")
    assert settings.timeout_s == DEFAULT_TIMEOUT_S
    assert settings.draft_mode == "http"
    assert settings.draft_kind == "PG"
    assert settings.notes == ()


def test_dotenv_does_not_override_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local\nexport PGWIZARD_BACKEND_URL=\"https://api.example.test/\"\nPGWIZARD_TIMEOUT_S=3\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("PGWIZARD_TIMEOUT_S", "7.5")
    # load_dotenv writes to os.environ; let monkeypatch restore it afterwards
    monkeypatch.setenv("PGWIZARD_BACKEND_URL", "")
    monkeypatch.delenv("PGWIZARD_BACKEND_URL")

    settings = load_settings(env_file)

    assert settings.backend_url == "https://api.example.test"
    assert settings.timeout_s == 7.5


def test_bad_values_fall_back_with_notes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PGWIZARD_TIMEOUT_S", "soon")
    monkeypatch.setenv("PGWIZARD_DRAFT_MODE", "fax")
    monkeypatch.setenv("PGWIZARD_LOG_LEVEL", "chatty")

    settings = load_settings(tmp_path / "missing.env")

    assert settings.timeout_s == DEFAULT_TIMEOUT_S
    assert settings.draft_mode == "http"
    assert settings.log_level == "WARNING"
    assert len(settings.notes) == 3
