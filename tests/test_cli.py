from __future__ import annotations

import json
import os
from pathlib import Path
import subprocess
import sys
from typing import Any

SRC_DIR = Path(__file__).resolve().parents[1] / "src"


def _run(tmp_path: Path, *args: str) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONDONTWRITEBYTECODE"] = "1"
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    env["PGWIZARD_DRAFT_MODE"] = "memory"
    return subprocess.run(
        [sys.executable, "-m", "pgwizard.cli", *args],
        capture_output=True,
        text=True,
        env=env,
        cwd=tmp_path,
    )


def test_validate_exit_codes(tmp_path: Path, complete_form_data: dict[str, Any]) -> None:
    valid_path = tmp_path / "valid.json"
    valid_path.write_text(json.dumps(complete_form_data), encoding="utf-8")
    assert _run(tmp_path, "validate", str(valid_path)).returncode == 0

    invalid_path = tmp_path / "invalid.json"
    invalid_path.write_text("{}", encoding="utf-8")
    result_invalid = _run(tmp_path, "validate", str(invalid_path))
    assert result_invalid.returncode == 1
    assert "Basic Details" in result_invalid.stdout + result_invalid.stderr


def test_validate_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert _run(tmp_path, "validate", str(path)).returncode == 1


def test_fill_creates_draft_in_memory_mode(tmp_path: Path) -> None:
    payload = tmp_path / "basic.json"
    payload.write_text(
        json.dumps({"propertyName": "Test PG", "genderAllowed": "Gents", "description": "x" * 60}),
        encoding="utf-8",
    )
    result = _run(tmp_path, "fill", "basic-details", str(payload))
    assert result.returncode == 0, result.stderr
    assert "draft-0001" in result.stdout


def test_fill_unknown_step(tmp_path: Path) -> None:
    payload = tmp_path / "p.json"
    payload.write_text("{}", encoding="utf-8")
    assert _run(tmp_path, "fill", "no-such-step", str(payload)).returncode == 1


def test_steps_lists_catalog(tmp_path: Path) -> None:
    result = _run(tmp_path, "steps")
    assert result.returncode == 0
    assert "review-submit" in result.stdout
