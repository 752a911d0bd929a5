"""Optional integration tests against real-world CSV uploads.

These tests are skipped by default and only run when `NINJA_IMPORT_INTEGRATION_DIR`
is set to a directory containing `.csv` files.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ninja_import.cli.main import app
from ninja_import.core.reader import Strategy, normalize_bytes, normalize_file

runner = CliRunner()


def _get_integration_dir() -> Path:
    value = os.environ.get("NINJA_IMPORT_INTEGRATION_DIR")
    if not value:
        pytest.skip("Set NINJA_IMPORT_INTEGRATION_DIR to run integration tests.")

    path = Path(value)
    if not path.exists() or not path.is_dir():
        pytest.skip(f"NINJA_IMPORT_INTEGRATION_DIR is not a directory: {path}")

    return path


def _get_limit() -> int:
    raw = os.environ.get("NINJA_IMPORT_INTEGRATION_LIMIT", "10").strip()
    if not raw:
        return 10
    try:
        value = int(raw)
    except ValueError:
        pytest.skip("NINJA_IMPORT_INTEGRATION_LIMIT must be an integer.")
    return value


def _get_files() -> list[Path]:
    integration_dir = _get_integration_dir()
    limit = _get_limit()

    files = sorted(
        p for p in integration_dir.rglob("*.csv") if p.is_file() and not p.name.startswith(".")
    )
    if not files:
        pytest.skip(f"No .csv files found under: {integration_dir}")

    return files if limit <= 0 else files[:limit]


def test_inspect_real_uploads_as_json() -> None:
    for file_path in _get_files():
        result = runner.invoke(app, ["inspect", str(file_path), "--format", "json", "--no-color"])

        assert result.exit_code in (0, 1), (file_path, result.exit_code, result.output)
        assert json.loads(result.stdout)["delimiter"] in (",", ".", ";", "|")


def test_normalized_uploads_are_stable() -> None:
    for file_path in _get_files():
        first = normalize_file(file_path)
        if not first.valid:
            continue

        second = normalize_bytes(first.text.encode("utf-8"))
        assert second.text == first.text, file_path
        assert second.strategy == Strategy.CLEAN_UTF8, file_path
