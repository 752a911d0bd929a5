"""Tests for runtime settings."""

import pytest
from pydantic import ValidationError

from ninja_import.core.config import (
    DEFAULT_APP_NAME,
    DEFAULT_MAX_BYTES,
    ConfigError,
    ImportSettings,
)


class TestImportSettings:
    """Tests for ImportSettings."""

    def test_defaults(self) -> None:
        settings = ImportSettings()

        assert settings.max_bytes == DEFAULT_MAX_BYTES
        assert settings.app_name == DEFAULT_APP_NAME
        assert settings.preview_rows == 2

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_means_unlimited(self, value: int) -> None:
        assert ImportSettings(max_bytes=value).max_bytes is None

    def test_preview_rows_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ImportSettings(preview_rows=0)

    def test_frozen(self) -> None:
        settings = ImportSettings()
        with pytest.raises(ValidationError):
            settings.max_bytes = 1  # type: ignore[misc]


class TestFromEnv:
    """Tests for ImportSettings.from_env."""

    def test_no_environment(self) -> None:
        assert ImportSettings.from_env() == ImportSettings()

    def test_max_bytes_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NINJA_IMPORT_MAX_BYTES", "1024")
        assert ImportSettings.from_env().max_bytes == 1024

    def test_zero_from_environment_is_unlimited(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NINJA_IMPORT_MAX_BYTES", "0")
        assert ImportSettings.from_env().max_bytes is None

    def test_explicit_value_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NINJA_IMPORT_MAX_BYTES", "1024")
        assert ImportSettings.from_env(max_bytes=10).max_bytes == 10

    def test_invalid_environment_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NINJA_IMPORT_MAX_BYTES", "lots")
        with pytest.raises(ConfigError, match="NINJA_IMPORT_MAX_BYTES"):
            ImportSettings.from_env()

    def test_app_name_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NINJA_IMPORT_APP_NAME", "Acme Billing")
        assert ImportSettings.from_env().app_name == "Acme Billing"
