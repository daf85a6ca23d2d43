"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from resource_gateway.exceptions import ConfigurationError
from resource_gateway.settings import DEFAULT_PORT, PACKAGE_FILES_DIR, Settings

ENV_VARS = (
    "HOST",
    "PORT",
    "AUTH_MODE",
    "FILES_DIR",
    "COOKIE_SECURE",
    "CORS_ORIGINS",
    "DEMO_PASSWORD",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate from the developer's environment and any .env file."""
    for name in ENV_VARS:
        # setenv first so teardown also removes values loaded from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_defaults(self) -> None:
        settings = Settings.from_env()

        assert settings.port == DEFAULT_PORT == 3000
        assert settings.auth_mode == "header"
        assert settings.files_dir == PACKAGE_FILES_DIR
        assert settings.cookie_secure is False
        assert settings.log_level == "INFO"

    def test_bundled_files_exist(self) -> None:
        """Every default allow-list entry ships with the package."""
        settings = Settings()
        for relative in settings.allowed_files.values():
            assert (PACKAGE_FILES_DIR / relative).is_file(), relative


class TestFromEnv:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("PORT", "4000")
        monkeypatch.setenv("AUTH_MODE", "Session")
        monkeypatch.setenv("FILES_DIR", str(tmp_path))
        monkeypatch.setenv("COOKIE_SECURE", "yes")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.port == 4000
        assert settings.auth_mode == "session"
        assert settings.files_dir == tmp_path
        assert settings.cookie_secure is True
        assert settings.cors_origins == ("https://a.example", "https://b.example")
        assert settings.log_level == "DEBUG"

    def test_reads_dotenv_file(self, tmp_path: Path) -> None:
        """A .env in the working directory is honoured."""
        (tmp_path / ".env").write_text("PORT=4100\n")
        assert Settings.from_env().port == 4100

    @pytest.mark.parametrize("value", ["abc", "0", "70000", "-1"])
    def test_invalid_port(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("PORT", value)
        with pytest.raises(ConfigurationError, match="PORT"):
            Settings.from_env()

    def test_invalid_boolean(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COOKIE_SECURE", "maybe")
        with pytest.raises(ConfigurationError, match="COOKIE_SECURE"):
            Settings.from_env()

    def test_invalid_auth_mode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AUTH_MODE", "jwt")
        with pytest.raises(ConfigurationError, match="AUTH_MODE"):
            Settings.from_env()

    def test_empty_demo_password_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="DEMO_PASSWORD"):
            Settings(demo_password="")

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            Settings.from_env()
