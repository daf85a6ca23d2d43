"""Application settings, read from the environment (and an optional .env)."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from resource_gateway.exceptions import ConfigurationError

PACKAGE_FILES_DIR = Path(__file__).parent / "files"

DEFAULT_PORT = 3000
DEFAULT_CORS_ORIGINS = ("http://localhost:3001", "http://127.0.0.1:3001")

# Public name -> path relative to the files directory, for /read-no-validate
DEFAULT_ALLOWED_FILES: dict[str, str] = {
    "welcome": "welcome.txt",
    "terms": "terms.txt",
    "report": "reports/q1.txt",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _env_port(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        port = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ConfigurationError(f"{name} must be between 1 and 65535, got {port}")
    return port


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for one gateway process.

    Attributes:
        host: Interface uvicorn binds to.
        port: Listening port (``PORT``).
        auth_mode: Identity resolver guarding ``/`` and ``/orders/{id}``:
            ``header`` (X-User-Id, insecure teaching baseline) or ``session``.
        files_dir: Base directory served by ``/read`` and ``/read-no-validate``.
        allowed_files: Allow-list used by ``/read-no-validate``.
        cookie_secure: Whether the session cookie carries ``Secure``.
        cors_origins: Front-end origins allowed to call with credentials.
        demo_password: Password given to every seeded user.
        log_level: Level for the package logger.
    """

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    auth_mode: str = "header"
    files_dir: Path = PACKAGE_FILES_DIR
    allowed_files: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_ALLOWED_FILES))
    cookie_secure: bool = False
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    demo_password: str = "password123"
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.auth_mode not in ("header", "session"):
            raise ConfigurationError(
                f"AUTH_MODE must be one of ['header', 'session'], got {self.auth_mode!r}"
            )
        if not self.demo_password:
            raise ConfigurationError("DEMO_PASSWORD must not be empty")
        if self.log_level not in logging.getLevelNamesMapping():
            raise ConfigurationError(
                f"LOG_LEVEL must be a logging level name, got {self.log_level!r}"
            )

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, loading ./.env first."""
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            host=os.getenv("HOST", "127.0.0.1"),
            port=_env_port("PORT", DEFAULT_PORT),
            auth_mode=os.getenv("AUTH_MODE", "header").strip().lower(),
            files_dir=Path(os.getenv("FILES_DIR", str(PACKAGE_FILES_DIR))),
            cookie_secure=_env_bool("COOKIE_SECURE", False),
            cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
            demo_password=os.getenv("DEMO_PASSWORD", "password123"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
