"""Configuration primitives for the salary downloader."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional, TypeVar

from dotenv import load_dotenv
from sqlalchemy.engine import URL

DEFAULT_BLS_API_URL = "https://api.bls.gov/publicAPI/v2/timeseries/data/"


class ConfigurationError(ValueError):
    """Raised when a required configuration value is missing or invalid."""


def _load_env(dotenv_path: Optional[Path] = None) -> None:
    """Load the .env file once for the process."""

    if getattr(_load_env, "_loaded", False):  # type: ignore[attr-defined]
        return

    load_dotenv(dotenv_path)
    setattr(_load_env, "_loaded", True)  # type: ignore[attr-defined]


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


_Number = TypeVar("_Number", int, float)


def _env_number(name: str, default: _Number, cast: Callable[[str], _Number]) -> _Number:
    """Read a numeric variable, naming it in the error when it does not parse."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection details for the salary database."""

    driver: str = "mysql+pymysql"
    host: str = ""
    port: int = 3306
    user: str = ""
    password: str = ""
    name: str = ""

    # Environment variable backing each required field.
    REQUIRED_ENV = {
        "host": "MYSQL_HOST",
        "name": "MYSQL_DATABASE",
        "user": "MYSQL_USERNAME",
        "password": "MYSQL_PASSWORD",
    }

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Instantiate settings from ``MYSQL_*`` environment variables."""

        defaults = cls()
        return cls(
            driver=os.getenv("DB_DRIVER", defaults.driver),
            host=os.getenv("MYSQL_HOST", defaults.host),
            port=_env_number("MYSQL_PORT", defaults.port, int),
            user=os.getenv("MYSQL_USERNAME", defaults.user),
            password=os.getenv("MYSQL_PASSWORD", defaults.password),
            name=os.getenv("MYSQL_DATABASE", defaults.name),
        )

    def missing(self) -> list[str]:
        """Return the environment variable names whose values are empty."""

        return [env for attr, env in self.REQUIRED_ENV.items() if not getattr(self, attr)]

    @property
    def sqlalchemy_url(self) -> str:
        """Return a SQLAlchemy compatible URL."""

        url = URL.create(
            self.driver,
            username=self.user or None,
            password=self.password or None,
            host=self.host or None,
            port=self.port,
            database=self.name or None,
        )
        return url.render_as_string(hide_password=False)

    @property
    def masked_url(self) -> str:
        pwd = "***" if self.password else ""
        return f"{self.driver}://{self.user}:{pwd}@{self.host}:{self.port}/{self.name}"


@dataclass(frozen=True)
class BlsSettings:
    """Settings for the BLS public API client."""

    api_key: str = ""
    api_url: str = DEFAULT_BLS_API_URL
    timeout: float = 30.0
    max_attempts: int = 3
    retry_delay: float = 1.0
    request_delay: float = 0.5

    @classmethod
    def from_env(cls) -> "BlsSettings":
        defaults = cls()
        return cls(
            api_key=os.getenv("BLS_KEY", defaults.api_key).strip(),
            api_url=os.getenv("BLS_API_URL", defaults.api_url),
            timeout=_env_number("BLS_TIMEOUT", defaults.timeout, float),
            max_attempts=_env_number("BLS_MAX_ATTEMPTS", defaults.max_attempts, int),
            retry_delay=_env_number("BLS_RETRY_DELAY", defaults.retry_delay, float),
            request_delay=_env_number("BLS_REQUEST_DELAY", defaults.request_delay, float),
        )


@dataclass(frozen=True)
class Settings:
    """Container for the downloader configuration."""

    database: DatabaseSettings = field(default_factory=DatabaseSettings)
    bls: BlsSettings = field(default_factory=BlsSettings)
    sqlalchemy_echo: bool = False

    @classmethod
    def from_env(cls, dotenv_path: Optional[Path] = None) -> "Settings":
        """Build ``Settings`` using environment variables (optionally from ``.env``)."""

        _load_env(dotenv_path)

        return cls(
            database=DatabaseSettings.from_env(),
            bls=BlsSettings.from_env(),
            sqlalchemy_echo=_env_flag("SQLALCHEMY_ECHO"),
        )

    def validate(self) -> "Settings":
        """Raise ``ConfigurationError`` unless every required value is present."""

        if not self.bls.api_key:
            raise ConfigurationError(
                "BLS API key not found. Please set BLS_KEY environment variable."
            )
        missing = self.database.missing()
        if missing:
            raise ConfigurationError(
                "Missing required environment variables: " + ", ".join(missing)
            )
        if self.bls.max_attempts < 1:
            raise ConfigurationError("BLS_MAX_ATTEMPTS must be at least 1")
        return self


@lru_cache()
def get_settings(dotenv_path: Optional[Path] = None) -> Settings:
    """Return a cached settings instance."""

    return Settings.from_env(dotenv_path=dotenv_path)
