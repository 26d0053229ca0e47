from __future__ import annotations

import pytest

from scm_salary.core import config
from scm_salary.core.config import (
    BlsSettings,
    ConfigurationError,
    DatabaseSettings,
    Settings,
)

_ENV_NAMES = (
    "MYSQL_HOST",
    "MYSQL_PORT",
    "MYSQL_DATABASE",
    "MYSQL_USERNAME",
    "MYSQL_PASSWORD",
    "DB_DRIVER",
    "BLS_KEY",
    "BLS_API_URL",
    "BLS_TIMEOUT",
    "BLS_MAX_ATTEMPTS",
    "BLS_RETRY_DELAY",
    "BLS_REQUEST_DELAY",
    "SQLALCHEMY_ECHO",
)


@pytest.fixture()
def clean_env(monkeypatch):
    monkeypatch.setattr(config, "_load_env", lambda dotenv_path=None: None)
    for name in _ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_from_env_reads_every_variable(clean_env) -> None:
    clean_env.setenv("MYSQL_HOST", "mysql.internal")
    clean_env.setenv("MYSQL_PORT", "3307")
    clean_env.setenv("MYSQL_DATABASE", "scm_salarydb")
    clean_env.setenv("MYSQL_USERNAME", "loader")
    clean_env.setenv("MYSQL_PASSWORD", "pw")
    clean_env.setenv("BLS_KEY", "  abc123  ")
    clean_env.setenv("BLS_MAX_ATTEMPTS", "5")
    clean_env.setenv("BLS_REQUEST_DELAY", "0.25")
    clean_env.setenv("SQLALCHEMY_ECHO", "yes")

    settings = Settings.from_env().validate()

    assert settings.database.host == "mysql.internal"
    assert settings.database.port == 3307
    assert settings.database.user == "loader"
    assert settings.bls.api_key == "abc123"
    assert settings.bls.max_attempts == 5
    assert settings.bls.request_delay == 0.25
    assert settings.bls.timeout == 30.0
    assert settings.sqlalchemy_echo is True


def test_defaults_without_environment(clean_env) -> None:
    settings = Settings.from_env()

    assert settings.database.driver == "mysql+pymysql"
    assert settings.database.port == 3306
    assert settings.bls.api_url == config.DEFAULT_BLS_API_URL
    assert settings.bls.retry_delay == 1.0
    assert settings.bls.request_delay == 0.5
    assert settings.sqlalchemy_echo is False


def test_missing_api_key_is_reported_first(clean_env) -> None:
    with pytest.raises(ConfigurationError, match="BLS API key not found"):
        Settings.from_env().validate()


def test_missing_database_variables_are_named() -> None:
    settings = Settings(database=DatabaseSettings(user="loader"), bls=BlsSettings(api_key="k"))

    with pytest.raises(ConfigurationError) as excinfo:
        settings.validate()

    message = str(excinfo.value)
    assert message.startswith("Missing required environment variables:")
    for name in ("MYSQL_HOST", "MYSQL_DATABASE", "MYSQL_PASSWORD"):
        assert name in message
    assert "MYSQL_USERNAME" not in message


def test_max_attempts_must_be_positive(settings) -> None:
    broken = Settings(database=settings.database, bls=BlsSettings(api_key="k", max_attempts=0))

    with pytest.raises(ConfigurationError, match="BLS_MAX_ATTEMPTS"):
        broken.validate()


def test_sqlalchemy_url_escapes_credentials() -> None:
    database = DatabaseSettings(host="db", user="scm", password="p@ss:word/1", name="salaries")

    url = database.sqlalchemy_url

    assert url.startswith("mysql+pymysql://scm:")
    assert "p@ss:word/1" not in url
    assert url.endswith("@db:3306/salaries")
    assert "***" in database.masked_url
    assert "p@ss" not in database.masked_url


@pytest.mark.parametrize(
    "name", ["MYSQL_PORT", "BLS_TIMEOUT", "BLS_MAX_ATTEMPTS", "BLS_RETRY_DELAY", "BLS_REQUEST_DELAY"]
)
def test_non_numeric_values_name_the_variable(clean_env, name: str) -> None:
    clean_env.setenv(name, "abc")

    with pytest.raises(ConfigurationError, match=name):
        Settings.from_env()


def test_blank_numeric_value_uses_default(clean_env) -> None:
    clean_env.setenv("MYSQL_PORT", " ")
    clean_env.setenv("BLS_MAX_ATTEMPTS", "")

    settings = Settings.from_env()

    assert settings.database.port == 3306
    assert settings.bls.max_attempts == 3
