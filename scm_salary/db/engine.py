"""Database engine factories."""
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from scm_salary.core.config import Settings
from scm_salary.core.logger import get_logger

LOGGER = get_logger(__name__)


def create_sync_engine(settings: Settings, url: str | None = None, **kwargs) -> Engine:
    """Create a synchronous SQLAlchemy engine for ``settings.database``.

    ``url`` overrides the configured database, mainly for SQLite in tests.
    """

    resolved_url = url or settings.database.sqlalchemy_url

    options = dict(kwargs)
    options.setdefault("echo", settings.sqlalchemy_echo)
    if resolved_url.startswith("mysql"):
        options.setdefault("pool_pre_ping", True)

    LOGGER.debug(
        "Creating SQLAlchemy engine for %s",
        "override url" if url else settings.database.masked_url,
    )
    return create_engine(resolved_url, future=True, **options)
