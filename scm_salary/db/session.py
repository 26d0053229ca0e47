"""Opinionated SQLAlchemy session helpers."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from scm_salary.core.config import Settings

from .engine import create_sync_engine


def get_sessionmaker(settings: Settings, url: str | None = None, **kwargs) -> sessionmaker:
    """Return a ``sessionmaker`` bound to a fresh engine."""

    engine = create_sync_engine(settings, url, **kwargs)
    return bind_sessionmaker(engine)


def bind_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """Provide a transactional scope for imperative scripts."""

    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
