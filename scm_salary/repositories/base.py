"""Shared helpers for repositories."""
from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session
from sqlalchemy.sql import Executable


class BaseRepository:
    """Base repository providing convenience helpers."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    @property
    def dialect(self) -> str:
        return self._session.get_bind().dialect.name

    def _scalar(self, statement: Executable, params: dict[str, Any] | None = None) -> int:
        """Execute ``statement`` and return the scalar integer result."""

        value = self._session.execute(statement, params or {}).scalar() or 0
        return int(value)

    @staticmethod
    def _to_optional_float(value: Any) -> float | None:
        if value is None:
            return None
        return float(value)

    @staticmethod
    def _to_optional_int(value: Any) -> int | None:
        if value is None:
            return None
        return int(round(float(value)))
