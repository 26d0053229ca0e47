"""Append-only audit trail of refresh runs."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import ID_TYPE, Base


class RefreshStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


def refresh_status(errors: int, successful: int) -> RefreshStatus:
    """Summarise a run: no errors is success, any success with errors is partial."""

    if errors == 0:
        return RefreshStatus.SUCCESS
    if successful > 0:
        return RefreshStatus.PARTIAL
    return RefreshStatus.FAILED


class RefreshLogEntry(Base):
    """One row per downloader run; never updated after insert."""

    __tablename__ = "data_refresh_log"

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    refresh_date: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp(), nullable=False, index=True
    )
    data_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    occupation_set: Mapped[str] = mapped_column(String(16), nullable=False)
    occupations_requested: Mapped[int] = mapped_column(Integer, nullable=False)
    occupations_successful: Mapped[int] = mapped_column(Integer, nullable=False)
    api_calls_made: Mapped[int] = mapped_column(Integer, nullable=False)
    refresh_duration_seconds: Mapped[float | None] = mapped_column(Numeric(10, 3, asdecimal=False))
    error_count: Mapped[int] = mapped_column(Integer, nullable=False, server_default="0")
    error_details: Mapped[str | None] = mapped_column(Text)
    refresh_status: Mapped[str] = mapped_column(
        String(16), nullable=False, server_default=RefreshStatus.SUCCESS.value
    )
