"""ORM model for yearly OEWS wage and employment figures per occupation."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import ID_TYPE, Base


class WageDistribution(str, Enum):
    """Coarse skew classification derived from the mean/median wage ratio."""

    RIGHT_SKEWED = "Right-skewed"
    LEFT_SKEWED = "Left-skewed"
    SYMMETRIC = "Relatively symmetric"


class SalaryRecord(Base):
    """Employment and wages for one occupation in one survey year.

    Rows are upserted on (occupation_code, data_year); a refresh overwrites
    the previous values rather than adding a row.
    """

    __tablename__ = "scm_salary_data"
    __table_args__ = (
        UniqueConstraint("occupation_code", "data_year", name="unique_occupation_year"),
        Index("idx_salary_year_available", "data_year", "data_available"),
    )

    id: Mapped[int] = mapped_column(ID_TYPE, primary_key=True, autoincrement=True)
    occupation_code: Mapped[str] = mapped_column(
        String(10),
        ForeignKey("occupation_definitions.occupation_code", ondelete="CASCADE"),
        nullable=False,
    )
    data_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    employment: Mapped[int | None] = mapped_column(Integer)
    median_wage: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), index=True)
    mean_wage: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))
    median_hourly: Mapped[Decimal | None] = mapped_column(Numeric(8, 2))
    mean_hourly: Mapped[Decimal | None] = mapped_column(Numeric(8, 2))
    wage_ratio: Mapped[Decimal | None] = mapped_column(Numeric(6, 4))
    wage_distribution: Mapped[str | None] = mapped_column(String(32))
    data_available: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="0")
    bls_employment_series_id: Mapped[str | None] = mapped_column(String(50))
    bls_median_wage_series_id: Mapped[str | None] = mapped_column(String(50))
    bls_mean_wage_series_id: Mapped[str | None] = mapped_column(String(50))
    raw_api_response: Mapped[str | None] = mapped_column(Text)
    created_date: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp(), nullable=False
    )
    updated_date: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
        nullable=False,
    )
