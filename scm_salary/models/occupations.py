"""Reference data describing the tracked SCM occupations."""
from __future__ import annotations

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import Base


class OccupationCategory(str, Enum):
    """Which download set an occupation belongs to."""

    CORE = "core"
    EXTENDED = "extended"


class OccupationSet(str, Enum):
    """Occupation selection accepted by a refresh run."""

    CORE = "core"
    EXTENDED = "extended"
    BOTH = "both"

    @property
    def categories(self) -> tuple[OccupationCategory, ...]:
        if self is OccupationSet.BOTH:
            return (OccupationCategory.CORE, OccupationCategory.EXTENDED)
        return (OccupationCategory(self.value),)


class OccupationLevel(str, Enum):
    MANAGEMENT = "Management"
    CORE_PROFESSIONAL = "Core SCM Professional"
    ADJACENT_ANALYTICAL = "SCM-Adjacent Analytical"
    OPERATIONAL_SUPPORT = "Operational/Support"
    OTHER = "Other"


class ScmFunction(str, Enum):
    PROCUREMENT = "Procurement & Sourcing"
    TRANSPORTATION = "Transportation & Logistics"
    PLANNING = "Supply Chain Planning"
    PRODUCTION_PLANNING = "Production Planning"
    ANALYSIS = "Supply Chain Analysis"
    PROCESS_OPTIMIZATION = "Process Optimization"
    GENERAL_OPERATIONS = "General Operations"
    OTHER = "Other SCM Functions"


class OccupationDefinition(Base):
    """One SOC occupation code tracked by the downloader."""

    __tablename__ = "occupation_definitions"

    occupation_code: Mapped[str] = mapped_column(String(10), primary_key=True)
    occupation_name: Mapped[str] = mapped_column(String(255), nullable=False)
    occupation_category: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    occupation_level: Mapped[str] = mapped_column(
        String(32), nullable=False, server_default=OccupationLevel.OTHER.value, index=True
    )
    scm_function: Mapped[str] = mapped_column(
        String(32), nullable=False, server_default=ScmFunction.OTHER.value, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="1")
    created_date: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.current_timestamp(), nullable=False
    )
    updated_date: Mapped[datetime] = mapped_column(
        DateTime,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp(),
        nullable=False,
    )
