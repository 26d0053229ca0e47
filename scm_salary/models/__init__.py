"""Database models for the salary downloader."""
from __future__ import annotations

from .base import Base
from .occupations import (
    OccupationCategory,
    OccupationDefinition,
    OccupationLevel,
    OccupationSet,
    ScmFunction,
)
from .refresh_log import RefreshLogEntry, RefreshStatus, refresh_status
from .salary import SalaryRecord, WageDistribution

__all__ = [
    "Base",
    "OccupationCategory",
    "OccupationDefinition",
    "OccupationLevel",
    "OccupationSet",
    "RefreshLogEntry",
    "RefreshStatus",
    "SalaryRecord",
    "ScmFunction",
    "WageDistribution",
    "refresh_status",
]
