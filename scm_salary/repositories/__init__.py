"""Repositories wrapping SQL access for the salary database."""

from .salary_repository import (
    DataExistence,
    LevelSummaryRow,
    OccupationRow,
    RecentSalaryRow,
    RefreshRun,
    SalaryRepository,
    SnapshotRow,
)

__all__ = [
    "DataExistence",
    "LevelSummaryRow",
    "OccupationRow",
    "RecentSalaryRow",
    "RefreshRun",
    "SalaryRepository",
    "SnapshotRow",
]
