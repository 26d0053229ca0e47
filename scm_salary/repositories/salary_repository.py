"""Data access for occupation definitions, salary records and the refresh log."""
from __future__ import annotations

import statistics
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, Iterable

from sqlalchemy import and_, delete, func, select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from scm_salary.bls.normalizer import NormalizedRecord
from scm_salary.bls.series import build_series_ids
from scm_salary.models import (
    OccupationDefinition,
    OccupationSet,
    RefreshLogEntry,
    SalaryRecord,
    refresh_status,
)
from scm_salary.reference import OccupationSeed

from .base import BaseRepository

if TYPE_CHECKING:
    from scm_salary.services.metrics import DerivedMetrics

_UPSERT_KEY = ("occupation_code", "data_year")


@dataclass(frozen=True)
class OccupationRow:
    code: str
    name: str


@dataclass(frozen=True)
class DataExistence:
    exists: bool
    count: int


@dataclass(frozen=True)
class RefreshRun:
    """Aggregate counts of one downloader run, as written to the refresh log."""

    year: int
    occupation_set: str
    requested: int
    successful: int
    api_calls: int
    duration: float
    errors: int = 0
    error_details: str | None = None


@dataclass(frozen=True)
class RecentSalaryRow:
    occupation_name: str
    data_year: int
    employment: int | None
    median_wage: float | None
    mean_wage: float | None
    data_available: bool


@dataclass(frozen=True)
class SnapshotRow:
    occupation_code: str
    occupation_name: str
    occupation_category: str
    occupation_level: str
    scm_function: str
    data_year: int | None
    employment: int | None
    median_wage: float | None
    mean_wage: float | None
    median_hourly: float | None
    wage_ratio: float | None
    wage_distribution: str | None
    data_available: bool


@dataclass(frozen=True)
class LevelSummaryRow:
    occupation_level: str
    data_year: int
    occupation_count: int
    total_employment: int | None
    avg_median_wage: float | None
    min_median_wage: float | None
    max_median_wage: float | None
    stddev_median_wage: float | None


class SalaryRepository(BaseRepository):
    """Persistence interface used by the downloader and reporting scripts."""

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------
    def list_definitions(self, occupation_set: OccupationSet | str) -> list[OccupationRow]:
        """Active occupations in ``occupation_set``, ordered by occupation code."""

        categories = [category.value for category in OccupationSet(occupation_set).categories]
        statement = (
            select(OccupationDefinition.occupation_code, OccupationDefinition.occupation_name)
            .where(
                OccupationDefinition.is_active.is_(True),
                OccupationDefinition.occupation_category.in_(categories),
            )
            .order_by(OccupationDefinition.occupation_code)
        )
        return [OccupationRow(code=code, name=name) for code, name in self._session.execute(statement)]

    def seed_definitions(self, seeds: Iterable[OccupationSeed]) -> int:
        """Insert or refresh reference rows; returns the number of seeds applied."""

        count = 0
        for seed in seeds:
            self._session.merge(
                OccupationDefinition(
                    occupation_code=seed.code,
                    occupation_name=seed.name,
                    occupation_category=seed.category.value,
                    occupation_level=seed.level.value,
                    scm_function=seed.function.value,
                    is_active=True,
                )
            )
            count += 1
        self._session.flush()
        return count

    # ------------------------------------------------------------------
    # Salary records
    # ------------------------------------------------------------------
    def data_exists(self, year: int) -> DataExistence:
        count = self._scalar(
            select(func.count())
            .select_from(SalaryRecord)
            .where(SalaryRecord.data_year == year, SalaryRecord.data_available.is_(True))
        )
        return DataExistence(exists=count > 0, count=count)

    def _salary_values(
        self, record: NormalizedRecord, derived: DerivedMetrics, year: int
    ) -> dict[str, Any]:
        series = build_series_ids(record.occupation_code)
        return {
            "occupation_code": record.occupation_code,
            "data_year": year,
            "employment": self._to_optional_int(record.employment),
            "median_wage": record.median_wage,
            "mean_wage": record.mean_wage,
            "median_hourly": derived.median_hourly,
            "mean_hourly": derived.mean_hourly,
            "wage_ratio": derived.wage_ratio,
            "wage_distribution": (
                derived.wage_distribution.value if derived.wage_distribution else None
            ),
            "data_available": record.data_available,
            "bls_employment_series_id": series.employment,
            "bls_median_wage_series_id": series.median_wage,
            "bls_mean_wage_series_id": series.mean_wage,
            "raw_api_response": record.raw_response,
        }

    def upsert_salary(self, record: NormalizedRecord, derived: DerivedMetrics, year: int) -> None:
        """Insert the record or overwrite the existing (occupation_code, year) row."""

        values = self._salary_values(record, derived, year)
        table = SalaryRecord.__table__
        updated = [column for column in values if column not in _UPSERT_KEY]

        if self.dialect == "mysql":
            statement = mysql_insert(table).values(**values)
            assignments = {column: statement.inserted[column] for column in updated}
            assignments["updated_date"] = func.current_timestamp()
            statement = statement.on_duplicate_key_update(assignments)
        elif self.dialect in ("sqlite", "postgresql"):
            insert = sqlite_insert if self.dialect == "sqlite" else postgresql_insert
            statement = insert(table).values(**values)
            set_ = {column: statement.excluded[column] for column in updated}
            set_["updated_date"] = func.current_timestamp()
            statement = statement.on_conflict_do_update(index_elements=list(_UPSERT_KEY), set_=set_)
        else:
            raise NotImplementedError(f"Upsert is not supported for dialect {self.dialect!r}")

        self._session.execute(statement)

    def recent_data(self, limit: int = 10) -> list[RecentSalaryRow]:
        statement = (
            select(
                OccupationDefinition.occupation_name,
                SalaryRecord.data_year,
                SalaryRecord.employment,
                SalaryRecord.median_wage,
                SalaryRecord.mean_wage,
                SalaryRecord.data_available,
            )
            .join(
                OccupationDefinition,
                OccupationDefinition.occupation_code == SalaryRecord.occupation_code,
            )
            .where(SalaryRecord.data_available.is_(True))
            .order_by(SalaryRecord.updated_date.desc(), SalaryRecord.id.desc())
            .limit(limit)
        )
        return [
            RecentSalaryRow(
                occupation_name=row.occupation_name,
                data_year=row.data_year,
                employment=row.employment,
                median_wage=self._to_optional_float(row.median_wage),
                mean_wage=self._to_optional_float(row.mean_wage),
                data_available=bool(row.data_available),
            )
            for row in self._session.execute(statement)
        ]

    def current_snapshot(self) -> list[SnapshotRow]:
        """Every occupation joined to its record for the latest year with data."""

        latest_year = self._session.execute(
            select(func.max(SalaryRecord.data_year)).where(SalaryRecord.data_available.is_(True))
        ).scalar()

        statement = (
            select(OccupationDefinition, SalaryRecord)
            .outerjoin(
                SalaryRecord,
                and_(
                    SalaryRecord.occupation_code == OccupationDefinition.occupation_code,
                    SalaryRecord.data_year == latest_year,
                ),
            )
            .order_by(OccupationDefinition.occupation_code)
        )
        rows: list[SnapshotRow] = []
        for definition, salary in self._session.execute(statement):
            rows.append(
                SnapshotRow(
                    occupation_code=definition.occupation_code,
                    occupation_name=definition.occupation_name,
                    occupation_category=definition.occupation_category,
                    occupation_level=definition.occupation_level,
                    scm_function=definition.scm_function,
                    data_year=salary.data_year if salary else None,
                    employment=salary.employment if salary else None,
                    median_wage=self._to_optional_float(salary.median_wage) if salary else None,
                    mean_wage=self._to_optional_float(salary.mean_wage) if salary else None,
                    median_hourly=self._to_optional_float(salary.median_hourly) if salary else None,
                    wage_ratio=self._to_optional_float(salary.wage_ratio) if salary else None,
                    wage_distribution=salary.wage_distribution if salary else None,
                    data_available=bool(salary.data_available) if salary else False,
                )
            )
        return rows

    def summary_by_level(self) -> list[LevelSummaryRow]:
        """Median wage statistics per occupation level over the current snapshot.

        Ordered by average median wage, highest first.
        """

        groups: dict[tuple[str, int], list[SnapshotRow]] = defaultdict(list)
        for row in self.current_snapshot():
            if row.data_available and row.data_year is not None:
                groups[(row.occupation_level, row.data_year)].append(row)

        summaries: list[LevelSummaryRow] = []
        for (level, year), rows in groups.items():
            employment = [row.employment for row in rows if row.employment is not None]
            medians = [row.median_wage for row in rows if row.median_wage is not None]
            summaries.append(
                LevelSummaryRow(
                    occupation_level=level,
                    data_year=year,
                    occupation_count=len(rows),
                    total_employment=sum(employment) if employment else None,
                    avg_median_wage=statistics.fmean(medians) if medians else None,
                    min_median_wage=min(medians) if medians else None,
                    max_median_wage=max(medians) if medians else None,
                    stddev_median_wage=statistics.pstdev(medians) if medians else None,
                )
            )
        summaries.sort(
            key=lambda summary: (summary.avg_median_wage is None, -(summary.avg_median_wage or 0))
        )
        return summaries

    def clean_old_data(self, keep_years: int = 5, today: date | None = None) -> tuple[int, int]:
        """Delete salary and refresh rows for years before ``today.year - keep_years``."""

        cutoff = (today or date.today()).year - keep_years
        salary_result = self._session.execute(
            delete(SalaryRecord).where(SalaryRecord.data_year < cutoff)
        )
        log_result = self._session.execute(
            delete(RefreshLogEntry).where(RefreshLogEntry.data_year < cutoff)
        )
        return salary_result.rowcount or 0, log_result.rowcount or 0

    # ------------------------------------------------------------------
    # Refresh log
    # ------------------------------------------------------------------
    def append_refresh_log(self, run: RefreshRun) -> RefreshLogEntry:
        entry = RefreshLogEntry(
            data_year=run.year,
            occupation_set=run.occupation_set,
            occupations_requested=run.requested,
            occupations_successful=run.successful,
            api_calls_made=run.api_calls,
            refresh_duration_seconds=round(run.duration, 3),
            error_count=run.errors,
            error_details=run.error_details,
            refresh_status=refresh_status(run.errors, run.successful).value,
        )
        self._session.add(entry)
        self._session.flush()
        return entry

    def latest_refresh(self) -> RefreshLogEntry | None:
        statement = (
            select(RefreshLogEntry)
            .order_by(RefreshLogEntry.refresh_date.desc(), RefreshLogEntry.id.desc())
            .limit(1)
        )
        return self._session.execute(statement).scalar_one_or_none()
