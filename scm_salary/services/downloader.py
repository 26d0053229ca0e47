"""Refresh run orchestration: fetch, normalise, derive and upsert per occupation."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from scm_salary.bls.client import BlsClient
from scm_salary.bls.normalizer import normalize_response
from scm_salary.core.config import Settings
from scm_salary.core.logger import get_logger, log_context, progress_manager
from scm_salary.db import bind_sessionmaker, create_sync_engine
from scm_salary.models import OccupationSet, RefreshStatus, refresh_status
from scm_salary.repositories import OccupationRow, RefreshRun, SalaryRepository

from .metrics import calculate_derived_metrics

logger = get_logger(__name__)


@dataclass(frozen=True)
class RunSummary:
    """Result of one refresh run.

    A skipped run touches neither the API nor the refresh log; it reports the
    number of rows already stored for the year in ``existing_count``.
    """

    year: int
    occupation_set: str
    total: int = 0
    successful: int = 0
    errors: int = 0
    duration: float = 0.0
    api_calls: int = 0
    skipped: bool = False
    existing_count: Optional[int] = None

    @property
    def status(self) -> Optional[RefreshStatus]:
        if self.skipped:
            return None
        return refresh_status(self.errors, self.successful)


class SalaryDownloader:
    """Sequential refresh of OEWS data for one year and occupation set.

    Settings are validated on construction so a missing API key or database
    credential fails before any network or database activity.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        client: BlsClient | None = None,
        session_factory: Callable[[], Session] | None = None,
        repository_factory: Callable[[Session], SalaryRepository] = SalaryRepository,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.settings = settings.validate()
        self._owns_client = client is None
        self._client = client or BlsClient.from_settings(settings.bls)
        # An engine built here is disposed by close(); injected factories are left alone.
        self._engine: Engine | None = None
        if session_factory is None:
            self._engine = create_sync_engine(settings)
            session_factory = bind_sessionmaker(self._engine)
        self._session_factory = session_factory
        self._repository_factory = repository_factory
        self._sleep = sleep
        self._clock = clock

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> "SalaryDownloader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def run(
        self,
        year: int,
        occupation_set: OccupationSet | str = OccupationSet.CORE,
        force_refresh: bool = False,
    ) -> RunSummary:
        occupation_set = OccupationSet(occupation_set)
        logger.info("Starting SCM salary data download...")
        start = self._clock()

        session = self._session_factory()
        try:
            with log_context.scoped(year=year, occupation_set=occupation_set.value):
                repository = self._repository_factory(session)

                existing = repository.data_exists(year)
                if existing.exists and not force_refresh:
                    logger.info(
                        "Data for year %s already exists (%s records). "
                        "Use force_refresh=True to update.",
                        year,
                        existing.count,
                    )
                    return RunSummary(
                        year=year,
                        occupation_set=occupation_set.value,
                        duration=self._clock() - start,
                        skipped=True,
                        existing_count=existing.count,
                    )

                occupations = repository.list_definitions(occupation_set)
                logger.info("Retrieved %s occupations from database", len(occupations))

                summary = self._download(session, repository, occupations, year, occupation_set, start)
        finally:
            session.close()

        self._log_summary(summary)
        return summary

    def _download(
        self,
        session: Session,
        repository: SalaryRepository,
        occupations: list[OccupationRow],
        year: int,
        occupation_set: OccupationSet,
        start: float,
    ) -> RunSummary:
        total = len(occupations)
        successful = 0
        api_calls = 0
        error_messages: list[str] = []

        with progress_manager.task(f"OEWS {year}", total=total) as task:
            for index, occupation in enumerate(occupations, start=1):
                with log_context.scoped(occupation=occupation.code):
                    logger.info("Processing %s of %s: %s", index, total, occupation.name)

                    if index > 1:
                        self._sleep(self.settings.bls.request_delay)

                    api_calls += 1
                    response = self._client.fetch_series(occupation.code, year)
                    record = normalize_response(response, occupation.code)
                    derived = calculate_derived_metrics(record)

                    try:
                        repository.upsert_salary(record, derived, year)
                        session.commit()
                    except Exception as exc:
                        session.rollback()
                        message = f"Failed to insert data for {occupation.name}: {exc}"
                        error_messages.append(message)
                        logger.error(message)
                    else:
                        if record.data_available:
                            successful += 1
                            logger.info("Successfully processed: %s", occupation.name)
                        else:
                            logger.warning("No data available for: %s", occupation.name)
                task.advance()

        duration = self._clock() - start
        run = RefreshRun(
            year=year,
            occupation_set=occupation_set.value,
            requested=total,
            successful=successful,
            api_calls=api_calls,
            duration=duration,
            errors=len(error_messages),
            error_details="; ".join(error_messages) or None,
        )
        repository.append_refresh_log(run)
        session.commit()

        return RunSummary(
            year=year,
            occupation_set=occupation_set.value,
            total=total,
            successful=successful,
            errors=run.errors,
            duration=duration,
            api_calls=api_calls,
        )

    @staticmethod
    def _log_summary(summary: RunSummary) -> None:
        logger.info("Download completed with status %s", summary.status.value)
        logger.info("Total occupations processed: %s", summary.total)
        logger.info("Successful downloads: %s", summary.successful)
        logger.info("API calls made: %s", summary.api_calls)
        logger.info("Errors: %s", summary.errors)
        logger.info("Duration: %.2f seconds", summary.duration)


def download_scm_data(
    year: int = 2024,
    occupation_set: OccupationSet | str = OccupationSet.CORE,
    force_refresh: bool = False,
    settings: Settings | None = None,
) -> RunSummary:
    """Run one refresh with settings read from the environment unless given."""

    with SalaryDownloader(settings or Settings.from_env()) as downloader:
        return downloader.run(year, occupation_set, force_refresh)
