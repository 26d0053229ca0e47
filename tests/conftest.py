"""Shared fixtures: in-memory SQLite database and BLS response builders."""
from __future__ import annotations

from typing import Callable

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from scm_salary.bls.series import build_series_ids
from scm_salary.core.config import BlsSettings, DatabaseSettings, Settings
from scm_salary.db import bind_sessionmaker
from scm_salary.models import Base
from scm_salary.reference import OCCUPATION_SEEDS
from scm_salary.repositories import SalaryRepository


@pytest.fixture()
def engine():
    # StaticPool keeps every session on the same in-memory database.
    engine = create_engine(
        "sqlite://",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine) -> sessionmaker:
    factory = bind_sessionmaker(engine)
    with factory() as session:
        SalaryRepository(session).seed_definitions(OCCUPATION_SEEDS)
        session.commit()
    return factory


@pytest.fixture()
def session(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        database=DatabaseSettings(host="db.local", user="scm", password="secret", name="scm_salarydb"),
        bls=BlsSettings(api_key="test-key"),
    )


@pytest.fixture()
def make_response() -> Callable[..., dict]:
    """Build a REQUEST_SUCCEEDED envelope for one occupation.

    Keyword arguments ``employment``, ``mean_wage`` and ``median_wage`` give
    the latest value of each series; omitted metrics are left out entirely.
    """

    def _build(occupation_code: str, year: int = 2024, **values: object) -> dict:
        ids = build_series_ids(occupation_code)
        series = []
        for metric in ("employment", "mean_wage", "median_wage"):
            if metric not in values:
                continue
            series.append(
                {
                    "seriesID": getattr(ids, metric),
                    "data": [
                        {
                            "year": str(year),
                            "period": "A01",
                            "periodName": "Annual",
                            "value": values[metric],
                            "footnotes": [{}],
                        }
                    ],
                }
            )
        return {
            "status": "REQUEST_SUCCEEDED",
            "responseTime": 120,
            "message": [],
            "Results": {"series": series},
        }

    return _build
