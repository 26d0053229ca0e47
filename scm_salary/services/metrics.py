"""Derived wage metrics computed from a normalised record."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from scm_salary.bls.normalizer import NormalizedRecord
from scm_salary.models import WageDistribution

ANNUAL_WORK_HOURS = 2080  # 40 hours x 52 weeks
RIGHT_SKEW_THRESHOLD = 1.15
LEFT_SKEW_THRESHOLD = 0.85


@dataclass(frozen=True)
class DerivedMetrics:
    median_hourly: Optional[float] = None
    mean_hourly: Optional[float] = None
    wage_ratio: Optional[float] = None
    wage_distribution: Optional[WageDistribution] = None


def classify_wage_ratio(ratio: Optional[float]) -> Optional[WageDistribution]:
    if ratio is None:
        return None
    if ratio > RIGHT_SKEW_THRESHOLD:
        return WageDistribution.RIGHT_SKEWED
    if ratio < LEFT_SKEW_THRESHOLD:
        return WageDistribution.LEFT_SKEWED
    return WageDistribution.SYMMETRIC


def calculate_derived_metrics(record: NormalizedRecord) -> DerivedMetrics:
    """Hourly equivalents and the mean/median skew indicator for ``record``."""

    median, mean = record.median_wage, record.mean_wage

    ratio = None
    if mean is not None and median is not None and median > 0:
        ratio = mean / median

    return DerivedMetrics(
        median_hourly=median / ANNUAL_WORK_HOURS if median is not None else None,
        mean_hourly=mean / ANNUAL_WORK_HOURS if mean is not None else None,
        wage_ratio=ratio,
        wage_distribution=classify_wage_ratio(ratio),
    )
