"""Unit tests for derived wage metrics."""
from __future__ import annotations

import pytest

from scm_salary.bls.normalizer import NormalizedRecord
from scm_salary.models import WageDistribution
from scm_salary.services.metrics import calculate_derived_metrics, classify_wage_ratio


def _record(mean: float | None, median: float | None) -> NormalizedRecord:
    return NormalizedRecord("13-1081", mean_wage=mean, median_wage=median)


@pytest.mark.parametrize(
    ("mean", "median", "ratio", "distribution"),
    [
        (60000, 50000, 1.2, WageDistribution.RIGHT_SKEWED),
        (40000, 50000, 0.8, WageDistribution.LEFT_SKEWED),
        (49000, 50000, 0.98, WageDistribution.SYMMETRIC),
    ],
)
def test_wage_ratio_classification(mean, median, ratio, distribution) -> None:
    derived = calculate_derived_metrics(_record(mean, median))

    assert derived.wage_ratio == pytest.approx(ratio)
    assert derived.wage_distribution is distribution


def test_hourly_wages_use_2080_hours() -> None:
    derived = calculate_derived_metrics(_record(104000, 83200))

    assert derived.mean_hourly == pytest.approx(50.0)
    assert derived.median_hourly == pytest.approx(40.0)


@pytest.mark.parametrize(
    ("mean", "median"),
    [(60000, None), (None, 50000), (None, None), (60000, 0)],
)
def test_ratio_absent_without_both_wages(mean, median) -> None:
    derived = calculate_derived_metrics(_record(mean, median))

    assert derived.wage_ratio is None
    assert derived.wage_distribution is None
    assert (derived.mean_hourly is None) == (mean is None)
    assert (derived.median_hourly is None) == (median is None)


@pytest.mark.parametrize(
    ("ratio", "expected"),
    [
        (1.15, WageDistribution.SYMMETRIC),
        (1.1501, WageDistribution.RIGHT_SKEWED),
        (0.85, WageDistribution.SYMMETRIC),
        (0.8499, WageDistribution.LEFT_SKEWED),
        (None, None),
    ],
)
def test_classification_thresholds_are_strict(ratio, expected) -> None:
    assert classify_wage_ratio(ratio) is expected
