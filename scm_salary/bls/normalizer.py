"""Flatten a BLS response envelope into one record per occupation."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import ValidationError

from scm_salary.core.logger import get_logger

from .schemas import BlsResponse, BlsSeries
from .series import metric_for_series_id

logger = get_logger(__name__)

# BLS reports "-" when an estimate is not available for the period.
_MISSING_VALUES = {"", "-"}


@dataclass(frozen=True)
class NormalizedRecord:
    occupation_code: str
    employment: Optional[float] = None
    median_wage: Optional[float] = None
    mean_wage: Optional[float] = None
    raw_response: Optional[str] = None

    @property
    def data_available(self) -> bool:
        return any(
            value is not None for value in (self.employment, self.median_wage, self.mean_wage)
        )


def parse_value(raw: Any) -> Optional[float]:
    """Return ``raw`` as a float, or ``None`` for missing and non-numeric values."""

    if raw is None or isinstance(raw, bool):
        return None
    text = str(raw).strip()
    if text in _MISSING_VALUES:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def _serialize(response: Any) -> Optional[str]:
    try:
        return json.dumps(response, separators=(",", ":"), default=str)
    except (TypeError, ValueError) as exc:
        logger.warning("Could not serialize API response: %s", exc)
        return None


def normalize_response(response: Optional[dict[str, Any]], occupation_code: str) -> NormalizedRecord:
    """Extract employment, mean and median wage from a raw API response.

    Any missing level of the envelope (no response, no ``Results``, no
    ``series`` or an empty list) yields a record without data. A series whose
    latest value is unusable leaves only that metric empty.
    """

    if response is None:
        return NormalizedRecord(occupation_code)

    raw_response = _serialize(response)

    try:
        envelope = BlsResponse.model_validate(response)
    except ValidationError as exc:
        logger.warning("Malformed API response for %s: %s", occupation_code, exc.errors()[:1])
        return NormalizedRecord(occupation_code, raw_response=raw_response)

    if envelope.results is None or not envelope.results.series:
        return NormalizedRecord(occupation_code, raw_response=raw_response)

    values: dict[str, float] = {}
    for entry in envelope.results.series:
        try:
            series = BlsSeries.model_validate(entry)
            metric = metric_for_series_id(series.series_id)
            if metric is None:
                logger.debug("Ignoring unexpected series %s", series.series_id)
                continue
            point = series.latest
            if point is None:
                continue
            value = parse_value(point.value)
            if value is None:
                continue
            values[metric] = value
        except (ValidationError, TypeError, AttributeError) as exc:
            logger.warning("Error processing series data: %s", exc)

    return NormalizedRecord(
        occupation_code,
        employment=values.get("employment"),
        median_wage=values.get("median_wage"),
        mean_wage=values.get("mean_wage"),
        raw_response=raw_response,
    )
