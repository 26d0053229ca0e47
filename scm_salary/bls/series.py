"""Build BLS OEWS series identifiers for an occupation code."""
from __future__ import annotations

import re
from typing import NamedTuple, Optional

# National, all-industries OEWS series; the 6-digit SOC code follows.
SERIES_PREFIX = "OEUN0000000000000"

# OEWS data-type codes appended to each series identifier.
DATATYPE_CODES: dict[str, str] = {
    "employment": "01",
    "mean_wage": "04",
    "median_wage": "13",
}

_METRIC_BY_CODE = {code: metric for metric, code in DATATYPE_CODES.items()}


class SeriesIds(NamedTuple):
    employment: str
    mean_wage: str
    median_wage: str


def soc_to_digits(occupation_code: str) -> str:
    """Convert ``'13-1081'`` to the zero-padded 6-digit form ``'131081'``."""

    return re.sub(r"\D", "", occupation_code).rjust(6, "0")


def build_series_ids(occupation_code: str) -> SeriesIds:
    """Return the employment, mean wage and median wage series for ``occupation_code``."""

    base = SERIES_PREFIX + soc_to_digits(occupation_code)
    return SeriesIds(**{metric: base + code for metric, code in DATATYPE_CODES.items()})


def metric_for_series_id(series_id: str) -> Optional[str]:
    """Map a series identifier back to its metric name by its final two digits."""

    return _METRIC_BY_CODE.get(series_id.strip()[-2:])
