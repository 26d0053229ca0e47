"""Client, schemas and normalisation for the BLS OEWS timeseries API."""

from .client import BlsClient, RetryPolicy
from .normalizer import NormalizedRecord, normalize_response, parse_value
from .series import SeriesIds, build_series_ids, metric_for_series_id

__all__ = [
    "BlsClient",
    "NormalizedRecord",
    "RetryPolicy",
    "SeriesIds",
    "build_series_ids",
    "metric_for_series_id",
    "normalize_response",
    "parse_value",
]
