"""Service layer entrypoints for the refresh pipeline."""

from .downloader import RunSummary, SalaryDownloader, download_scm_data
from .metrics import DerivedMetrics, calculate_derived_metrics, classify_wage_ratio

__all__ = [
    "DerivedMetrics",
    "RunSummary",
    "SalaryDownloader",
    "calculate_derived_metrics",
    "classify_wage_ratio",
    "download_scm_data",
]
