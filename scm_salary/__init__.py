"""Download BLS OEWS wage data for SCM occupations into a relational database."""

from .core import ConfigurationError, Settings, get_logger, get_settings
from .services import RunSummary, SalaryDownloader, download_scm_data

__all__ = [
    "ConfigurationError",
    "RunSummary",
    "SalaryDownloader",
    "Settings",
    "download_scm_data",
    "get_logger",
    "get_settings",
]

__version__ = "0.1.0"
