"""Command-line entry point: ``scm-salary-download [year] [occupation_set] [force_refresh]``."""
from __future__ import annotations

import argparse
import sys
from typing import Sequence

from scm_salary.core.config import ConfigurationError, Settings
from scm_salary.core.logger import get_logger, init_logging, log_context, shutdown_logging
from scm_salary.models import OccupationSet
from scm_salary.services.downloader import download_scm_data

logger = get_logger(__name__)

_TRUE = {"true", "t", "1", "yes", "y"}
_FALSE = {"false", "f", "0", "no", "n"}


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean, got {value!r}")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="scm-salary-download",
        description="Download BLS OEWS wage data for SCM occupations into the salary database.",
    )
    parser.add_argument("year", nargs="?", type=int, default=2024, help="Survey year (default: 2024)")
    parser.add_argument(
        "occupation_set",
        nargs="?",
        default=OccupationSet.CORE.value,
        choices=[option.value for option in OccupationSet],
        help="Which occupations to refresh (default: core)",
    )
    parser.add_argument(
        "force_refresh",
        nargs="?",
        type=parse_bool,
        default=False,
        help="Refresh even when data for the year already exists (default: false)",
    )
    parser.add_argument("--log-level", default="INFO", help="Console and file log level")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    init_logging(app_name="scm-salary-download", level=args.log_level)
    try:
        with log_context.scoped(job="download"):
            summary = download_scm_data(
                args.year,
                args.occupation_set,
                args.force_refresh,
                settings=Settings.from_env(),
            )
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2
    finally:
        shutdown_logging()

    return 0 if summary.skipped or summary.errors == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
