#!/usr/bin/env python3
"""Print recent downloads, the per-level summary and the current-year snapshot."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rich.console import Console  # noqa: E402
from rich.table import Table  # noqa: E402

from scm_salary.core.config import get_settings  # noqa: E402
from scm_salary.db import get_sessionmaker, session_scope  # noqa: E402
from scm_salary.repositories import SalaryRepository  # noqa: E402


def _money(value: float | None) -> str:
    return "-" if value is None else f"${value:,.0f}"


def _count(value: int | None) -> str:
    return "-" if value is None else f"{value:,}"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--limit", type=int, default=20, help="Number of recent rows to show")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    console = Console()
    factory = get_sessionmaker(get_settings())

    with session_scope(factory) as session:
        repository = SalaryRepository(session)

        recent = Table(title="Recent downloads")
        for column in ("Occupation", "Year", "Employment", "Median wage", "Mean wage"):
            recent.add_column(column)
        for row in repository.recent_data(limit=args.limit):
            recent.add_row(
                row.occupation_name,
                str(row.data_year),
                _count(row.employment),
                _money(row.median_wage),
                _money(row.mean_wage),
            )
        console.print(recent)

        levels = Table(title="Summary by occupation level")
        for column in ("Level", "Year", "Occupations", "Employment", "Avg median", "Min", "Max", "Std dev"):
            levels.add_column(column)
        for row in repository.summary_by_level():
            levels.add_row(
                row.occupation_level,
                str(row.data_year),
                str(row.occupation_count),
                _count(row.total_employment),
                _money(row.avg_median_wage),
                _money(row.min_median_wage),
                _money(row.max_median_wage),
                _money(row.stddev_median_wage),
            )
        console.print(levels)

        snapshot = Table(title="Current year data")
        for column in ("Code", "Occupation", "Level", "Median wage", "Hourly", "Ratio", "Distribution"):
            snapshot.add_column(column)
        available = [row for row in repository.current_snapshot() if row.data_available]
        available.sort(key=lambda row: row.median_wage or 0, reverse=True)
        for row in available:
            snapshot.add_row(
                row.occupation_code,
                row.occupation_name,
                row.occupation_level,
                _money(row.median_wage),
                "-" if row.median_hourly is None else f"${row.median_hourly:,.2f}",
                "-" if row.wage_ratio is None else f"{row.wage_ratio:.3f}",
                row.wage_distribution or "-",
            )
        console.print(snapshot)

        latest = repository.latest_refresh()
        if latest is not None:
            console.print(
                f"Last refresh {latest.refresh_date:%Y-%m-%d %H:%M} for {latest.data_year} "
                f"({latest.occupation_set}): {latest.refresh_status}, "
                f"{latest.occupations_successful}/{latest.occupations_requested} successful, "
                f"{latest.error_count} errors"
            )


if __name__ == "__main__":
    main()
