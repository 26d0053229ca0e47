#!/usr/bin/env python3
"""Create the salary tables and seed the occupation definitions."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from scm_salary.core.config import get_settings  # noqa: E402  (import after sys.path manipulation)
from scm_salary.core.logger import get_logger, init_logging, log_context, timeit  # noqa: E402
from scm_salary.db import bind_sessionmaker, create_sync_engine, session_scope  # noqa: E402
from scm_salary.models import Base  # noqa: E402
from scm_salary.reference import OCCUPATION_SEEDS  # noqa: E402
from scm_salary.repositories import SalaryRepository  # noqa: E402

logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--drop",
        action="store_true",
        help="Drop the existing tables first (destroys downloaded data)",
    )
    parser.add_argument(
        "--clean-old",
        type=int,
        metavar="YEARS",
        default=None,
        help="Delete salary and refresh rows older than YEARS years instead of seeding",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = get_settings()
    engine = create_sync_engine(settings)
    factory = bind_sessionmaker(engine)

    if args.clean_old is not None:
        with session_scope(factory) as session:
            salary_rows, log_rows = SalaryRepository(session).clean_old_data(keep_years=args.clean_old)
        logger.info("Deleted %s salary rows and %s refresh log rows", salary_rows, log_rows)
        return

    if args.drop:
        logger.warning("Dropping tables on %s", settings.database.masked_url)
        Base.metadata.drop_all(engine)

    with timeit("schema setup", logger=logger, unit="tables") as timer:
        Base.metadata.create_all(engine)
        timer.set_total(len(Base.metadata.tables))

    with session_scope(factory) as session:
        seeded = SalaryRepository(session).seed_definitions(OCCUPATION_SEEDS)
    logger.info("Database setup completed successfully! %s occupations defined", seeded)


if __name__ == "__main__":
    init_logging(app_name="setup-database")
    log_context.bind(job="setup_database")
    main()
