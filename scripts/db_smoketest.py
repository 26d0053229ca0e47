"""Simple database connectivity check."""
from __future__ import annotations

import sys
from pathlib import Path

from sqlalchemy import text

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from scm_salary.core.config import get_settings  # noqa: E402  (import after sys.path manipulation)
from scm_salary.db.engine import create_sync_engine  # noqa: E402

settings = get_settings()
engine = create_sync_engine(settings)


def main() -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
        version = conn.execute(text("SELECT VERSION()"))
        db = conn.execute(text("SELECT DATABASE()"))
        print(
            "Connected to {db} ({version}) via {driver}".format(
                db=db.scalar(),
                version=version.scalar(),
                driver=settings.database.driver,
            )
        )
        print(f"Connection details: {settings.database.masked_url}")
        for table in ("occupation_definitions", "scm_salary_data", "data_refresh_log"):
            count = conn.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar()
            print(f"  {table}: {count} rows")


if __name__ == "__main__":
    main()
