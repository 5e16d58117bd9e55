"""
Create the appeal_outcomes table used for weight calibration.

Usage:
    python -m db.setup              # uses DATABASE_URL from .env
    python -m db.setup <url>        # explicit connection string
"""

import os
import sys
from pathlib import Path

import psycopg2
from dotenv import load_dotenv

load_dotenv()

SCHEMA_FILE = Path(__file__).parent / "schema.sql"
OUTCOMES_TABLE = "appeal_outcomes"


def run_schema(database_url: str) -> int:
    """Apply schema.sql and return how many outcome rows are already stored."""
    print("Applying appeal outcome schema...")
    conn = psycopg2.connect(database_url)
    conn.autocommit = True
    cur = conn.cursor()
    cur.execute(SCHEMA_FILE.read_text())

    cur.execute(
        "SELECT to_regclass(%s) IS NOT NULL", (f"public.{OUTCOMES_TABLE}",)
    )
    if not cur.fetchone()[0]:
        cur.close()
        conn.close()
        raise RuntimeError(f"{OUTCOMES_TABLE} is missing after running the schema")

    cur.execute(f"SELECT count(*) FROM {OUTCOMES_TABLE}")
    stored = cur.fetchone()[0]
    print(f"{OUTCOMES_TABLE}: {stored} historical outcomes stored")

    cur.close()
    conn.close()
    return stored


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else os.getenv("DATABASE_URL", "")
    if not url:
        print("ERROR: No DATABASE_URL provided.")
        print("Set it in .env or pass it as the first argument.")
        sys.exit(1)
    run_schema(url)
