"""
Replay historical appeal outcomes through the scorer and nudge its weights.

Outcomes are read from the appeal_outcomes table (see db/schema.sql). They can
be loaded from a JSON export first with --import.

Usage:
    python -m data.calibrate                        # uses DATABASE_URL from .env
    python -m data.calibrate --import outcomes.json # load, then calibrate
    python -m data.calibrate --threshold 0.8
"""

import argparse
import json
import os
import sys
from datetime import date

import psycopg2
import psycopg2.extras
from dotenv import load_dotenv

from db.setup import run_schema
from pcn_appeal.engine.calibration import CalibrationCase, calibrate
from pcn_appeal.engine.scoring import AppealInput
from pcn_appeal.errors import CalibrationError

load_dotenv()

OUTCOME_COLUMNS = (
    "reference",
    "ticket_type",
    "description",
    "circumstances",
    "location",
    "incident_date",
    "evidence",
    "previous_attempts",
    "pcn_amount",
    "council_name",
    "successful",
    "council_response",
    "decided_on",
)


def row_to_case(row: dict) -> CalibrationCase:
    """Turn one appeal_outcomes row (or JSON record) into a calibration case."""
    incident = row.get("incident_date")
    if isinstance(incident, str):
        incident = date.fromisoformat(incident)
    if not isinstance(incident, date):
        raise CalibrationError(f"Row {row.get('reference')!r} has no incident_date")

    successful = row.get("successful")
    if not isinstance(successful, bool):
        raise CalibrationError(f"Row {row.get('reference')!r} has no boolean outcome")

    amount = row.get("pcn_amount")
    return CalibrationCase(
        appeal=AppealInput(
            description=row.get("description") or "",
            circumstances=list(row.get("circumstances") or []),
            location=row.get("location") or "",
            incident_date=incident,
            evidence=list(row.get("evidence") or []),
            previous_attempts=int(row.get("previous_attempts") or 0),
            pcn_amount=float(amount) if amount is not None else None,
            council_name=row.get("council_name"),
        ),
        actual_outcome=successful,
    )


def load_cases(db_url: str) -> list[CalibrationCase]:
    conn = psycopg2.connect(db_url)
    cur = conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)
    cur.execute(f"SELECT {', '.join(OUTCOME_COLUMNS)} FROM appeal_outcomes ORDER BY id")
    rows = cur.fetchall()
    cur.close()
    conn.close()
    return [row_to_case(dict(row)) for row in rows]


def import_outcomes(db_url: str, records: list[dict]) -> int:
    """Insert outcome records, skipping references already present."""
    conn = psycopg2.connect(db_url)
    cur = conn.cursor()
    inserted = 0

    for record in records:
        values = {column: record.get(column) for column in OUTCOME_COLUMNS}
        values["circumstances"] = list(values["circumstances"] or [])
        values["evidence"] = list(values["evidence"] or [])
        values["previous_attempts"] = values["previous_attempts"] or 0
        values["location"] = values["location"] or ""
        try:
            cur.execute("""
                INSERT INTO appeal_outcomes
                    (reference, ticket_type, description, circumstances,
                     location, incident_date, evidence, previous_attempts,
                     pcn_amount, council_name, successful, council_response,
                     decided_on)
                VALUES
                    (%(reference)s, %(ticket_type)s, %(description)s,
                     %(circumstances)s, %(location)s, %(incident_date)s,
                     %(evidence)s, %(previous_attempts)s, %(pcn_amount)s,
                     %(council_name)s, %(successful)s, %(council_response)s,
                     %(decided_on)s)
                ON CONFLICT (reference) DO NOTHING
            """, values)
            if cur.rowcount > 0:
                inserted += 1
            conn.commit()
        except psycopg2.Error as e:
            print(f"  Error inserting {record.get('reference', '?')}: {e}")
            conn.rollback()

    cur.close()
    conn.close()
    return inserted


def print_report(report) -> None:
    print(f"Cases:                    {report.total_cases}")
    print(f"Correct predictions:      {report.correct_predictions}")
    print(f"Accuracy:                 {report.accuracy:.1%}")
    print(f"Precision:                {report.precision:.1%}")
    print(f"Recall:                   {report.recall:.1%}")
    print(f"F1:                       {report.f1_score:.3f}")
    print(f"High-confidence accuracy: {report.high_confidence_accuracy:.1%}")
    if report.grounds_effectiveness:
        print("\nGround effectiveness:")
        for g in report.grounds_effectiveness:
            print(f"  {g.ground_id:<4} {g.success_rate:6.1%}  ({g.total_cases} cases)")
    if report.weights_adjusted:
        print(f"\nWeights nudged, now at v{report.weights_version}.")
    else:
        print(f"\nWeights unchanged at v{report.weights_version}.")


def main():
    parser = argparse.ArgumentParser(description="Calibrate appeal scoring weights")
    parser.add_argument("--import", dest="import_file", type=str, default=None)
    parser.add_argument("--threshold", type=float, default=None)
    args = parser.parse_args()

    db_url = os.getenv("DATABASE_URL", "")
    if not db_url:
        print("ERROR: DATABASE_URL not set in .env")
        sys.exit(1)

    if args.import_file:
        run_schema(db_url)
        with open(args.import_file, encoding="utf-8") as f:
            records = json.load(f)
        inserted = import_outcomes(db_url, records)
        print(f"Imported {inserted} of {len(records)} outcomes.")

    cases = load_cases(db_url)
    print(f"Loaded {len(cases)} historical outcomes.\n")
    try:
        report = calibrate(cases, threshold=args.threshold)
    except CalibrationError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
    print_report(report)


if __name__ == "__main__":
    main()
