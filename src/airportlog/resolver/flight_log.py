"""Read trip legs from a logbook CSV export (Flights Table section)."""

import csv
import io
from pathlib import Path
from typing import Optional, Union

from airportlog.resolver.models import TripLeg

FLIGHTS_TABLE_MARKER = "Flights Table"


class FlightLogFormatError(ValueError):
    """The file is not a logbook export with a usable Flights Table."""


def parse_flight_log(text: str) -> list[TripLeg]:
    """
    Parse logbook CSV text into trip legs.

    Exports hold several tables; legs come from the rows after the
    "Flights Table" marker row and its header row. Rows without a date,
    origin or destination are dropped.
    """
    rows = list(csv.reader(io.StringIO(text)))

    start = next(
        (i for i, row in enumerate(rows) if row and FLIGHTS_TABLE_MARKER in row[0]),
        None,
    )
    if start is None or start + 1 >= len(rows):
        raise FlightLogFormatError("Could not find Flights Table in the CSV")

    headers = [h.strip() for h in rows[start + 1]]
    try:
        date_idx = headers.index("Date")
        from_idx = headers.index("From")
        to_idx = headers.index("To")
    except ValueError:
        raise FlightLogFormatError(
            f"Flights Table is missing Date/From/To columns (found: {', '.join(h for h in headers if h)})"
        ) from None
    route_idx = headers.index("Route") if "Route" in headers else None

    legs = []
    for row in rows[start + 2:]:
        leg = TripLeg(
            date=_cell(row, date_idx),
            origin=_cell(row, from_idx),
            destination=_cell(row, to_idx),
            route=_cell(row, route_idx) or None,
        )
        if leg.date and leg.origin and leg.destination:
            legs.append(leg)
    return legs


def read_flight_log(path: Union[str, Path]) -> list[TripLeg]:
    """Parse a logbook CSV file."""
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise FlightLogFormatError(f"{path} is not a UTF-8 CSV file: {exc}") from exc
    return parse_flight_log(text)


def _cell(row: list[str], idx: Optional[int]) -> str:
    if idx is None or idx >= len(row):
        return ""
    return row[idx].strip()
