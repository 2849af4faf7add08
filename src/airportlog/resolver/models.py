"""Data models for airport resolution."""

import math
from dataclasses import dataclass, field
from typing import ClassVar, Literal, Optional, Union

from airportlog.reference.catalog import ReferenceRecord

MembershipKind = Literal["visited", "wishlist", "fuel"]
Provenance = Literal["origin", "destination", "route", "manual"]

MEMBERSHIP_KINDS = ("visited", "wishlist", "fuel")

NO_MATCH = "no_match"
WAYPOINT_COLLISION = "waypoint_collision"


@dataclass
class TripLeg:
    """One flight from a parsed trip log."""

    date: str
    origin: str
    destination: str
    route: Optional[str] = None


@dataclass
class ResolvedAirport:
    """An airport ready to be added to one of the user's lists."""

    code: str
    name: str
    latitude: float
    longitude: float
    kind: MembershipKind
    provenance: Provenance
    date_visited: Optional[str] = None
    notes: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        """False when the catalog row had unusable coordinates; the airport can't be mapped."""
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)

    @classmethod
    def from_record(
        cls,
        record: ReferenceRecord,
        code: str,
        kind: MembershipKind,
        provenance: Provenance,
        date_visited: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> "ResolvedAirport":
        return cls(
            code=code,
            name=record.name,
            latitude=record.latitude,
            longitude=record.longitude,
            kind=kind,
            provenance=provenance,
            date_visited=date_visited,
            notes=notes,
        )


@dataclass
class Resolved:
    """Exactly one airport matched the query."""

    status: ClassVar[str] = "resolved"

    code: str
    record: ReferenceRecord
    kind: MembershipKind
    already_present: bool = False
    airport: Optional[ResolvedAirport] = None  # None when already_present
    message: str = ""


@dataclass
class Ambiguous:
    """Several airport names matched; the caller has to pick one."""

    status: ClassVar[str] = "ambiguous"

    candidates: list[ReferenceRecord] = field(default_factory=list)
    message: str = ""


@dataclass
class NotFound:
    """Nothing usable matched. reason is NO_MATCH or WAYPOINT_COLLISION."""

    status: ClassVar[str] = "not_found"

    reason: str = NO_MATCH
    message: str = ""


Outcome = Union[Resolved, Ambiguous, NotFound]

AIRPORT_COLUMNS = [
    "code",
    "name",
    "latitude",
    "longitude",
    "kind",
    "provenance",
    "date_visited",
    "notes",
]


def airports_to_dataframe(airports: list[ResolvedAirport]):
    """Convert resolved airports to a pandas DataFrame."""
    import pandas as pd

    if not airports:
        return pd.DataFrame(columns=AIRPORT_COLUMNS)
    return pd.DataFrame(
        [
            {
                "code": a.code,
                "name": a.name,
                "latitude": a.latitude,
                "longitude": a.longitude,
                "kind": a.kind,
                "provenance": a.provenance,
                "date_visited": a.date_visited,
                "notes": a.notes,
            }
            for a in airports
        ]
    )
