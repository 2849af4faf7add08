"""Resolve one user-typed airport code or name fragment."""

import re
from datetime import date
from typing import Iterable, Optional

from airportlog.reference.catalog import Catalog, ReferenceRecord
from airportlog.reference.index import SCHEMES, IdentifierIndex, matches_scheme, normalize_code
from airportlog.reference.ranking import rank
from airportlog.resolver.models import (
    NO_MATCH,
    WAYPOINT_COLLISION,
    Ambiguous,
    MembershipKind,
    NotFound,
    Outcome,
    Resolved,
    ResolvedAirport,
)

MAX_CANDIDATES = 10

_THREE_ALPHA_RE = re.compile(r"^[A-Z]{3}$")


def canonical_code(record: ReferenceRecord, typed: str) -> str:
    """
    Code to store for a matched record.

    The typed code wins when it is the record's IATA or local code (users
    write "RNT" or "S50", not the catalog ident); otherwise the ident.
    """
    typed = normalize_code(typed)
    if typed and typed in (normalize_code(record.iata_code), normalize_code(record.local_code)):
        return typed
    return record.ident


def is_waypoint_collision(record: ReferenceRecord, typed: str) -> bool:
    """A bare three-letter code naming a record with a different ident is taken as a VOR, not the airport."""
    typed = normalize_code(typed)
    return bool(_THREE_ALPHA_RE.match(typed)) and record.ident != typed


def match_code(index: IdentifierIndex, code: str) -> Optional[ReferenceRecord]:
    """Exact code match; the first scheme (ident, IATA, local, GPS) with hits wins, ranked within."""
    candidates = index.lookup(code)
    for scheme in SCHEMES:
        group = [r for r in candidates if matches_scheme(r, scheme, code)]
        if group:
            return rank(group, code)[0]
    return None


def resolve_one(
    catalog: Catalog,
    index: IdentifierIndex,
    text: str,
    kind: MembershipKind,
    existing: Iterable[tuple[str, str]] = (),
    today: Optional[date] = None,
) -> Outcome:
    """
    Resolve a single query to Resolved, Ambiguous or NotFound.

    Searching moves to Resolved when one record matches (by code, or by a
    unique name match), to Ambiguous when several names match and no code
    does, and to NotFound when nothing matches or the only match is rejected
    as a waypoint collision. existing holds (code, kind) pairs the caller
    already stores; a match among them resolves without a new airport.
    """
    query = normalize_code(text)
    if not query:
        return NotFound(reason=NO_MATCH, message="Enter an airport code or name.")

    record = match_code(index, query)
    if record is None:
        named = catalog.search_names(query)
        if not named:
            return NotFound(reason=NO_MATCH, message=f'No exact code or name matches for "{text}".')
        if len(named) > 1:
            return Ambiguous(
                candidates=_cap(rank(named, query)),
                message=f'Multiple matches found for "{text}". Please select one:',
            )
        record = named[0]

    if is_waypoint_collision(record, query):
        return NotFound(
            reason=WAYPOINT_COLLISION,
            message=(
                f'Matched {record.name} ({record.ident}), but skipping because "{query}" '
                "is likely a VOR waypoint, not the airport itself."
            ),
        )

    code = canonical_code(record, query)
    if (code, kind) in set(existing):
        return Resolved(
            code=code,
            record=record,
            kind=kind,
            already_present=True,
            message=f"Airport {code} ({record.name}) is already in your {kind} list.",
        )

    date_visited = None
    if kind == "visited":
        date_visited = (today or date.today()).isoformat()
    airport = ResolvedAirport.from_record(
        record,
        code=code,
        kind=kind,
        provenance="manual",
        date_visited=date_visited,
        notes=f'Manually added: "{text}".',
    )
    return Resolved(
        code=code,
        record=record,
        kind=kind,
        airport=airport,
        message=f"Added {record.name} ({code})",
    )


def _cap(candidates: list[ReferenceRecord]) -> list[ReferenceRecord]:
    return candidates[:MAX_CANDIDATES]
