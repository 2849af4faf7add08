"""Resolve a whole flight log into newly discovered airports."""

import logging
import re
from typing import AbstractSet, Optional

from airportlog.reference.catalog import ReferenceRecord
from airportlog.reference.index import IdentifierIndex, normalize_code
from airportlog.reference.ranking import best, rank
from airportlog.resolver.models import Provenance, ResolvedAirport, TripLeg
from airportlog.resolver.single import canonical_code

logger = logging.getLogger(__name__)

# "KRNT PAE", "KRNT-PAE", "KRNT -> PAE", "KRNT>PAE"
_ROUTE_SEPARATOR_RE = re.compile(r"[\s\->]+")

IMPORT_NOTE = "Imported from flight log."


def tokenize_route(route: Optional[str]) -> list[str]:
    """Split a routing string into its codes, dropping empty tokens."""
    if not route:
        return []
    return [t for t in _ROUTE_SEPARATOR_RE.split(route) if t]


def country_context(index: IdentifierIndex, leg: TripLeg) -> set[str]:
    """Countries of the leg's best-matching origin and destination records."""
    countries: set[str] = set()
    for raw in (leg.origin, leg.destination):
        code = normalize_code(raw)
        if not code:
            continue
        record = best(index.lookup(code), code)
        if record is not None and record.iso_country:
            countries.add(record.iso_country)
    return countries


class _LogResolution:
    """Running state of one resolve_log call: emitted airports and seen codes."""

    def __init__(self, existing_codes: AbstractSet[str]):
        self.existing_codes = existing_codes
        self.seen: set[str] = set()
        self.airports: list[ResolvedAirport] = []

    def is_known(self, code: str) -> bool:
        return code in self.existing_codes or code in self.seen

    def emit(self, record: ReferenceRecord, typed: str, leg: TripLeg, provenance: Provenance) -> None:
        code = canonical_code(record, typed)
        if self.is_known(record.ident) or self.is_known(code):
            return
        self.airports.append(
            ResolvedAirport.from_record(
                record,
                code=code,
                kind="visited",
                provenance=provenance,
                date_visited=leg.date,
                notes=IMPORT_NOTE,
            )
        )
        self.seen.update((record.ident, code))


def _resolve_endpoint(index: IdentifierIndex, code: str, context: set[str]) -> Optional[ReferenceRecord]:
    return best(index.lookup(code), code, context)


def _resolve_route_code(index: IdentifierIndex, code: str, context: set[str]) -> Optional[ReferenceRecord]:
    candidates = [r for r in index.lookup(code) if not r.is_closed]
    if context:
        candidates = [r for r in candidates if r.iso_country in context]
    if not candidates:
        logger.debug("Skipping route code %s: no candidate in %s", code, sorted(context) or "any country")
        return None
    return rank(candidates, code, context)[0]


def resolve_log(
    index: IdentifierIndex,
    legs: list[TripLeg],
    existing_codes: AbstractSet[str] = frozenset(),
) -> list[ResolvedAirport]:
    """
    Resolve every leg in order and return only airports not seen before.

    For each leg the best origin/destination matches fix a country context.
    Endpoints are then re-ranked with that context as a preference, while route
    codes are restricted to it and never resolve to closed airports. A record
    is emitted once per call and never if its ident or stored code is already
    in existing_codes.
    """
    state = _LogResolution(existing_codes)

    for leg in legs:
        context = country_context(index, leg)

        for raw, provenance in ((leg.origin, "origin"), (leg.destination, "destination")):
            code = normalize_code(raw)
            if not code:
                continue
            record = _resolve_endpoint(index, code, context)
            if record is not None:
                state.emit(record, code, leg, provenance)

        for token in tokenize_route(leg.route):
            code = normalize_code(token)
            record = _resolve_route_code(index, code, context)
            if record is not None:
                state.emit(record, code, leg, "route")

    return state.airports
