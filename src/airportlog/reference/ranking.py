"""Score and order candidate airports for a code."""

from typing import Collection, Optional

from airportlog.reference.catalog import ReferenceRecord
from airportlog.reference.index import normalize_code

# Country favoured when no other context is known
DOMESTIC_COUNTRY = "US"

PREFERRED_COUNTRY_BONUS = 50
DOMESTIC_BONUS = 10
PRIMARY_IDENT_BONUS = 20
CLOSED_PENALTY = -100
_TYPE_BONUS = {
    "large_airport": 5,
    "medium_airport": 3,
    "small_airport": 1,
}


def score(
    record: ReferenceRecord,
    target_code: str,
    preferred_countries: Optional[Collection[str]] = None,
) -> int:
    """Additive preference score of a record as the meaning of target_code."""
    total = 0
    if preferred_countries and record.iso_country in preferred_countries:
        total += PREFERRED_COUNTRY_BONUS
    if record.iso_country == DOMESTIC_COUNTRY:
        total += DOMESTIC_BONUS
    total += _TYPE_BONUS.get(record.type, 0)
    if normalize_code(record.ident) == normalize_code(target_code):
        total += PRIMARY_IDENT_BONUS
    if record.is_closed:
        total += CLOSED_PENALTY
    return total


def rank(
    candidates: Collection[ReferenceRecord],
    target_code: str,
    preferred_countries: Optional[Collection[str]] = None,
) -> list[ReferenceRecord]:
    """Best-first ordering; equal scores keep catalog order."""
    return sorted(
        candidates,
        key=lambda r: (-score(r, target_code, preferred_countries), r.position),
    )


def best(
    candidates: Collection[ReferenceRecord],
    target_code: str,
    preferred_countries: Optional[Collection[str]] = None,
) -> Optional[ReferenceRecord]:
    """Top-ranked candidate, or None for an empty collection."""
    ranked = rank(candidates, target_code, preferred_countries)
    return ranked[0] if ranked else None
