"""Multi-scheme code index over the reference catalog."""

from typing import Iterable, Optional

from airportlog.reference.catalog import ReferenceRecord

# Identifier schemes, in the order the single-query resolver prefers them.
SCHEMES = ("ident", "iata_code", "local_code", "gps_code")


def normalize_code(code: Optional[str]) -> str:
    """Uppercase and trim a user or log supplied code. None becomes ''."""
    if not code:
        return ""
    return code.strip().upper()


def record_codes(record: ReferenceRecord) -> list[str]:
    """Distinct normalized codes a record is reachable by."""
    codes: list[str] = []
    for scheme in SCHEMES:
        code = normalize_code(getattr(record, scheme))
        if code and code not in codes:
            codes.append(code)
    return codes


def matches_scheme(record: ReferenceRecord, scheme: str, code: str) -> bool:
    return normalize_code(getattr(record, scheme)) == code


class IdentifierIndex:
    """Maps every primary/IATA/local/GPS code to the records carrying it."""

    def __init__(self, entries: dict[str, list[ReferenceRecord]]):
        self._entries = entries

    @classmethod
    def build(cls, records: Iterable[ReferenceRecord]) -> "IdentifierIndex":
        entries: dict[str, list[ReferenceRecord]] = {}
        for record in records:
            for code in record_codes(record):
                entries.setdefault(code, []).append(record)
        # Candidate lists follow catalog order regardless of iteration order
        for candidates in entries.values():
            candidates.sort(key=lambda r: r.position)
        return cls(entries)

    def lookup(self, code: Optional[str]) -> list[ReferenceRecord]:
        """All records registered under the normalized code (new list, may be empty)."""
        return list(self._entries.get(normalize_code(code), ()))

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and normalize_code(code) in self._entries

    def __len__(self) -> int:
        return len(self._entries)
