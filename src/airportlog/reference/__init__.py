"""Airport reference catalog, identifier index and candidate ranking."""

from airportlog.reference.catalog import (
    Catalog,
    CatalogLoader,
    CatalogUnavailable,
    ReferenceRecord,
)
from airportlog.reference.index import IdentifierIndex, normalize_code
from airportlog.reference.ranking import DOMESTIC_COUNTRY, rank, score

__all__ = [
    "Catalog",
    "CatalogLoader",
    "CatalogUnavailable",
    "DOMESTIC_COUNTRY",
    "IdentifierIndex",
    "ReferenceRecord",
    "normalize_code",
    "rank",
    "score",
]
