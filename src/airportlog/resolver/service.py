"""Resolver service - owns the catalog loader and the identifier index."""

import threading
from datetime import date
from typing import AbstractSet, Iterable, Optional

from airportlog.reference.catalog import Catalog, CatalogLoader
from airportlog.reference.index import IdentifierIndex
from airportlog.resolver.batch import resolve_log
from airportlog.resolver.models import MembershipKind, Outcome, ResolvedAirport, TripLeg
from airportlog.resolver.single import resolve_one


class ResolverService:
    """
    Entry point for single-query and flight-log resolution.

    The loader is injected (a default CatalogLoader otherwise) and the index is
    built once from its catalog on first use. Both live as long as the service.
    Raises CatalogUnavailable when the catalog cannot be loaded.
    """

    def __init__(self, loader: Optional[CatalogLoader] = None):
        self._loader = loader or CatalogLoader()
        self._index: Optional[IdentifierIndex] = None
        self._lock = threading.Lock()

    def catalog(self) -> Catalog:
        return self._loader.load()

    def index(self) -> IdentifierIndex:
        if self._index is None:
            catalog = self.catalog()
            with self._lock:
                if self._index is None:
                    self._index = IdentifierIndex.build(catalog)
        return self._index

    def resolve_one(
        self,
        text: str,
        kind: MembershipKind,
        existing: Iterable[tuple[str, str]] = (),
        today: Optional[date] = None,
    ) -> Outcome:
        """Resolve one typed code or name; see airportlog.resolver.single.resolve_one."""
        index = self.index()
        return resolve_one(self.catalog(), index, text, kind, existing=existing, today=today)

    def resolve_log(
        self,
        legs: list[TripLeg],
        existing_codes: AbstractSet[str] = frozenset(),
    ) -> list[ResolvedAirport]:
        """Resolve a parsed flight log; see airportlog.resolver.batch.resolve_log."""
        return resolve_log(self.index(), legs, existing_codes)
