"""Airport resolution for typed queries and flight logs."""

from airportlog.resolver.batch import resolve_log, tokenize_route
from airportlog.resolver.flight_log import FlightLogFormatError, parse_flight_log, read_flight_log
from airportlog.resolver.models import (
    Ambiguous,
    NotFound,
    Resolved,
    ResolvedAirport,
    TripLeg,
)
from airportlog.resolver.service import ResolverService
from airportlog.resolver.single import resolve_one

__all__ = [
    "Ambiguous",
    "FlightLogFormatError",
    "NotFound",
    "Resolved",
    "ResolvedAirport",
    "ResolverService",
    "TripLeg",
    "parse_flight_log",
    "read_flight_log",
    "resolve_log",
    "resolve_one",
    "tokenize_route",
]
