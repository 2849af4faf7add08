"""CLI for airport resolution."""

import argparse
import sys

from airportlog.reference.catalog import DEFAULT_CATALOG_URL, DEFAULT_TIMEOUT, CatalogLoader, CatalogUnavailable
from airportlog.resolver.flight_log import FlightLogFormatError, read_flight_log
from airportlog.resolver.models import MEMBERSHIP_KINDS, Ambiguous, NotFound, airports_to_dataframe
from airportlog.resolver.service import ResolverService


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Resolve airport codes and flight logs against the OurAirports catalog"
    )
    parser.add_argument(
        "--catalog",
        "-c",
        default=DEFAULT_CATALOG_URL,
        help="airports.csv URL or local path",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help="HTTP timeout in seconds for fetching the catalog",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="Resolve one code or airport name")
    lookup.add_argument("text", help="Airport code (e.g. KRNT, RNT) or part of its name")
    lookup.add_argument(
        "--kind",
        "-k",
        choices=MEMBERSHIP_KINDS,
        default="visited",
        help="List the airport is added to",
    )
    lookup.add_argument(
        "--known",
        action="append",
        default=[],
        metavar="CODE",
        help="Code already in the --kind list (repeatable)",
    )

    imp = sub.add_parser("import", help="Find new airports in a logbook CSV export")
    imp.add_argument("log", help="Logbook CSV containing a Flights Table")
    imp.add_argument(
        "--known",
        action="append",
        default=[],
        metavar="CODE",
        help="Code already on the map (repeatable)",
    )
    imp.add_argument(
        "--output",
        "-o",
        help="Write new airports to CSV file",
    )
    return parser.parse_args(argv)


def _known_codes(values):
    return {v.strip().upper() for v in values if v.strip()}


def run_lookup(service, args) -> int:
    existing = {(code, args.kind) for code in _known_codes(args.known)}
    outcome = service.resolve_one(args.text, args.kind, existing=existing)

    if isinstance(outcome, NotFound):
        print(outcome.message, file=sys.stderr)
        return 1
    if isinstance(outcome, Ambiguous):
        print(outcome.message)
        for c in outcome.candidates:
            place = ", ".join(p for p in (c.municipality, c.iso_country) if p)
            print(f"  {c.ident:<8} {c.name} ({place})")
        return 1

    print(outcome.message)
    if outcome.airport is not None and not outcome.airport.has_coordinates:
        print(f"Warning: {outcome.code} has no usable coordinates", file=sys.stderr)
    return 0


def run_import(service, args) -> int:
    try:
        legs = read_flight_log(args.log)
    except (OSError, FlightLogFormatError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Parsed {len(legs)} valid flight entries.", file=sys.stderr)

    airports = service.resolve_log(legs, existing_codes=_known_codes(args.known))
    df = airports_to_dataframe(airports)
    if df.empty:
        print("Log processed. No new airports found to add.", file=sys.stderr)
        return 0

    print(df.to_string(index=False))
    if args.output:
        df.to_csv(args.output, index=False)
        print(f"\nWrote {len(df)} rows to {args.output}", file=sys.stderr)
    return 0


def main(argv=None):
    args = parse_args(argv)
    service = ResolverService(CatalogLoader(args.catalog, timeout=args.timeout))

    try:
        if args.command == "lookup":
            code = run_lookup(service, args)
        else:
            code = run_import(service, args)
    except CatalogUnavailable as e:
        print(f"Error: {e}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
