#!/usr/bin/env python3
"""
Download the OurAirports airports.csv reference catalog to a local file,
so the resolver can load it with --catalog instead of fetching it on every run.

Usage:
    uv run python scripts/fetch_reference_data.py
    uv run python scripts/fetch_reference_data.py -o /tmp/airports.csv
    uv run airportlog --catalog data/airports.csv lookup KRNT
"""

import argparse
import sys
from pathlib import Path

import requests
from tqdm import tqdm

from airportlog.reference.catalog import DEFAULT_CATALOG_URL, Catalog, CatalogUnavailable

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_OUTPUT = PROJECT_ROOT / "data" / "airports.csv"
CHUNK_SIZE = 64 * 1024


def main() -> None:
    parser = argparse.ArgumentParser(description="Download the airport reference catalog")
    parser.add_argument("--url", default=DEFAULT_CATALOG_URL, help="Source CSV URL")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output CSV file. Default: {DEFAULT_OUTPUT}",
    )
    parser.add_argument("--timeout", type=int, default=30, help="HTTP timeout in seconds")
    args = parser.parse_args()

    target: Path = args.output
    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_suffix(target.suffix + ".part")

    print(f"Downloading airport data from {args.url}...", file=sys.stderr)
    try:
        with requests.get(args.url, stream=True, timeout=args.timeout) as resp:
            resp.raise_for_status()
            total = int(resp.headers.get("content-length") or 0) or None
            with open(partial, "wb") as f, tqdm(
                total=total, unit="B", unit_scale=True, desc=target.name
            ) as bar:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
                    bar.update(len(chunk))
    except requests.RequestException as e:
        partial.unlink(missing_ok=True)
        print(f"Error downloading file: {e}", file=sys.stderr)
        sys.exit(1)

    # Refuse to replace a good catalog with something the loader can't read
    try:
        catalog = Catalog.from_csv_text(partial.read_text(encoding="utf-8"))
    except CatalogUnavailable as e:
        partial.unlink(missing_ok=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    partial.replace(target)
    print(f"Wrote {len(catalog)} airports to {target}", file=sys.stderr)


if __name__ == "__main__":
    main()
