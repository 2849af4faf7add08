"""Reference airport catalog (OurAirports CSV), loaded once and memoized."""

import io
import logging
import math
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Union

import pandas as pd
import requests

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_URL = "https://davidmegginson.github.io/ourairports-data/airports.csv"
DEFAULT_TIMEOUT = 30

REQUIRED_COLUMNS = (
    "ident",
    "icao_code",
    "iata_code",
    "gps_code",
    "local_code",
    "name",
    "latitude_deg",
    "longitude_deg",
    "iso_country",
    "type",
)
OPTIONAL_COLUMNS = ("municipality", "iso_region")


class CatalogUnavailable(RuntimeError):
    """The reference catalog could not be fetched or parsed."""


@dataclass(frozen=True)
class ReferenceRecord:
    """One airport row from the reference catalog."""

    ident: str
    name: str
    latitude: float  # NaN when the source value is missing or malformed
    longitude: float
    iso_country: str
    type: str
    icao_code: str = ""
    iata_code: str = ""
    local_code: str = ""
    gps_code: str = ""
    municipality: str = ""
    iso_region: str = ""
    position: int = 0  # row number in the catalog

    @property
    def has_coordinates(self) -> bool:
        return math.isfinite(self.latitude) and math.isfinite(self.longitude)

    @property
    def is_closed(self) -> bool:
        return self.type == "closed"


class Catalog:
    """Immutable, ordered collection of reference records."""

    def __init__(self, records):
        self._records: tuple[ReferenceRecord, ...] = tuple(records)

    @property
    def records(self) -> tuple[ReferenceRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ReferenceRecord]:
        return iter(self._records)

    def search_names(self, fragment: str) -> list[ReferenceRecord]:
        """Records whose name contains fragment (case-insensitive), in catalog order."""
        needle = fragment.strip().upper()
        if not needle:
            return []
        return [r for r in self._records if r.name and needle in r.name.upper()]

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "Catalog":
        """Build a catalog from a frame of string columns (as read from airports.csv)."""
        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise CatalogUnavailable(f"Reference catalog is missing columns: {', '.join(missing)}")

        df = df.copy()
        for col in OPTIONAL_COLUMNS:
            if col not in df.columns:
                df[col] = ""
        lat = pd.to_numeric(df["latitude_deg"].str.strip(), errors="coerce").astype(float)
        lon = pd.to_numeric(df["longitude_deg"].str.strip(), errors="coerce").astype(float)

        records = []
        for pos, row in enumerate(df.itertuples(index=False)):
            records.append(
                ReferenceRecord(
                    ident=row.ident.strip(),
                    name=row.name.strip(),
                    latitude=float(lat.iat[pos]),
                    longitude=float(lon.iat[pos]),
                    iso_country=row.iso_country.strip().upper(),
                    type=row.type.strip(),
                    icao_code=row.icao_code.strip(),
                    iata_code=row.iata_code.strip(),
                    local_code=row.local_code.strip(),
                    gps_code=row.gps_code.strip(),
                    municipality=row.municipality.strip(),
                    iso_region=row.iso_region.strip(),
                    position=pos,
                )
            )
        return cls(records)

    @classmethod
    def from_csv_text(cls, text: str) -> "Catalog":
        """Parse airports.csv content."""
        try:
            df = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False)
        except (ValueError, pd.errors.ParserError) as exc:
            raise CatalogUnavailable(f"Failed to parse reference catalog: {exc}") from exc
        return cls.from_dataframe(df)


class CatalogLoader:
    """
    Lazily loads the reference catalog from a URL or local file.

    The parsed catalog is cached on first success and kept for the lifetime of
    the loader (normally the whole process); there is no teardown. Callers that
    arrive while a load is in flight wait for it instead of fetching again.
    Failures are not cached, so a later call retries.
    """

    def __init__(self, source: Union[str, Path] = DEFAULT_CATALOG_URL, timeout: int = DEFAULT_TIMEOUT):
        self.source = source
        self.timeout = timeout
        self._catalog: Optional[Catalog] = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._catalog is not None

    def load(self) -> Catalog:
        """Return the cached catalog, loading it on first use."""
        if self._catalog is not None:
            return self._catalog
        with self._lock:
            if self._catalog is None:
                self._catalog = self._fetch_and_parse()
        return self._catalog

    def _fetch_and_parse(self) -> Catalog:
        source = str(self.source)
        logger.info("Loading airport reference catalog from %s", source)
        try:
            text = self._read(source)
        except (requests.RequestException, OSError, UnicodeDecodeError) as exc:
            logger.warning("Failed to load airport reference catalog from %s: %s", source, exc)
            raise CatalogUnavailable(f"Failed to load airport database from {source}: {exc}") from exc
        catalog = Catalog.from_csv_text(text)
        logger.info("Parsed %d airports from reference catalog", len(catalog))
        return catalog

    def _read(self, source: str) -> str:
        if source.startswith(("http://", "https://")):
            resp = requests.get(source, timeout=self.timeout)
            resp.raise_for_status()
            return resp.text
        return Path(source).read_text(encoding="utf-8")
