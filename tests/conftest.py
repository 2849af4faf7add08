"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src is on path when running tests without installed package
src = Path(__file__).resolve().parent.parent / "src"
if src.exists() and str(src) not in sys.path:
    sys.path.insert(0, str(src))

from airportlog.reference.catalog import Catalog  # noqa: E402
from airportlog.reference.index import IdentifierIndex  # noqa: E402

# Subset of the OurAirports airports.csv layout
AIRPORTS_CSV = """\
id,ident,type,name,latitude_deg,longitude_deg,iso_country,iso_region,municipality,icao_code,iata_code,gps_code,local_code
1,KRNT,small_airport,Renton Municipal Airport,47.4931,-122.2158,US,US-WA,Renton,KRNT,RNT,KRNT,RNT
2,KPAE,medium_airport,Snohomish County (Paine Field) Airport,47.9063,-122.2821,US,US-WA,Everett,KPAE,PAE,KPAE,PAE
3,KSAC,medium_airport,Sacramento Executive Airport,38.5125,-121.4935,US,US-CA,Sacramento,KSAC,SAC,KSAC,SAC
4,YSAC,small_airport,Saccone Station Airstrip,-25.1000,120.3000,AU,AU-WA,,,,,SAC
5,S50,small_airport,Auburn Municipal Airport,47.3283,-122.2263,US,US-WA,Auburn,,,S50,S50
6,US-0001,closed,Renton Seaplane Base,47.5000,-122.2000,US,US-WA,Renton,,,,RNT
7,US-SPR1,small_airport,Springfield Downtown Airport,39.8000,-89.6500,US,US-IL,Springfield,,,,
8,CA-SPR2,small_airport,Springfield Downtown Airport,46.2000,-63.1000,CA,CA-PE,Springfield,,,,
9,CYVR,large_airport,Vancouver International Airport,49.1939,-123.1840,CA,CA-BC,Vancouver,CYVR,YVR,CYVR,
10,CYYJ,medium_airport,Victoria International Airport,48.6469,-123.4260,CA,CA-BC,Victoria,CYYJ,YYJ,CYYJ,
11,KBFI,medium_airport,Boeing Field King County International Airport,47.5300,-122.3020,US,US-WA,Seattle,KBFI,BFI,KBFI,BFI
12,CBF2,small_airport,Beaver Falls Island Aerodrome,49.5000,-124.0000,CA,CA-BC,,,,,BFI
13,CBF3,closed,Old Beaver Falls Strip,49.5100,-124.0100,CA,CA-BC,,,,,BFI
14,XBAD,heliport,Bad Coordinates Heliport,,abc,US,US-WA,Kent,,,XBAD,
15,KOCF,closed,Old Closed Field,47.1000,-122.1000,US,US-WA,,,,,OCF
"""


@pytest.fixture
def catalog() -> Catalog:
    return Catalog.from_csv_text(AIRPORTS_CSV)


@pytest.fixture
def index(catalog: Catalog) -> IdentifierIndex:
    return IdentifierIndex.build(catalog)


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    path = tmp_path / "airports.csv"
    path.write_text(AIRPORTS_CSV, encoding="utf-8")
    return path
