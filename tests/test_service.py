"""Unit tests for ResolverService and the CLI."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from airportlog.reference.catalog import Catalog, CatalogLoader, CatalogUnavailable
from airportlog.resolver import cli
from airportlog.resolver.models import Ambiguous, Resolved, TripLeg
from airportlog.resolver.service import ResolverService


class TestResolverService:
    """Tests for ResolverService with an injected loader."""

    def test_resolve_one(self, catalog_file: Path) -> None:
        service = ResolverService(CatalogLoader(catalog_file))
        outcome = service.resolve_one("KRNT", "visited")
        assert isinstance(outcome, Resolved)
        assert outcome.code == "KRNT"

    def test_resolve_log(self, catalog_file: Path) -> None:
        service = ResolverService(CatalogLoader(catalog_file))
        legs = [TripLeg(date="2025-05-01", origin="KRNT", destination="KPAE", route="KRNT PAE")]
        airports = service.resolve_log(legs, existing_codes={"KRNT"})
        assert [a.code for a in airports] == ["KPAE"]

    def test_catalog_loaded_once_and_index_reused(self, catalog: Catalog) -> None:
        loader = MagicMock(spec=CatalogLoader)
        loader.load.return_value = catalog
        service = ResolverService(loader)

        first = service.index()
        service.resolve_one("Springfield", "wishlist")
        service.resolve_log([TripLeg(date="2025-05-01", origin="KRNT", destination="KPAE")])

        assert service.index() is first
        assert loader.load.call_count >= 1
        assert isinstance(service.resolve_one("Springfield", "wishlist"), Ambiguous)

    def test_catalog_failure_propagates(self) -> None:
        loader = MagicMock(spec=CatalogLoader)
        loader.load.side_effect = CatalogUnavailable("Failed to load airport database")
        service = ResolverService(loader)
        with pytest.raises(CatalogUnavailable):
            service.resolve_one("KRNT", "visited")
        with pytest.raises(CatalogUnavailable):
            service.resolve_log([])


class TestCli:
    """Tests for the airportlog command line."""

    def test_lookup_resolved(self, catalog_file: Path, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--catalog", str(catalog_file), "lookup", "KRNT"])
        assert excinfo.value.code == 0
        assert "Added Renton Municipal Airport (KRNT)" in capsys.readouterr().out

    def test_lookup_known(self, catalog_file: Path, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--catalog", str(catalog_file), "lookup", "KRNT", "--known", "krnt"])
        assert excinfo.value.code == 0
        assert "already in your visited list" in capsys.readouterr().out

    def test_lookup_ambiguous_lists_candidates(self, catalog_file: Path, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--catalog", str(catalog_file), "lookup", "Springfield", "--kind", "wishlist"])
        assert excinfo.value.code == 1
        out = capsys.readouterr().out
        assert "US-SPR1" in out
        assert "CA-SPR2" in out

    def test_lookup_waypoint_reason_shown(self, catalog_file: Path, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--catalog", str(catalog_file), "lookup", "SAC"])
        assert excinfo.value.code == 1
        assert "likely a VOR waypoint" in capsys.readouterr().err

    def test_import_writes_csv(self, catalog_file: Path, tmp_path: Path, capsys) -> None:
        log = tmp_path / "logbook.csv"
        log.write_text(
            "Flights Table\nDate,From,To,Route\n2025-05-01,KRNT,KPAE,KRNT PAE\n2025-05-02,KPAE,S50,\n"
        )
        out_csv = tmp_path / "new.csv"
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--catalog", str(catalog_file), "import", str(log), "--known", "S50", "-o", str(out_csv)])
        assert excinfo.value.code == 0
        assert "Renton Municipal Airport" in capsys.readouterr().out
        lines = out_csv.read_text().splitlines()
        assert lines[0].startswith("code,name,latitude,longitude")
        assert len(lines) == 3

    def test_import_bad_log(self, catalog_file: Path, tmp_path: Path, capsys) -> None:
        log = tmp_path / "logbook.csv"
        log.write_text("Date,From,To\n")
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--catalog", str(catalog_file), "import", str(log)])
        assert excinfo.value.code == 1
        assert "Could not find Flights Table" in capsys.readouterr().err

    def test_import_undecodable_log(self, catalog_file: Path, tmp_path: Path, capsys) -> None:
        log = tmp_path / "logbook.csv"
        log.write_bytes(b"Flights Table\nDate,From,To\n2025-05-01,KRNT,\xff\n")
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--catalog", str(catalog_file), "import", str(log)])
        assert excinfo.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_catalog_unavailable(self, tmp_path: Path, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--catalog", str(tmp_path / "missing.csv"), "lookup", "KRNT"])
        assert excinfo.value.code == 1
        assert "Error: Failed to load airport database" in capsys.readouterr().err
