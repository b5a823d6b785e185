"""Tests for the ``python -m range_maps`` entry point."""

from __future__ import annotations

import json
import shutil
from typing import TYPE_CHECKING
from unittest.mock import patch

import pytest

from range_maps.__main__ import main, parse_args

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "RANGE_MAP_INPUT_CONTAINER",
        "RANGE_MAP_OUTPUT_CONTAINER",
        "RANGE_MAP_SOURCE",
        "RANGE_MAP_MAX_FOLDERS",
        "RANGE_MAP_MAX_FILES_PER_FOLDER",
        "AzureWebJobsStorage",
    ):
        monkeypatch.delenv(key, raising=False)


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.slug is None
        assert args.local is None
        assert args.dump is None
        assert args.indent == 2
        assert not args.verbose

    def test_output_requires_local(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--output", "out"])
        assert exc_info.value.code == 2
        assert "--output requires --local" in capsys.readouterr().err

    def test_output_with_local(self) -> None:
        args = parse_args(["--local", "kml", "--output", "out"])
        assert str(args.output) == "out"


class TestDump:
    """--dump prints one converted document."""

    def test_prints_geojson(
        self, data_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["--dump", str(data_dir / "02_multigeometry_polygons_point.kml")]) == 0
        parsed = json.loads(capsys.readouterr().out)
        assert parsed["bbox"] == [0.0, 0.0, 5.0, 5.0]
        assert [f["geometry"]["type"] for f in parsed["features"]] == [
            "MultiPolygon",
            "MultiPoint",
        ]

    def test_source_from_env(
        self,
        data_dir: Path,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("RANGE_MAP_SOURCE", "Field survey")
        main(["--dump", str(data_dir / "01_polygon_with_hole.kml")])
        parsed = json.loads(capsys.readouterr().out)
        assert parsed["features"][0]["properties"]["source"] == "Field survey"

    def test_empty_document_exit_code(
        self, data_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert main(["--dump", str(data_dir / "03_no_geometry.kml")]) == 1
        assert json.loads(capsys.readouterr().out) == {"type": "FeatureCollection", "features": []}

    def test_missing_file(self, tmp_path: Path) -> None:
        assert main(["--dump", str(tmp_path / "missing.kml")]) == 1


class TestLocalImport:
    """--local runs the importer over a directory tree."""

    def test_imports_and_prints_summary(
        self, tmp_path: Path, data_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = tmp_path / "kml"
        (root / "chelonia-mydas").mkdir(parents=True)
        shutil.copy(data_dir / "04_two_bare_polygons.kml", root / "chelonia-mydas" / "range.kml")
        out = tmp_path / "out"

        assert main(["--local", str(root), "--output", str(out)]) == 0

        summary = capsys.readouterr().out
        assert "Successfully imported: 1" in summary
        assert "chelonia-mydas (2 features, created)" in summary
        written = json.loads((out / "chelonia-mydas.geojson").read_text(encoding="utf-8"))
        assert len(written["features"]) == 2

    def test_failures_set_exit_code(
        self, tmp_path: Path, data_dir: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        root = tmp_path / "kml"
        (root / "caretta-caretta").mkdir(parents=True)
        shutil.copy(data_dir / "03_no_geometry.kml", root / "caretta-caretta" / "range.kml")

        assert main(["--local", str(root)]) == 1
        assert "Failed: 1" in capsys.readouterr().out
        assert not (root / "geojson" / "caretta-caretta.geojson").exists()

    def test_species_file(self, tmp_path: Path, data_dir: Path) -> None:
        root = tmp_path / "kml"
        (root / "chelonia-mydas").mkdir(parents=True)
        shutil.copy(data_dir / "01_polygon_with_hole.kml", root / "chelonia-mydas" / "a.kml")
        species_file = tmp_path / "species.json"
        species_file.write_text('[{"id": 7, "slug": "chelonia-mydas"}]')

        assert main(["--local", str(root), "--species-file", str(species_file)]) == 0
        assert (root / "geojson" / "7.geojson").exists()

    def test_missing_root_aborts(self, tmp_path: Path) -> None:
        assert main(["--local", str(tmp_path / "nope")]) == 1


class TestBlobMode:
    """Without --local the blob containers are used."""

    def test_missing_connection_string(self) -> None:
        assert main([]) == 1

    def test_invalid_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RANGE_MAP_MAX_FOLDERS", "0")
        assert main([]) == 1

    def test_non_numeric_limit_aborts(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RANGE_MAP_MAX_FOLDERS", "lots")
        assert main([]) == 1

    def test_uses_configured_containers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RANGE_MAP_INPUT_CONTAINER", "kml-in")
        monkeypatch.setenv("RANGE_MAP_OUTPUT_CONTAINER", "geojson-out")
        with patch("range_maps.__main__.get_blob_service_client") as factory:
            service = factory.return_value
            service.get_container_client.return_value.walk_blobs.return_value = []
            assert main([]) == 0
        names = [c.args[0] for c in service.get_container_client.call_args_list]
        assert names == ["kml-in", "geojson-out"]
