"""Shared pytest fixtures for the range-map test suite."""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


# ---------------------------------------------------------------------------
# Sample KML document fixtures (text, already read)
# ---------------------------------------------------------------------------


@pytest.fixture()
def polygon_with_hole_kml(data_dir: Path) -> str:
    """One bare Polygon: 5-point outer ring, 4-point hole."""
    return (data_dir / "01_polygon_with_hole.kml").read_text(encoding="utf-8")


@pytest.fixture()
def multigeometry_kml(data_dir: Path) -> str:
    """MultiGeometry with 2 Polygons and 1 Point."""
    return (data_dir / "02_multigeometry_polygons_point.kml").read_text(encoding="utf-8")


@pytest.fixture()
def no_geometry_kml(data_dir: Path) -> str:
    """Two Placemarks without any recognised geometry."""
    return (data_dir / "03_no_geometry.kml").read_text(encoding="utf-8")


@pytest.fixture()
def two_bare_polygons_kml(data_dir: Path) -> str:
    """Two Placemarks, each with one bare Polygon."""
    return (data_dir / "04_two_bare_polygons.kml").read_text(encoding="utf-8")


@pytest.fixture()
def lines_and_points_kml(data_dir: Path) -> str:
    """Bare LineStrings and a Point in one Placemark."""
    return (data_dir / "05_lines_and_points.kml").read_text(encoding="utf-8")


@pytest.fixture()
def degenerate_kml(data_dir: Path) -> str:
    """Short rings, unparseable tokens, one-point line, bad point."""
    return (data_dir / "06_degenerate.kml").read_text(encoding="utf-8")
