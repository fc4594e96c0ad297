import pytest

from health_analyzer.geolocation import extract_coordinates, parse_wkt_point
from health_analyzer.schemas.report import Coordinates, Report

from tests.conftest import make_record


def resolve(**overrides):
    return extract_coordinates(Report.model_validate(make_record(**overrides)))


class TestExtractCoordinates:
    def test_split_fields(self):
        assert resolve(lat=12.9, lon=77.6) == Coordinates(lat=12.9, lon=77.6)

    def test_wkt_point_is_lon_then_lat(self):
        coords = resolve(lat=None, lon=None, location="POINT(77.6 12.9)")
        assert coords == Coordinates(lat=12.9, lon=77.6)

    def test_ewkt_prefix(self):
        coords = resolve(lat=None, lon=None, location="SRID=4326;POINT(-0.12 51.5)")
        assert coords == Coordinates(lat=51.5, lon=-0.12)

    def test_geojson_dict(self):
        location = {"type": "Point", "coordinates": [77.6, 12.9]}
        assert resolve(lat=None, lon=None, location=location) == Coordinates(lat=12.9, lon=77.6)

    def test_geojson_string(self):
        location = '{"type": "Point", "coordinates": [77.6, 12.9]}'
        assert resolve(lat=None, lon=None, location=location) == Coordinates(lat=12.9, lon=77.6)

    def test_split_fields_win_over_location(self):
        coords = resolve(lat=10.0, lon=20.0, location="POINT(77.6 12.9)")
        assert coords == Coordinates(lat=10.0, lon=20.0)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"lat": None, "lon": None},
            {"lat": 0, "lon": 0},
            {"lat": 12.9, "lon": 0},
            {"lat": 95.0, "lon": 77.6},
            {"lat": 12.9, "lon": 181.0},
            {"lat": None, "lon": None, "location": "POINT(garbage)"},
            {"lat": None, "lon": None, "location": "POINT(0 0)"},
            {"lat": None, "lon": None, "location": "{not json"},
            {"lat": None, "lon": None, "location": {"type": "Polygon", "coordinates": []}},
        ],
    )
    def test_unresolved(self, overrides):
        assert resolve(**overrides) is None


def test_parse_wkt_point_rejects_non_numeric():
    assert parse_wkt_point("POINT(east north)") is None


@pytest.mark.parametrize("lat,lon", [("", ""), ("abc", "77.6"), ("12.9", None)])
def test_unparseable_split_fields_are_unresolved(lat, lon):
    assert resolve(lat=lat, lon=lon) is None


def test_numeric_strings_are_accepted():
    assert resolve(lat="12.9", lon="77.6") == Coordinates(lat=12.9, lon=77.6)
