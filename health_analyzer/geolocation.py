"""Resolve a report's coordinates from whichever representation it carries.

Supported, in order of preference:
  - plain ``lat`` / ``lon`` fields (as returned by the report view RPC)
  - a ``location`` WKT/EWKT string, ``POINT(lon lat)`` or ``SRID=4326;POINT(lon lat)``
  - a ``location`` GeoJSON point, ``{"type": "Point", "coordinates": [lon, lat]}``,
    either as a dict or a JSON string

Zero, missing or out-of-range values leave the report unresolved (``None``),
never ``(0, 0)``.
"""

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from health_analyzer.schemas.report import Coordinates, Report

logger = logging.getLogger(__name__)

_WKT_POINT = re.compile(
    r"^\s*(?:SRID=\d+\s*;\s*)?POINT\s*\(\s*(?P<lon>\S+)\s+(?P<lat>\S+)\s*\)\s*$",
    re.IGNORECASE,
)


def _to_coordinates(lat: Any, lon: Any) -> Coordinates | None:
    if lat is None or lon is None:
        return None
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        logger.warning("Non-numeric coordinates: lat=%r lon=%r", lat, lon)
        return None
    if lat == 0 or lon == 0:
        return None
    try:
        return Coordinates(lat=lat, lon=lon)
    except ValidationError:
        logger.warning("Coordinates out of range: lat=%s lon=%s", lat, lon)
        return None


def parse_wkt_point(text: str) -> Coordinates | None:
    """Parse ``POINT(lon lat)``. Longitude comes first."""
    match = _WKT_POINT.match(text)
    if not match:
        logger.warning("Could not parse point encoding: %r", text)
        return None
    return _to_coordinates(match.group("lat"), match.group("lon"))


def parse_geojson_point(geometry: dict) -> Coordinates | None:
    if str(geometry.get("type", "")).lower() != "point":
        logger.warning("Unsupported GeoJSON geometry type: %r", geometry.get("type"))
        return None
    coords = geometry.get("coordinates")
    if not isinstance(coords, (list, tuple)) or len(coords) < 2:
        logger.warning("Malformed GeoJSON coordinates: %r", coords)
        return None
    return _to_coordinates(coords[1], coords[0])


def _parse_location(location: Any) -> Coordinates | None:
    if isinstance(location, dict):
        return parse_geojson_point(location)
    if isinstance(location, str):
        text = location.strip()
        if text.startswith("{"):
            try:
                geometry = json.loads(text)
            except json.JSONDecodeError:
                logger.warning("Could not parse GeoJSON location: %r", text)
                return None
            if not isinstance(geometry, dict):
                return None
            return parse_geojson_point(geometry)
        return parse_wkt_point(text)
    logger.warning("Unsupported location representation: %s", type(location).__name__)
    return None


def extract_coordinates(report: Report) -> Coordinates | None:
    """Return resolved coordinates or None. Never raises."""
    coords = _to_coordinates(report.lat, report.lon)
    if coords is not None:
        return coords
    if report.location:
        coords = _parse_location(report.location)
        if coords is not None:
            return coords
    logger.info("Report %s has no resolvable location", report.id)
    return None
