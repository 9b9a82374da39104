"""Great-circle geometry on a spherical Earth."""
import math
from typing import NamedTuple

from wayfinder.core.exceptions import ValidationError

EARTH_RADIUS_M = 6371000


class Coordinate(NamedTuple):
    latitude: float
    longitude: float


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """
    Surface distance in metres between two coordinates (haversine formula).

    Inputs must be finite; use ``validate_coordinate`` at the boundary.
    """
    phi1, phi2 = math.radians(a.latitude), math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlam = math.radians(b.longitude - a.longitude)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    # rounding can push h just past 1 for antipodal points
    h = min(1.0, h)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    return (
        math.isfinite(latitude)
        and math.isfinite(longitude)
        and -90 <= latitude <= 90
        and -180 <= longitude <= 180
    )


def validate_coordinate(latitude, longitude) -> Coordinate:
    """Coerce and range-check a coordinate, raising ``ValidationError``."""
    lat = _as_float(latitude, "latitude")
    lon = _as_float(longitude, "longitude")
    if not -90 <= lat <= 90:
        raise ValidationError("Latitude must be between -90 and 90", field="latitude", reason="out_of_range")
    if not -180 <= lon <= 180:
        raise ValidationError("Longitude must be between -180 and 180", field="longitude", reason="out_of_range")
    return Coordinate(lat, lon)


def validate_radius(radius_meters) -> float:
    radius = _as_float(radius_meters, "radius_meters")
    if radius <= 0:
        raise ValidationError("Radius must be a positive number of meters", field="radius_meters", reason="not_positive")
    return radius


def format_coordinates(latitude: float, longitude: float) -> str:
    return f"{latitude:.6f},{longitude:.6f}"


def _as_float(value, field: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number", field=field, reason="not_a_number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a number", field=field, reason="not_a_number") from None
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be finite", field=field, reason="not_finite")
    return number
