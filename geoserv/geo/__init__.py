from geoserv.geo.geometry import (
    EARTH_RADIUS_KM,
    distance,
    extract_polygon_rings,
    point_in_polygon,
    point_in_ring,
)
from geoserv.geo.membership import is_within_area, matching_areas

__all__ = [
    "EARTH_RADIUS_KM",
    "distance",
    "extract_polygon_rings",
    "point_in_polygon",
    "point_in_ring",
    "is_within_area",
    "matching_areas",
]
