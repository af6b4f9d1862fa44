"""
Geometry primitives for service-area checks.

Coordinates inside rings are ``(lng, lat)`` pairs, matching GeoJSON.
Points handed to ``distance`` only need ``lat`` and ``lng`` attributes.

Every function here is pure and total over well-formed numbers. Malformed
polygon payloads come back as ``None`` or ``False``, never as an exception.
"""

import json
import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any, Optional

logger = logging.getLogger(__name__)

EARTH_RADIUS_KM = 6371.0

Vertex = tuple[float, float]
Ring = tuple[Vertex, ...]
Rings = tuple[Ring, ...]


def distance(p1: Any, p2: Any) -> float:
    """Haversine great-circle distance between two points, in kilometres."""
    lat1 = math.radians(p1.lat)
    lat2 = math.radians(p2.lat)
    d_lat = math.radians(p2.lat - p1.lat)
    d_lng = math.radians(p2.lng - p1.lng)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    )
    # Rounding can push a slightly outside [0, 1] for antipodal points.
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def point_in_ring(point: Sequence[float], ring: Any) -> bool:
    """Even-odd ray casting test of ``(x, y)`` against a closed ring.

    The crossing test is half-open: points on a left or bottom edge resolve
    inside, points on a right or top edge resolve outside. Rings with fewer
    than three vertices, or with vertices that are not number pairs, are
    never entered.
    """
    vertices = _as_ring(ring)
    if vertices is None or len(vertices) < 3:
        return False

    x, y = point[0], point[1]
    inside = False
    j = len(vertices) - 1
    for i in range(len(vertices)):
        xi, yi = vertices[i]
        xj, yj = vertices[j]
        j = i
        if yi == yj:
            continue
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
    return inside


def point_in_polygon(point: Sequence[float], rings: Any) -> bool:
    """True when the point is inside the outer ring and inside no hole."""
    if not _is_sequence(rings) or len(rings) == 0:
        return False

    outer, *holes = rings
    if not point_in_ring(point, outer):
        return False
    return not any(point_in_ring(point, hole) for hole in holes)


def extract_polygon_rings(payload: Any) -> Optional[Rings]:
    """Normalize a persisted polygon payload into rings of ``(lng, lat)`` pairs.

    Accepted forms:
        - a GeoJSON-style mapping with a ``coordinates`` ring set
        - a raw ring set ``[[[lng, lat], ...], [[lng, lat], ...]]``
        - a bare outer ring ``[[lng, lat], ...]``
        - a JSON string of any of the above

    Returns None for anything else.
    """
    if not payload:
        return None

    data = payload
    if isinstance(payload, (str, bytes)):
        try:
            data = json.loads(payload)
        except (ValueError, RecursionError):
            logger.debug("Polygon payload is not parseable JSON")
            return None

    if isinstance(data, Mapping):
        data = data.get("coordinates")

    if not _is_sequence(data) or len(data) == 0:
        return None

    # A bare ring has number pairs where a ring set has rings.
    if _as_vertex(data[0]) is not None:
        data = [data]

    rings = []
    for raw_ring in data:
        ring = _as_ring(raw_ring)
        if ring is None:
            logger.debug("Polygon payload has a malformed ring")
            return None
        rings.append(ring)
    return tuple(rings)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _as_vertex(value: Any) -> Optional[Vertex]:
    if not _is_sequence(value) or len(value) < 2:
        return None
    x, y = value[0], value[1]
    for coord in (x, y):
        if isinstance(coord, bool) or not isinstance(coord, (int, float)):
            return None
        if not math.isfinite(coord):
            return None
    return float(x), float(y)


def _as_ring(value: Any) -> Optional[Ring]:
    if not _is_sequence(value):
        return None
    vertices = []
    for raw in value:
        vertex = _as_vertex(raw)
        if vertex is None:
            return None
        vertices.append(vertex)
    return tuple(vertices)
