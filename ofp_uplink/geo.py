"""Great-circle distances between coordinates.

Distances are only used to order candidates by proximity, so a
coordinate that cannot be placed on the globe is treated as infinitely
far away instead of failing the uplink.
"""

from __future__ import annotations

import math

from geopy.distance import great_circle

from .domain.models import Coordinates


def distance_nm(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance in nautical miles, inf for invalid coordinates."""
    if not a.is_valid or not b.is_valid:
        return math.inf
    try:
        return great_circle((a.lat, a.long), (b.lat, b.long)).nautical
    except ValueError:
        return math.inf
