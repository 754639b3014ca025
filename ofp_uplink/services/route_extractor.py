"""Route extractor - Maps an OFP document to a route summary."""

from __future__ import annotations

import math
from typing import Optional

from ..domain.models import OfpDocument, OfpRoute, RouteDestination, RouteOrigin
from .navlog_classifier import classify


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except (TypeError, ValueError):
        return math.nan


def _parse_int(text: str) -> Optional[int]:
    value = _parse_float(text)
    return int(value) if math.isfinite(value) else None


def extract_route(ofp: OfpDocument) -> OfpRoute:
    """Build the route summary of an OFP.

    Header fields are copied as-is; the navlog is classified into
    route chunks. An unparseable cost index becomes NaN and an
    unparseable tropopause becomes None.

    Args:
        ofp: The OFP document.

    Returns:
        The route summary, including its chunk sequence.
    """
    return OfpRoute(
        origin=RouteOrigin(
            ident=ofp.origin_ident,
            runway=ofp.origin_runway,
            transition_altitude=ofp.origin_transition_altitude,
        ),
        destination=RouteDestination(
            ident=ofp.destination_ident,
            runway=ofp.destination_runway,
            transition_level=ofp.destination_transition_level,
        ),
        alternate=ofp.alternate_ident,
        cost_index=_parse_float(ofp.cost_index),
        cruise_altitude=ofp.cruise_altitude,
        callsign=ofp.callsign,
        pilot_tropopause=_parse_int(ofp.average_tropopause),
        chunks=classify(ofp.navlog),
    )
