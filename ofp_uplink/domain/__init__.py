"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    FlightPlanError,
    InvalidSequenceError,
    NavDataError,
    NotFoundError,
    OfpFetchError,
    OfpParseError,
    UplinkError,
)
from .models import (
    Airway,
    AirwayChunk,
    AirwayTerminationChunk,
    ChunkInstruction,
    Coordinates,
    DctChunk,
    Discontinuity,
    Fix,
    FixType,
    FlightPlanElement,
    FlightPlanSegment,
    ImportedPerformanceData,
    LatLongChunk,
    Leg,
    NavlogFix,
    OfpDocument,
    OfpRoute,
    PendingAirwayEntry,
    Procedure,
    ProcedureChunk,
    ProcedureTransition,
    RouteChunk,
    RouteDestination,
    RouteOrigin,
    SidEnrouteTransitionChunk,
    StarEnrouteTransitionChunk,
    WaypointChunk,
)

__all__ = [
    # Navlog and route
    "FixType",
    "Coordinates",
    "NavlogFix",
    "OfpDocument",
    "OfpRoute",
    "RouteOrigin",
    "RouteDestination",
    "ImportedPerformanceData",
    # Chunks
    "ChunkInstruction",
    "RouteChunk",
    "ProcedureChunk",
    "SidEnrouteTransitionChunk",
    "StarEnrouteTransitionChunk",
    "WaypointChunk",
    "LatLongChunk",
    "DctChunk",
    "AirwayChunk",
    "AirwayTerminationChunk",
    # Navigation data
    "Fix",
    "Airway",
    "Procedure",
    "ProcedureTransition",
    # Flight plan
    "Leg",
    "Discontinuity",
    "FlightPlanElement",
    "FlightPlanSegment",
    "PendingAirwayEntry",
    # Errors
    "UplinkError",
    "InvalidSequenceError",
    "NotFoundError",
    "OfpFetchError",
    "OfpParseError",
    "NavDataError",
    "FlightPlanError",
]
