"""Navlog classifier - Turns a flat navlog into route instructions.

The navlog carries no explicit segment boundaries. Consecutive fixes
reached via the same airway or procedure belong to the same segment,
so transitions are inferred from the via identifier of adjacent fixes:

1. A SID/STAR fix yields one procedure chunk per procedure.
2. The first non-SID/STAR fix after a procedure, still reached via that
   procedure, is its enroute transition.
3. Direct routing markers (DCT, DCT*, NAT tracks) and the very first
   routed fix yield waypoint or lat/long chunks.
4. A new via identifier starts an airway, closing the previous one.
5. An airway is terminated at its last fix, as soon as the next fix is
   reached via something else.

The classifier is a pure fold over the navlog: no I/O, deterministic.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..domain.models import (
    AirwayChunk,
    AirwayTerminationChunk,
    FixType,
    LatLongChunk,
    NavlogFix,
    ProcedureChunk,
    RouteChunk,
    SidEnrouteTransitionChunk,
    WaypointChunk,
)

DIRECT_MARKERS = frozenset({"DCT", "DCT*"})
OCEANIC_TRACK_PATTERN = re.compile(r"^NAT[A-Z]$")
PSEUDO_WAYPOINTS = frozenset({"TOC", "TOD"})


@dataclass
class _ClassifierState:
    """Fold state: output so far, last emitted chunk and previous raw fix."""

    chunks: list[RouteChunk] = field(default_factory=list)
    last_chunk: Optional[RouteChunk] = None
    last_fix: Optional[NavlogFix] = None

    def emit(self, chunk: RouteChunk) -> None:
        self.chunks.append(chunk)
        self.last_chunk = chunk


def is_direct_routing(via_airway: str) -> bool:
    """Check whether a via identifier forces direct routing."""
    return via_airway in DIRECT_MARKERS or OCEANIC_TRACK_PATTERN.match(via_airway) is not None


def _is_skipped(fix: NavlogFix) -> bool:
    return fix.fix_type is FixType.AIRPORT or fix.ident in PSEUDO_WAYPOINTS


def _classify_fix(state: _ClassifierState, fix: NavlogFix, next_fix: Optional[NavlogFix]) -> None:
    last = state.last_chunk
    via = fix.via_airway

    if fix.is_sid_star:
        if not (isinstance(last, ProcedureChunk) and last.ident == via):
            state.emit(ProcedureChunk(ident=via))
    elif isinstance(last, ProcedureChunk) and last.ident == via:
        state.emit(SidEnrouteTransitionChunk(ident=fix.ident, location_hint=fix.location))
    elif is_direct_routing(via) or last is None:
        # The first routed fix may be the exit fix of a procedure that has no
        # other fix in the navlog; it is flown direct.
        if fix.fix_type is FixType.LAT_LONG:
            location = fix.location
            state.emit(LatLongChunk(lat=location.lat, long=location.long))
        else:
            state.emit(WaypointChunk(ident=fix.ident, location_hint=fix.location))
    elif not (isinstance(last, AirwayChunk) and last.ident == via):
        previous_fix = state.last_fix
        if (
            previous_fix is not None
            and isinstance(last, AirwayChunk)
            and via != previous_fix.via_airway
        ):
            state.emit(AirwayTerminationChunk(ident=previous_fix.ident))
        state.emit(AirwayChunk(ident=via, location_hint=fix.location))

    if isinstance(state.last_chunk, AirwayChunk) and (
        next_fix is None or next_fix.via_airway != via
    ):
        state.emit(AirwayTerminationChunk(ident=fix.ident))


def classify(fixes: Sequence[NavlogFix]) -> tuple[RouteChunk, ...]:
    """Classify a navlog into an ordered sequence of route chunks.

    Airports and top-of-climb/top-of-descent markers contribute no
    chunk. Malformed coordinates yield NaN location hints.

    Args:
        fixes: The navlog fixes, in flying order.

    Returns:
        The route chunks, in flying order.
    """
    state = _ClassifierState()

    for i, fix in enumerate(fixes):
        if _is_skipped(fix):
            # The raw look-back still sees skipped fixes, as the navlog does.
            state.last_fix = fix
            continue

        next_fix = fixes[i + 1] if i + 1 < len(fixes) else None
        _classify_fix(state, fix, next_fix)
        state.last_fix = fix

    return tuple(state.chunks)
