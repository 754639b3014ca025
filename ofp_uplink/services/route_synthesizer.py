"""Route synthesizer - Replays route chunks into a flight plan.

Chunks are applied strictly in order. Two pieces of state carry over
from one chunk to the next:

- the insert head: index of the flight plan element after which the
  next waypoint is inserted. It is moved to the end of the known route
  whenever a procedure or transition is attached and whenever pending
  airways are finalized, and advanced by one per inserted waypoint.
- the pending airways: an airway entry being built airway by airway
  until an airway termination finalizes it into the plan.

Lookups that return nothing abort the run (NotFoundError). Procedures
and transitions that are ambiguous or unknown are skipped silently:
the uplink never guesses which of several same-named procedures to fly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence

from ..domain.errors import InvalidSequenceError, NotFoundError
from ..domain.models import (
    Airway,
    AirwayChunk,
    AirwayTerminationChunk,
    ChunkInstruction,
    Coordinates,
    Fix,
    FlightPlanSegment,
    LatLongChunk,
    OfpRoute,
    ProcedureChunk,
    RouteChunk,
    SidEnrouteTransitionChunk,
    WaypointChunk,
)
from ..geo import distance_nm
from ..ports.flight_plan import FlightPlanPort, PendingAirwaysPort
from ..ports.navdata import NavDatabasePort

DistanceFn = Callable[[Coordinates, Coordinates], float]

KNOWN_ROUTE_SEGMENTS = (
    FlightPlanSegment.ORIGIN,
    FlightPlanSegment.DEPARTURE_RUNWAY_TRANSITION,
    FlightPlanSegment.DEPARTURE,
    FlightPlanSegment.DEPARTURE_ENROUTE_TRANSITION,
    FlightPlanSegment.ENROUTE,
)

UNSET_INSERT_HEAD = -1


@dataclass
class SynthesisState:
    """Mutable state of one synthesis run.

    Attributes:
        route: The route being applied
        uplink_procedures: Whether procedures and transitions are attached
        insert_head: Element index after which waypoints are inserted
        pending_airways: Airway entry not yet committed, if any
    """

    route: OfpRoute
    uplink_procedures: bool = False
    insert_head: int = UNSET_INSERT_HEAD
    pending_airways: Optional[PendingAirwaysPort] = None


def pick_fix(fixes: Sequence[Fix], location_hint: Coordinates, distance_fn: DistanceFn = distance_nm) -> Fix:
    """Pick the fix nearest to a location; the first one wins ties."""
    return min(fixes, key=lambda fix: distance_fn(fix.location, location_hint))


def pick_airway(
    airways: Sequence[Airway], location_hint: Coordinates, distance_fn: DistanceFn = distance_nm
) -> Airway:
    """Pick the airway whose first fix is nearest to a location."""

    def first_fix_distance(airway: Airway) -> float:
        if not airway.fixes:
            return float("inf")
        return distance_fn(airway.fixes[0].location, location_hint)

    return min(airways, key=first_fix_distance)


def pick_airway_fix(airway: Airway, fixes: Sequence[Fix]) -> Optional[Fix]:
    """First fix, in lookup order, that lies on an airway (same ident and region)."""
    return next((fix for fix in fixes if airway.contains(fix)), None)


@dataclass
class RouteSynthesizer:
    """Applies route chunks to a flight plan.

    Attributes:
        navdata: Navigation database used to resolve identifiers
        flight_plan: The flight plan being built
        distance_fn: Distance used to disambiguate same-named candidates
    """

    navdata: NavDatabasePort
    flight_plan: FlightPlanPort
    distance_fn: DistanceFn = distance_nm

    _handlers: Dict[ChunkInstruction, Callable[[SynthesisState, int, RouteChunk], None]] = field(
        init=False, repr=False
    )
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._handlers = {
            ChunkInstruction.PROCEDURE: self._apply_procedure,
            ChunkInstruction.SID_ENROUTE_TRANSITION: self._apply_sid_enroute_transition,
            ChunkInstruction.WAYPOINT: self._apply_waypoint,
            ChunkInstruction.LAT_LONG: self._apply_lat_long,
            ChunkInstruction.AIRWAY: self._apply_airway,
            ChunkInstruction.AIRWAY_TERMINATION: self._apply_airway_termination,
        }

    def synthesize(self, route: OfpRoute, uplink_procedures: bool = False) -> SynthesisState:
        """Apply every chunk of a route to the flight plan.

        The flight plan must already hold the city pair of the route.
        On failure the legs inserted before the failing chunk stay in
        the plan; retrying requires a fresh plan.

        Args:
            route: The route summary whose chunks are applied.
            uplink_procedures: Attach departure/arrival procedures and
                transitions instead of flying their fixes direct.

        Returns:
            The final state of the run.

        Raises:
            InvalidSequenceError: If a procedure chunk is misplaced.
            NotFoundError: If a required lookup returns no candidate.
        """
        state = SynthesisState(route=route, uplink_procedures=uplink_procedures)

        self._logger.info(
            "Starting route synthesis",
            extra={"chunks": len(route.chunks), "uplink_procedures": uplink_procedures},
        )

        for index, chunk in enumerate(route.chunks):
            handler = self._handlers.get(getattr(chunk, "instruction", None))
            if handler is None:
                self._logger.error(
                    "Unknown route instruction, skipping",
                    extra={"index": index, "chunk": repr(chunk)},
                )
                continue

            handler(state, index, chunk)

        if state.pending_airways is not None:
            self._logger.warning(
                "Route ended with an unterminated airway, discarding it",
                extra={"airways": len(state.pending_airways.elements)},
            )
            state.pending_airways = None

        self._logger.info(
            "Route synthesis complete",
            extra={"insert_head": state.insert_head},
        )
        return state

    def end_of_known_route(self) -> int:
        """Index of the last element of the enroute part of the plan.

        A trailing discontinuity of a non-trivial enroute segment is not
        part of the known route.
        """
        head = sum(self.flight_plan.leg_count(segment) for segment in KNOWN_ROUTE_SEGMENTS) - 1

        if self.flight_plan.leg_count(FlightPlanSegment.ENROUTE) > 1:
            if self.flight_plan.element_at(head).is_discontinuity:
                head -= 1

        return head

    def _set_insert_head_to_end_of_enroute(self, state: SynthesisState) -> None:
        state.insert_head = self.end_of_known_route()
        self._logger.debug("Insert head moved", extra={"insert_head": state.insert_head})

    def _ensure_insert_head(self, state: SynthesisState) -> None:
        if state.insert_head == UNSET_INSERT_HEAD:
            self._set_insert_head_to_end_of_enroute(state)

    def _ensure_airways_finalized(self, state: SynthesisState) -> None:
        if state.pending_airways is not None:
            state.pending_airways.finalize()
            state.pending_airways = None

            self._set_insert_head_to_end_of_enroute(state)

    def _insert_fix(self, state: SynthesisState, fix: Fix) -> None:
        self.flight_plan.next_waypoint(state.insert_head, fix)
        state.insert_head += 1

    def _search_fixes_or_raise(self, ident: str, instruction: ChunkInstruction) -> Sequence[Fix]:
        fixes = self.navdata.search_fixes(ident)
        if not fixes:
            raise NotFoundError(
                f'Found no fixes for "{instruction.value}" chunk: {ident}',
                ident=ident,
                instruction=instruction.value,
            )
        return fixes

    def _insert_fix_by_ident(
        self,
        state: SynthesisState,
        ident: str,
        location_hint: Coordinates,
        instruction: ChunkInstruction,
    ) -> None:
        self._ensure_insert_head(state)

        fixes = self._search_fixes_or_raise(ident, instruction)
        fix = fixes[0] if len(fixes) == 1 else pick_fix(fixes, location_hint, self.distance_fn)

        self._insert_fix(state, fix)

    def _apply_procedure(self, state: SynthesisState, index: int, chunk: RouteChunk) -> None:
        assert isinstance(chunk, ProcedureChunk)

        if not state.uplink_procedures:
            return

        last_index = len(state.route.chunks) - 1
        if index not in (0, last_index):
            raise InvalidSequenceError(
                f'Cannot handle "procedure" instruction {chunk.ident} '
                "not located at the start or end of the route",
                chunk_index=index,
                instruction=chunk.instruction.value,
            )

        route = state.route
        if index == 0:
            departures = self.navdata.get_departures(route.origin.ident, route.origin.runway)
            candidates = [it for it in departures if it.ident == chunk.ident]

            if len(candidates) == 1:
                self.flight_plan.set_departure_procedure(candidates[0])
                self._set_insert_head_to_end_of_enroute(state)
            else:
                self._logger.info(
                    "Departure not set, no unique candidate",
                    extra={"ident": chunk.ident, "candidates": len(candidates)},
                )
        else:
            arrivals = self.navdata.get_arrivals(route.destination.ident)
            candidates = [it for it in arrivals if it.ident == chunk.ident]

            if len(candidates) == 1:
                self.flight_plan.set_arrival(candidates[0])
                self._set_insert_head_to_end_of_enroute(state)
            else:
                self._logger.info(
                    "Arrival not set, no unique candidate",
                    extra={"ident": chunk.ident, "candidates": len(candidates)},
                )

    def _apply_sid_enroute_transition(self, state: SynthesisState, index: int, chunk: RouteChunk) -> None:
        assert isinstance(chunk, SidEnrouteTransitionChunk)

        if not state.uplink_procedures:
            self._insert_fix_by_ident(state, chunk.ident, chunk.location_hint, chunk.instruction)
            return

        departure = self.flight_plan.origin_departure
        transitions = departure.enroute_transitions if departure is not None else ()
        candidates = [it for it in transitions if it.ident == chunk.ident]

        if len(candidates) == 1:
            self.flight_plan.set_departure_enroute_transition(candidates[0])
            self._set_insert_head_to_end_of_enroute(state)
        else:
            self._logger.info(
                "Departure enroute transition not set, no unique candidate",
                extra={"ident": chunk.ident, "candidates": len(candidates)},
            )

    def _apply_waypoint(self, state: SynthesisState, index: int, chunk: RouteChunk) -> None:
        assert isinstance(chunk, WaypointChunk)

        self._insert_fix_by_ident(state, chunk.ident, chunk.location_hint, chunk.instruction)

    def _apply_lat_long(self, state: SynthesisState, index: int, chunk: RouteChunk) -> None:
        assert isinstance(chunk, LatLongChunk)

        self._ensure_insert_head(state)
        self._insert_fix(state, Fix.from_coordinates(Coordinates(chunk.lat, chunk.long)))

    def _apply_airway(self, state: SynthesisState, index: int, chunk: RouteChunk) -> None:
        assert isinstance(chunk, AirwayChunk)

        search_fix: Optional[Fix] = None
        if state.pending_airways is None:
            self._ensure_insert_head(state)
            state.pending_airways = self.flight_plan.start_airway_entry(state.insert_head)

            element = self.flight_plan.element_at(state.insert_head)
            if not element.is_discontinuity:
                search_fix = element.termination_waypoint()
        elif state.pending_airways.elements:
            tail = state.pending_airways.elements[-1]
            search_fix = tail.to
            if search_fix is None and tail.airway.fixes:
                search_fix = tail.airway.fixes[-1]

        if search_fix is None:
            raise NotFoundError(
                f'Found no search fix for "airway" chunk: {chunk.ident}',
                ident=chunk.ident,
                instruction=chunk.instruction.value,
            )

        airways = self.navdata.search_airways(chunk.ident, search_fix)
        if not airways:
            raise NotFoundError(
                f'Found no airways at fix "{search_fix.ident}" for "airway" chunk: {chunk.ident}',
                ident=chunk.ident,
                instruction=chunk.instruction.value,
            )

        airway = airways[0] if len(airways) == 1 else pick_airway(airways, chunk.location_hint, self.distance_fn)
        state.pending_airways.then_airway(airway)

    def _apply_airway_termination(self, state: SynthesisState, index: int, chunk: RouteChunk) -> None:
        assert isinstance(chunk, AirwayTerminationChunk)

        if state.pending_airways is None:
            self._ensure_insert_head(state)
            state.pending_airways = self.flight_plan.start_airway_entry(state.insert_head)

        if not state.pending_airways.elements:
            raise NotFoundError(
                f'Found no airway to terminate for "airwayTermination" chunk: {chunk.ident}',
                ident=chunk.ident,
                instruction=chunk.instruction.value,
            )
        tail_airway = state.pending_airways.elements[-1].airway

        fixes = self._search_fixes_or_raise(chunk.ident, chunk.instruction)

        fix = pick_airway_fix(tail_airway, fixes)
        if fix is None:
            raise NotFoundError(
                f'Found no fix on airway "{tail_airway.ident}" for "airwayTermination" chunk: {chunk.ident}',
                ident=chunk.ident,
                instruction=chunk.instruction.value,
            )

        state.pending_airways.then_to(fix)
        self._ensure_airways_finalized(state)
