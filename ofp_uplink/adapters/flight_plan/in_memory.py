"""In-memory flight plan adapter.

A minimal segmented route model: each segment holds an ordered list of
elements (legs or discontinuities) and the concatenation of all
segments forms the linear sequence addressed by index. Only the
enroute segment accepts inserted waypoints and airway legs; procedures
and transitions replace their own segment.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ...domain.errors import FlightPlanError
from ...domain.models import (
    Airway,
    Discontinuity,
    Fix,
    FlightPlanElement,
    FlightPlanSegment,
    ImportedPerformanceData,
    Leg,
    PendingAirwayEntry,
    Procedure,
    ProcedureTransition,
)
from ...ports.navdata import NavDatabasePort


def airway_intersection(first: Airway, second: Airway) -> Optional[Fix]:
    """First fix of an airway that also lies on another one."""
    return next((fix for fix in first.fixes if second.contains(fix)), None)


def airway_legs(airway: Airway, entry: Fix, exit_fix: Fix) -> tuple[Fix, ...]:
    """Fixes flown along an airway after entry, up to and including exit.

    Raises:
        FlightPlanError: If either fix is not on the airway.
    """
    start = airway.index_of(entry)
    end = airway.index_of(exit_fix)
    if start == -1 or end == -1:
        missing = entry if start == -1 else exit_fix
        raise FlightPlanError(f"Fix {missing.ident} is not on airway {airway.ident}")

    if end > start:
        return airway.fixes[start + 1 : end + 1]
    return tuple(reversed(airway.fixes[end:start]))


@dataclass
class InMemoryPendingAirways:
    """Airway entry accumulated in memory, committed by finalize().

    Attributes:
        plan: The flight plan the airway legs are committed to
        start_index: Element after which the airway legs are inserted
    """

    plan: InMemoryFlightPlan
    start_index: int

    _elements: List[PendingAirwayEntry] = field(default_factory=list, repr=False)
    _finalized: bool = field(default=False, repr=False)

    @property
    def elements(self) -> Sequence[PendingAirwayEntry]:
        return tuple(self._elements)

    def then_airway(self, airway: Airway) -> None:
        self._check_open()
        self._elements.append(PendingAirwayEntry(airway=airway))

    def then_to(self, fix: Fix) -> None:
        self._check_open()
        if not self._elements:
            raise FlightPlanError(f"Cannot terminate airway entry at {fix.ident}, no airway entered")
        self._elements[-1] = dataclasses.replace(self._elements[-1], to=fix)

    def finalize(self) -> None:
        """Resolve every airway to its legs and insert them into the plan.

        An airway without an exit fix is flown up to its intersection
        with the next airway.

        Raises:
            FlightPlanError: If the entry cannot be resolved to legs.
        """
        self._check_open()

        anchor = self.plan.element_at(self.start_index)
        if anchor.is_discontinuity:
            raise FlightPlanError("Cannot enter an airway from a discontinuity", index=self.start_index)
        entry = anchor.termination_waypoint()

        legs: List[FlightPlanElement] = []
        for i, element in enumerate(self._elements):
            exit_fix = element.to
            if exit_fix is None:
                following = self._elements[i + 1] if i + 1 < len(self._elements) else None
                if following is not None:
                    exit_fix = airway_intersection(element.airway, following.airway)
            if exit_fix is None:
                raise FlightPlanError(f"No exit fix for airway {element.airway.ident}")

            legs.extend(Leg(fix=fix, via=element.airway.ident) for fix in airway_legs(element.airway, entry, exit_fix))
            entry = exit_fix

        self.plan.insert_elements(self.start_index, legs)
        self._finalized = True

    def _check_open(self) -> None:
        if self._finalized:
            raise FlightPlanError("Airway entry already finalized", index=self.start_index)


@dataclass
class InMemoryFlightPlan:
    """Flight plan held in memory.

    Airports are resolved through the navigation database when a city
    pair is set.

    Attributes:
        navdata: Navigation database used to resolve airports
    """

    navdata: NavDatabasePort

    origin_ident: Optional[str] = None
    destination_ident: Optional[str] = None
    alternate_ident: Optional[str] = None
    origin_runway: Optional[str] = None
    destination_runway: Optional[str] = None
    performance_data: Optional[ImportedPerformanceData] = None
    flight_number: Optional[str] = None

    _segments: Dict[FlightPlanSegment, List[FlightPlanElement]] = field(
        default_factory=lambda: {segment: [] for segment in FlightPlanSegment}, repr=False
    )
    _origin_departure: Optional[Procedure] = field(default=None, repr=False)
    _departure_enroute_transition: Optional[ProcedureTransition] = field(default=None, repr=False)
    _arrival: Optional[Procedure] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def new_city_pair(self, origin: str, destination: str, alternate: Optional[str] = None) -> None:
        origin_fix = self._airport_fix(origin)
        destination_fix = self._airport_fix(destination)

        self._segments = {segment: [] for segment in FlightPlanSegment}
        self._segments[FlightPlanSegment.ORIGIN].append(Leg(fix=origin_fix))
        self._segments[FlightPlanSegment.DESTINATION].append(Leg(fix=destination_fix))

        self.origin_ident = origin
        self.destination_ident = destination
        self.alternate_ident = alternate or None
        self.origin_runway = None
        self.destination_runway = None
        self.performance_data = None
        self.flight_number = None
        self._origin_departure = None
        self._departure_enroute_transition = None
        self._arrival = None

        self._logger.debug(
            "New city pair",
            extra={"origin": origin, "destination": destination, "alternate": alternate},
        )

    def set_origin_runway(self, runway: str) -> None:
        self.origin_runway = runway

    def set_destination_runway(self, runway: str) -> None:
        self.destination_runway = runway

    def set_imported_performance_data(self, data: ImportedPerformanceData) -> None:
        self.performance_data = data

    def set_flight_number(self, flight_number: str) -> None:
        self.flight_number = flight_number

    def leg_count(self, segment: FlightPlanSegment) -> int:
        return len(self._segments[segment])

    @property
    def all_elements(self) -> tuple[FlightPlanElement, ...]:
        """Every element of the plan, in flying order."""
        return tuple(element for segment in FlightPlanSegment for element in self._segments[segment])

    def element_at(self, index: int) -> FlightPlanElement:
        elements = self.all_elements
        if not 0 <= index < len(elements):
            raise FlightPlanError(f"No flight plan element at index {index}", index=index)
        return elements[index]

    def next_waypoint(self, index: int, fix: Fix) -> None:
        self.insert_elements(index, [Leg(fix=fix)])

    def insert_elements(self, index: int, elements: Sequence[FlightPlanElement]) -> None:
        """Insert elements into the enroute segment, directly after index.

        Raises:
            FlightPlanError: If the position is outside the enroute segment.
        """
        enroute_start = sum(
            len(self._segments[segment])
            for segment in FlightPlanSegment
            if segment.value < FlightPlanSegment.ENROUTE.value
        )
        enroute = self._segments[FlightPlanSegment.ENROUTE]
        offset = index + 1 - enroute_start

        if not 0 <= offset <= len(enroute):
            raise FlightPlanError(f"Cannot insert after index {index}, outside of the enroute segment", index=index)

        enroute[offset:offset] = list(elements)

    @property
    def origin_departure(self) -> Optional[Procedure]:
        return self._origin_departure

    @property
    def departure_enroute_transition(self) -> Optional[ProcedureTransition]:
        return self._departure_enroute_transition

    @property
    def arrival(self) -> Optional[Procedure]:
        return self._arrival

    def set_departure_procedure(self, procedure: Procedure) -> None:
        self._origin_departure = procedure
        self._departure_enroute_transition = None
        self._segments[FlightPlanSegment.DEPARTURE] = [Leg(fix=fix, via=procedure.ident) for fix in procedure.legs]
        self._segments[FlightPlanSegment.DEPARTURE_ENROUTE_TRANSITION] = []

    def set_departure_enroute_transition(self, transition: ProcedureTransition) -> None:
        if self._origin_departure is None:
            raise FlightPlanError(f"Cannot set transition {transition.ident} without a departure")
        self._departure_enroute_transition = transition
        self._segments[FlightPlanSegment.DEPARTURE_ENROUTE_TRANSITION] = [
            Leg(fix=fix, via=self._origin_departure.ident) for fix in transition.legs
        ]

    def set_arrival(self, procedure: Procedure) -> None:
        """Attach an arrival; the enroute segment ends in a discontinuity before it."""
        self._arrival = procedure
        self._segments[FlightPlanSegment.ARRIVAL] = [Leg(fix=fix, via=procedure.ident) for fix in procedure.legs]

        enroute = self._segments[FlightPlanSegment.ENROUTE]
        if enroute and not enroute[-1].is_discontinuity:
            enroute.append(Discontinuity())

    def start_airway_entry(self, index: int) -> InMemoryPendingAirways:
        return InMemoryPendingAirways(plan=self, start_index=index)

    def _airport_fix(self, ident: str) -> Fix:
        fixes = self.navdata.search_fixes(ident)
        if not fixes:
            raise FlightPlanError(f"Unknown airport: {ident}")
        return fixes[0]
