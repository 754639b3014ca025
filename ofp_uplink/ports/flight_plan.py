"""Flight plan ports - The route model the uplink writes into.

The flight plan is a sequence of segments (origin, departure, enroute,
arrival, destination...) whose elements, concatenated, form one linear
sequence addressed by index. Airways are entered in two phases: an
accumulator collects airways and exit fixes, then finalize() commits
the resulting legs into the plan.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import (
        Airway,
        Fix,
        FlightPlanElement,
        FlightPlanSegment,
        ImportedPerformanceData,
        PendingAirwayEntry,
        Procedure,
        ProcedureTransition,
    )


class PendingAirwaysPort(Protocol):
    """Port for an uncommitted airway entry.

    Implementation: adapters/flight_plan/in_memory.py (InMemoryPendingAirways)
    """

    @property
    def elements(self) -> Sequence[PendingAirwayEntry]:
        """Airways appended so far, in order."""
        ...

    def then_airway(self, airway: Airway) -> None:
        """Continue the entry along an airway."""
        ...

    def then_to(self, fix: Fix) -> None:
        """Set the exit fix of the most recently appended airway."""
        ...

    def finalize(self) -> None:
        """Commit the accumulated airway legs into the flight plan."""
        ...


class FlightPlanPort(Protocol):
    """Port for the flight plan being built by an uplink.

    Implementation: adapters/flight_plan/in_memory.py (InMemoryFlightPlan)
    """

    def new_city_pair(self, origin: str, destination: str, alternate: Optional[str] = None) -> None:
        """Reset the plan to a fresh origin/destination pair."""
        ...

    def set_origin_runway(self, runway: str) -> None:
        ...

    def set_destination_runway(self, runway: str) -> None:
        ...

    def set_imported_performance_data(self, data: ImportedPerformanceData) -> None:
        ...

    def set_flight_number(self, flight_number: str) -> None:
        ...

    def leg_count(self, segment: FlightPlanSegment) -> int:
        """Number of elements (legs and discontinuities) in a segment."""
        ...

    def element_at(self, index: int) -> FlightPlanElement:
        """Element at an index of the linear element sequence.

        Raises:
            FlightPlanError: If the index is out of range.
        """
        ...

    def next_waypoint(self, index: int, fix: Fix) -> None:
        """Insert a leg to a fix directly after the element at index."""
        ...

    @property
    def origin_departure(self) -> Optional[Procedure]:
        """The departure procedure currently attached, if any."""
        ...

    def set_departure_procedure(self, procedure: Procedure) -> None:
        ...

    def set_departure_enroute_transition(self, transition: ProcedureTransition) -> None:
        ...

    def set_arrival(self, procedure: Procedure) -> None:
        ...

    def start_airway_entry(self, index: int) -> PendingAirwaysPort:
        """Begin an airway entry anchored after the element at index."""
        ...
