"""Uplink service - Main orchestrator.

Loads an OFP into a flight plan:
1. Route extraction (header fields + navlog classification)
2. City pair, runways, performance data and flight number
3. Route synthesis, chunk by chunk
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..domain.errors import InvalidSequenceError, NotFoundError, OfpFetchError, UplinkError
from ..domain.models import ImportedPerformanceData, OfpDocument, OfpRoute
from ..ports.display import UplinkDisplayPort
from ..ports.flight_plan import FlightPlanPort
from ..ports.navdata import NavDatabasePort
from ..ports.ofp_source import OfpSourcePort
from .route_extractor import extract_route
from .route_synthesizer import RouteSynthesizer


def performance_data_from_route(route: OfpRoute) -> ImportedPerformanceData:
    """Performance values of a route, levels converted from feet to flight levels."""
    return ImportedPerformanceData(
        departure_transition_altitude=route.origin.transition_altitude,
        destination_transition_level=route.destination.transition_level / 100,
        cost_index=route.cost_index,
        cruise_flight_level=route.cruise_altitude / 100,
        pilot_tropopause=route.pilot_tropopause,
    )


@dataclass
class UplinkService:
    """Main service for uplinking OFPs into a flight plan.

    Attributes:
        navdata: Navigation database used to resolve the route
        flight_plan: The flight plan receiving the uplink
        display: Notified when the uplink starts and completes
        ofp_source: Optional source to download OFPs from
    """

    navdata: NavDatabasePort
    flight_plan: FlightPlanPort
    display: UplinkDisplayPort
    ofp_source: Optional[OfpSourcePort] = None

    _synthesizer: RouteSynthesizer = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._synthesizer = RouteSynthesizer(navdata=self.navdata, flight_plan=self.flight_plan)

    def uplink(self, ofp: OfpDocument, uplink_procedures: bool = False) -> OfpRoute:
        """Load an OFP into the flight plan.

        The flight plan is reset to the OFP city pair first, so a failed
        uplink can simply be retried.

        Args:
            ofp: The OFP document.
            uplink_procedures: Attach runways, departure/arrival procedures
                and transitions instead of flying their fixes direct.

        Returns:
            The route summary that was applied.

        Raises:
            InvalidSequenceError: If a procedure chunk is misplaced.
            NotFoundError: If a required lookup returns no candidate.
        """
        route = extract_route(ofp)

        self._logger.info(
            "Starting uplink",
            extra={
                "origin": route.origin.ident,
                "destination": route.destination.ident,
                "chunks": len(route.chunks),
            },
        )

        self.display.on_uplink_in_progress()

        self.flight_plan.new_city_pair(route.origin.ident, route.destination.ident, route.alternate)

        if uplink_procedures:
            self.flight_plan.set_origin_runway(route.origin.runway)
            self.flight_plan.set_destination_runway(route.destination.runway)

        self.flight_plan.set_imported_performance_data(performance_data_from_route(route))
        self.flight_plan.set_flight_number(route.callsign)

        self._synthesizer.synthesize(route, uplink_procedures)

        self.display.on_uplink_done()

        self._logger.info("Uplink complete", extra={"callsign": route.callsign})
        return route

    def uplink_for_user(
        self,
        username: str,
        user_id: Optional[str] = None,
        uplink_procedures: bool = False,
    ) -> OfpRoute:
        """Download the latest OFP of a user and load it.

        Raises:
            OfpFetchError: If no source is configured or the download fails.
            OfpParseError: If the document is malformed.
        """
        if self.ofp_source is None:
            raise OfpFetchError("No OFP source configured", username=user_id or username)

        ofp = self.ofp_source.fetch(username, user_id)
        return self.uplink(ofp, uplink_procedures)

    def uplink_for_user_safe(
        self,
        username: str,
        user_id: Optional[str] = None,
        uplink_procedures: bool = False,
    ) -> tuple[Optional[OfpRoute], Optional[str]]:
        """Download and load an OFP, returning an error message instead of raising.

        Returns:
            Tuple of (OfpRoute or None, error message or None).
        """
        try:
            return self.uplink_for_user(username, user_id, uplink_procedures), None
        except OfpFetchError as e:
            return None, f"Download error: {e}"
        except InvalidSequenceError as e:
            return None, f"Invalid route: {e.message}"
        except NotFoundError as e:
            return None, f"Not found in navigation database: {e.message}"
        except UplinkError as e:
            return None, f"Error: {e}"
