"""Tests for the route synthesizer, against the in-memory flight plan."""

import logging
from unittest.mock import MagicMock

import pytest

from conftest import BOMB1A, DVR6J, KONAN, KONAN_SOUTH, L9, LFPG, UL607
from ofp_uplink.adapters.flight_plan import InMemoryFlightPlan
from ofp_uplink.domain.errors import InvalidSequenceError, NotFoundError
from ofp_uplink.domain.models import (
    AirwayChunk,
    AirwayTerminationChunk,
    Coordinates,
    DctChunk,
    Discontinuity,
    FlightPlanSegment,
    LatLongChunk,
    Leg,
    OfpRoute,
    ProcedureChunk,
    RouteDestination,
    RouteOrigin,
    SidEnrouteTransitionChunk,
    WaypointChunk,
)
from ofp_uplink.services.route_synthesizer import (
    KNOWN_ROUTE_SEGMENTS,
    RouteSynthesizer,
    pick_airway,
    pick_fix,
)

NOWHERE = Coordinates(float("nan"), float("nan"))


def make_route(*chunks):
    return OfpRoute(
        origin=RouteOrigin(ident="EGLL", runway="27L", transition_altitude=6000),
        destination=RouteDestination(ident="LFPG", runway="09R", transition_level=7000),
        alternate="LFPO",
        cost_index=30.0,
        cruise_altitude=35000,
        callsign="BAW304",
        chunks=tuple(chunks),
    )


def waypoint(ident, location=NOWHERE):
    return WaypointChunk(ident=ident, location_hint=location)


def airway(ident, location=NOWHERE):
    return AirwayChunk(ident=ident, location_hint=location)


def idents(plan):
    return ["--" if element.is_discontinuity else element.fix.ident for element in plan.all_elements]


@pytest.fixture
def plan(navdata):
    flight_plan = InMemoryFlightPlan(navdata=navdata)
    flight_plan.new_city_pair("EGLL", "LFPG")
    navdata.search_fixes.reset_mock()
    return flight_plan


@pytest.fixture
def synthesizer(navdata, plan):
    return RouteSynthesizer(navdata=navdata, flight_plan=plan)


class TestWaypoints:
    """Direct waypoints and coordinates."""

    def test_waypoints_are_inserted_after_origin_in_order(self, synthesizer, plan):
        state = synthesizer.synthesize(make_route(waypoint("DET"), waypoint("DVR")))

        assert idents(plan) == ["EGLL", "DET", "DVR", "LFPG"]
        assert state.insert_head == 2

    def test_lat_long_does_not_query_navdata(self, synthesizer, plan, navdata):
        synthesizer.synthesize(make_route(LatLongChunk(lat=52.0, long=-20.0)))

        navdata.search_fixes.assert_not_called()
        inserted = plan.element_at(1).fix
        assert inserted.ident == "N52.0W020.0"
        assert inserted.location == Coordinates(52.0, -20.0)

    def test_unknown_waypoint_raises_without_inserting(self, synthesizer, plan):
        with pytest.raises(NotFoundError) as exc_info:
            synthesizer.synthesize(make_route(waypoint("NOPE")))

        assert exc_info.value.ident == "NOPE"
        assert exc_info.value.instruction == "waypoint"
        assert idents(plan) == ["EGLL", "LFPG"]

    def test_legs_before_failing_chunk_stay(self, synthesizer, plan):
        with pytest.raises(NotFoundError):
            synthesizer.synthesize(make_route(waypoint("DET"), waypoint("NOPE"), waypoint("DVR")))

        assert idents(plan) == ["EGLL", "DET", "LFPG"]

    def test_nearest_candidate_is_picked(self, synthesizer, plan):
        synthesizer.synthesize(make_route(waypoint("KONAN", Coordinates(46.6, 4.0))))

        assert plan.element_at(1).fix == KONAN_SOUTH

    def test_distance_function_decides_between_candidates(self, navdata, plan):
        synthesizer = RouteSynthesizer(
            navdata=navdata,
            flight_plan=plan,
            distance_fn=lambda a, b: 5.0 if a.lat > 50 else 50.0,
        )

        synthesizer.synthesize(make_route(waypoint("KONAN")))

        assert plan.element_at(1).fix == KONAN

    def test_single_candidate_skips_distance(self, navdata, plan):
        distance_fn = MagicMock(return_value=0.0)
        synthesizer = RouteSynthesizer(navdata=navdata, flight_plan=plan, distance_fn=distance_fn)

        synthesizer.synthesize(make_route(waypoint("DVR")))

        distance_fn.assert_not_called()

    def test_insert_head_only_moves_forward(self, synthesizer, plan):
        route = make_route(waypoint("DET"), waypoint("DVR"), LatLongChunk(lat=51.0, long=2.0), waypoint("KOK"))

        state = synthesizer.synthesize(route)

        assert state.insert_head == 4
        assert idents(plan) == ["EGLL", "DET", "DVR", "N51.0E002.0", "KOK", "LFPG"]


class TestProcedures:
    """Departure, arrival and transition handling."""

    def test_procedures_are_ignored_when_disabled(self, synthesizer, plan, navdata):
        route = make_route(ProcedureChunk(ident="DVR6J"), waypoint("DET"), ProcedureChunk(ident="BOMB1A"))

        synthesizer.synthesize(route, uplink_procedures=False)

        navdata.get_departures.assert_not_called()
        navdata.get_arrivals.assert_not_called()
        assert idents(plan) == ["EGLL", "DET", "LFPG"]

    def test_procedure_in_middle_of_route_is_rejected(self, synthesizer, plan):
        route = make_route(waypoint("DET"), ProcedureChunk(ident="DVR6J"), waypoint("DVR"))

        with pytest.raises(InvalidSequenceError) as exc_info:
            synthesizer.synthesize(route, uplink_procedures=True)

        assert exc_info.value.chunk_index == 1
        assert idents(plan) == ["EGLL", "DET", "LFPG"]

    def test_middle_procedure_is_ignored_when_disabled(self, synthesizer, plan):
        route = make_route(waypoint("DET"), ProcedureChunk(ident="DVR6J"), waypoint("DVR"))

        synthesizer.synthesize(route, uplink_procedures=False)

        assert idents(plan) == ["EGLL", "DET", "DVR", "LFPG"]

    def test_departure_and_transition_are_attached(self, synthesizer, plan, navdata):
        route = make_route(
            ProcedureChunk(ident="DVR6J"),
            SidEnrouteTransitionChunk(ident="DVR", location_hint=NOWHERE),
            waypoint("KOK"),
        )

        state = synthesizer.synthesize(route, uplink_procedures=True)

        navdata.get_departures.assert_called_once_with("EGLL", "27L")
        assert plan.origin_departure == DVR6J
        assert plan.departure_enroute_transition.ident == "DVR"
        assert idents(plan) == ["EGLL", "BIG", "DET", "DVR", "KOK", "LFPG"]
        assert plan.element_at(1) == Leg(fix=DVR6J.legs[0], via="DVR6J")
        assert state.insert_head == 4

    def test_transition_is_a_waypoint_when_disabled(self, synthesizer, plan):
        route = make_route(
            ProcedureChunk(ident="DVR6J"),
            SidEnrouteTransitionChunk(ident="DVR", location_hint=NOWHERE),
            waypoint("KOK"),
        )

        synthesizer.synthesize(route, uplink_procedures=False)

        assert plan.origin_departure is None
        assert idents(plan) == ["EGLL", "DVR", "KOK", "LFPG"]

    def test_ambiguous_departure_is_skipped(self, synthesizer, plan, navdata):
        navdata.get_departures.return_value = (DVR6J, DVR6J)
        route = make_route(
            ProcedureChunk(ident="DVR6J"),
            SidEnrouteTransitionChunk(ident="DVR", location_hint=NOWHERE),
            waypoint("KOK"),
        )

        synthesizer.synthesize(route, uplink_procedures=True)

        assert plan.origin_departure is None
        assert idents(plan) == ["EGLL", "KOK", "LFPG"]

    def test_unknown_departure_is_skipped(self, synthesizer, plan):
        synthesizer.synthesize(make_route(ProcedureChunk(ident="XXX1A"), waypoint("DET")), uplink_procedures=True)

        assert plan.origin_departure is None
        assert idents(plan) == ["EGLL", "DET", "LFPG"]

    def test_arrival_moves_head_before_discontinuity(self, synthesizer, plan):
        route = make_route(waypoint("DET"), ProcedureChunk(ident="BOMB1A"))

        state = synthesizer.synthesize(route, uplink_procedures=True)

        assert plan.arrival == BOMB1A
        assert idents(plan) == ["EGLL", "DET", "--", "BOMBI", "LORNI", "LFPG"]
        assert state.insert_head == 1


class TestAirways:
    """Airway entries and terminations."""

    def test_airway_is_committed_on_termination(self, synthesizer, plan):
        route = make_route(waypoint("DET"), airway("L9"), AirwayTerminationChunk(ident="KOK"), waypoint("MAK"))

        state = synthesizer.synthesize(route)

        assert idents(plan) == ["EGLL", "DET", "DVR", "KONAN", "KOK", "MAK", "LFPG"]
        assert plan.element_at(2).via == "L9"
        assert plan.element_at(5).via is None
        assert state.insert_head == 5
        assert state.pending_airways is None

    def test_consecutive_airways_join_at_intersection(self, synthesizer, plan):
        route = make_route(
            waypoint("DET"),
            airway("L9"),
            airway("UL607"),
            AirwayTerminationChunk(ident="MAK"),
        )

        synthesizer.synthesize(route)

        assert idents(plan) == ["EGLL", "DET", "DVR", "KONAN", "KOK", "MAK", "LFPG"]
        assert plan.element_at(4).via == "L9"
        assert plan.element_at(5).via == "UL607"

    def test_chained_terminated_airways(self, synthesizer, plan):
        route = make_route(
            waypoint("DET"),
            airway("L9"),
            AirwayTerminationChunk(ident="KOK"),
            airway("UL607"),
            AirwayTerminationChunk(ident="MAK"),
        )

        synthesizer.synthesize(route)

        assert idents(plan) == ["EGLL", "DET", "DVR", "KONAN", "KOK", "MAK", "LFPG"]

    def test_airway_is_searched_at_the_insert_head_fix(self, synthesizer, navdata):
        synthesizer.synthesize(make_route(waypoint("DVR"), airway("L9"), AirwayTerminationChunk(ident="KOK")))

        via_fix = navdata.search_airways.call_args.args[1]
        assert navdata.search_airways.call_args.args[0] == "L9"
        assert via_fix.ident == "DVR"

    def test_unknown_airway_raises(self, synthesizer):
        with pytest.raises(NotFoundError) as exc_info:
            synthesizer.synthesize(make_route(waypoint("DET"), airway("Z99")))

        assert exc_info.value.instruction == "airway"

    def test_termination_without_airway_raises(self, synthesizer):
        with pytest.raises(NotFoundError):
            synthesizer.synthesize(make_route(waypoint("DET"), AirwayTerminationChunk(ident="KOK")))

    def test_termination_off_the_airway_raises(self, synthesizer, plan):
        with pytest.raises(NotFoundError):
            synthesizer.synthesize(make_route(waypoint("DET"), airway("L9"), AirwayTerminationChunk(ident="LFPG")))

        assert idents(plan) == ["EGLL", "DET", "LFPG"]

    def test_unterminated_airway_is_discarded(self, synthesizer, plan, caplog):
        with caplog.at_level(logging.WARNING):
            state = synthesizer.synthesize(make_route(waypoint("DET"), airway("L9")))

        assert state.pending_airways is None
        assert idents(plan) == ["EGLL", "DET", "LFPG"]
        assert "unterminated airway" in caplog.text


def test_unknown_instruction_is_skipped(synthesizer, plan, caplog):
    with caplog.at_level(logging.ERROR):
        synthesizer.synthesize(make_route(waypoint("DET"), DctChunk(), waypoint("DVR")))

    assert idents(plan) == ["EGLL", "DET", "DVR", "LFPG"]
    assert "Unknown route instruction" in caplog.text


class TestEndOfKnownRoute:
    """Insert head placement against a mocked flight plan."""

    @staticmethod
    def flight_plan(counts, element):
        mock = MagicMock()
        mock.leg_count.side_effect = lambda segment: counts.get(segment, 0)
        mock.element_at.return_value = element
        return mock

    def test_counts_known_segments(self):
        counts = {
            FlightPlanSegment.ORIGIN: 1,
            FlightPlanSegment.DEPARTURE: 3,
            FlightPlanSegment.ENROUTE: 2,
            FlightPlanSegment.ARRIVAL: 4,
            FlightPlanSegment.DESTINATION: 1,
        }
        synthesizer = RouteSynthesizer(navdata=MagicMock(), flight_plan=self.flight_plan(counts, Leg(fix=LFPG)))

        assert synthesizer.end_of_known_route() == 5

    def test_trailing_discontinuity_is_excluded(self):
        counts = {FlightPlanSegment.ORIGIN: 1, FlightPlanSegment.ENROUTE: 3}
        synthesizer = RouteSynthesizer(navdata=MagicMock(), flight_plan=self.flight_plan(counts, Discontinuity()))

        assert synthesizer.end_of_known_route() == 2

    def test_single_enroute_element_is_kept(self):
        counts = {FlightPlanSegment.ORIGIN: 1, FlightPlanSegment.ENROUTE: 1}
        flight_plan = self.flight_plan(counts, Discontinuity())
        synthesizer = RouteSynthesizer(navdata=MagicMock(), flight_plan=flight_plan)

        assert synthesizer.end_of_known_route() == 1
        flight_plan.element_at.assert_not_called()


def test_known_route_segments_exclude_arrival():
    assert FlightPlanSegment.ARRIVAL not in KNOWN_ROUTE_SEGMENTS
    assert FlightPlanSegment.DESTINATION not in KNOWN_ROUTE_SEGMENTS


def test_pick_fix_prefers_first_on_tie():
    first = KONAN
    second = KONAN_SOUTH

    assert pick_fix([first, second], NOWHERE) == first


def test_pick_airway_uses_first_fix():
    assert pick_airway([L9, UL607], Coordinates(51.1, 2.6)).ident == "UL607"
