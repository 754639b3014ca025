"""Tests for the SimBrief OFP source and parser."""

from unittest.mock import MagicMock

import pytest
import requests

from ofp_uplink.adapters.simbrief import SimBriefOfpSource, parse_ofp
from ofp_uplink.config import SimBriefConfig
from ofp_uplink.domain.errors import OfpFetchError, OfpParseError
from ofp_uplink.domain.models import FixType


def simbrief_payload(**overrides):
    payload = {
        "fetch": {"userid": "123456", "status": "Success"},
        "general": {"costindex": "30", "initial_altitude": "35000", "avg_tropopause": "36120"},
        "origin": {"icao_code": "EGLL", "plan_rwy": "27L", "trans_alt": "6000"},
        "destination": {"icao_code": "LFPG", "plan_rwy": "09R", "trans_level": "7000"},
        "alternate": {"icao_code": "LFPO"},
        "atc": {"callsign": "BAW304"},
        "navlog": {
            "fix": [
                {
                    "ident": "BIG",
                    "type": "vor",
                    "pos_lat": "51.330833",
                    "pos_long": "0.035000",
                    "via_airway": "DVR6J",
                    "is_sid_star": "1",
                },
                {
                    "ident": "5320N",
                    "type": "ltlg",
                    "pos_lat": "53.000000",
                    "pos_long": "-20.000000",
                    "via_airway": "NATA",
                    "is_sid_star": "0",
                },
                {
                    "ident": "LFPG",
                    "type": "apt",
                    "pos_lat": "49.009722",
                    "pos_long": "2.547778",
                    "via_airway": "BOMB1A",
                    "is_sid_star": "0",
                },
            ]
        },
    }
    payload.update(overrides)
    return payload


class TestParseOfp:
    """Mapping of the SimBrief JSON document."""

    def test_header_fields(self):
        ofp = parse_ofp(simbrief_payload())

        assert ofp.origin_ident == "EGLL"
        assert ofp.origin_runway == "27L"
        assert ofp.origin_transition_altitude == 6000
        assert ofp.destination_ident == "LFPG"
        assert ofp.destination_runway == "09R"
        assert ofp.destination_transition_level == 7000
        assert ofp.alternate_ident == "LFPO"
        assert ofp.cost_index == "30"
        assert ofp.cruise_altitude == 35000
        assert ofp.average_tropopause == "36120"
        assert ofp.callsign == "BAW304"

    def test_navlog_fixes(self):
        navlog = parse_ofp(simbrief_payload()).navlog

        assert [fix.ident for fix in navlog] == ["BIG", "5320N", "LFPG"]
        assert [fix.fix_type for fix in navlog] == [FixType.NORMAL, FixType.LAT_LONG, FixType.AIRPORT]
        assert navlog[0].is_sid_star
        assert not navlog[1].is_sid_star
        assert navlog[1].pos_long == "-20.000000"

    def test_single_navlog_fix_object(self):
        payload = simbrief_payload(
            navlog={"fix": {"ident": "DVR", "type": "vor", "pos_lat": "51.16", "pos_long": "1.36", "via_airway": "DCT"}}
        )

        assert [fix.ident for fix in parse_ofp(payload).navlog] == ["DVR"]

    def test_alternate_list_uses_first(self):
        payload = simbrief_payload(alternate=[{"icao_code": "LFPO"}, {"icao_code": "LFOB"}])

        assert parse_ofp(payload).alternate_ident == "LFPO"

    def test_missing_alternate_is_empty(self):
        payload = simbrief_payload()
        del payload["alternate"]

        assert parse_ofp(payload).alternate_ident == ""

    def test_missing_origin_raises(self):
        with pytest.raises(OfpParseError) as exc_info:
            parse_ofp(simbrief_payload(origin={"plan_rwy": "27L"}))

        assert exc_info.value.field_name == "origin.icao_code"

    def test_unparseable_numbers_fall_back_to_zero(self):
        ofp = parse_ofp(simbrief_payload(general={"initial_altitude": "FL350"}))

        assert ofp.cruise_altitude == 0
        assert ofp.cost_index == ""


class TestSimBriefOfpSource:
    """HTTP behaviour against a mocked requests session."""

    @pytest.fixture
    def session(self):
        mock = MagicMock()
        mock.get.return_value.json.return_value = simbrief_payload()
        return mock

    @pytest.fixture
    def source(self, session):
        return SimBriefOfpSource(config=SimBriefConfig(timeout_seconds=5.0), session=session)

    def test_fetch_by_username(self, source, session):
        ofp = source.fetch("pilot")

        session.get.assert_called_once_with(
            "https://www.simbrief.com/api/xml.fetcher.php?json=1",
            params={"username": "pilot"},
            timeout=5.0,
        )
        assert ofp.callsign == "BAW304"

    def test_user_id_takes_precedence(self, source, session):
        source.fetch("pilot", user_id="123456")

        assert session.get.call_args.kwargs["params"] == {"userid": "123456"}

    def test_http_error_is_wrapped(self, source, session):
        response = MagicMock(status_code=400)
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError(response=response)

        with pytest.raises(OfpFetchError) as exc_info:
            source.fetch("pilot")

        assert exc_info.value.status_code == 400
        assert exc_info.value.username == "pilot"

    def test_connection_error_is_wrapped(self, source, session):
        session.get.side_effect = requests.ConnectionError("unreachable")

        with pytest.raises(OfpFetchError) as exc_info:
            source.fetch("pilot")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.cause, requests.ConnectionError)

    def test_invalid_json_is_wrapped(self, source, session):
        session.get.return_value.json.side_effect = ValueError("Expecting value")

        with pytest.raises(OfpFetchError):
            source.fetch("pilot")

    def test_simbrief_error_status(self, source, session):
        session.get.return_value.json.return_value = {"fetch": {"status": "Error: Unknown UserID"}}

        with pytest.raises(OfpFetchError) as exc_info:
            source.fetch("pilot")

        assert "Unknown UserID" in exc_info.value.message

    def test_non_object_payload_raises(self, source, session):
        session.get.return_value.json.return_value = ["not", "an", "ofp"]

        with pytest.raises(OfpParseError):
            source.fetch("pilot")
