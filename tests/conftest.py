"""Shared fixtures: a small navigation database around the Dover area."""

from unittest.mock import MagicMock

import pytest

from ofp_uplink.domain.models import Airway, Coordinates, Fix, Procedure, ProcedureTransition


def make_fix(ident, icao_code, lat, long):
    return Fix(ident=ident, icao_code=icao_code, location=Coordinates(lat, long), database_id=f"wpt:{icao_code}:{ident}")


EGLL = make_fix("EGLL", "EG", 51.4775, -0.4614)
LFPG = make_fix("LFPG", "LF", 49.0097, 2.5478)
BIG = make_fix("BIG", "EG", 51.3308, 0.0350)
DET = make_fix("DET", "EG", 51.3040, 0.5972)
DVR = make_fix("DVR", "EG", 51.1625, 1.3597)
KONAN = make_fix("KONAN", "EB", 51.1311, 2.0000)
KONAN_SOUTH = make_fix("KONAN", "LF", 46.5000, 4.1000)
KOK = make_fix("KOK", "EB", 51.0944, 2.6503)
MAK = make_fix("MAK", "EB", 50.7239, 3.7964)
BOMBI = make_fix("BOMBI", "LF", 49.7319, 2.9067)
LORNI = make_fix("LORNI", "LF", 49.4400, 2.6867)

L9 = Airway(ident="L9", fixes=(DET, DVR, KONAN, KOK), database_id="AWY:1")
UL607 = Airway(ident="UL607", fixes=(KOK, MAK), database_id="AWY:2")

DVR6J = Procedure(
    ident="DVR6J",
    airport="EGLL",
    runways=("27L", "27R"),
    legs=(BIG, DET),
    enroute_transitions=(ProcedureTransition(ident="DVR", legs=(DVR,)),),
    database_id="SID:1",
)
BOMB1A = Procedure(ident="BOMB1A", airport="LFPG", legs=(BOMBI, LORNI), database_id="STAR:3")


@pytest.fixture
def fixes():
    by_ident = {}
    for fix in (EGLL, LFPG, BIG, DET, DVR, KONAN, KONAN_SOUTH, KOK, MAK, BOMBI, LORNI):
        by_ident.setdefault(fix.ident, []).append(fix)
    return by_ident


@pytest.fixture
def airways():
    return {"L9": [L9], "UL607": [UL607]}


@pytest.fixture
def navdata(fixes, airways):
    """NavDatabasePort mock answering from the fixtures above."""
    mock = MagicMock()
    mock.search_fixes.side_effect = lambda ident: tuple(fixes.get(ident, ()))
    mock.search_airways.side_effect = lambda ident, via_fix: tuple(
        airway for airway in airways.get(ident, ()) if airway.contains(via_fix)
    )
    mock.get_departures.return_value = (DVR6J,)
    mock.get_arrivals.return_value = (BOMB1A,)
    return mock
