"""Immutable domain models for the OFP uplink.

All models are frozen dataclasses with slots. They have no external
dependencies and represent the core concepts of the application:
the raw navlog, the route instructions derived from it, navigation
data records and flight plan elements.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import ClassVar, Optional, Union


class FixType(Enum):
    """Kind of navlog fix, as tagged in the OFP."""

    AIRPORT = auto()
    LAT_LONG = auto()
    NORMAL = auto()

    @classmethod
    def from_tag(cls, tag: str) -> FixType:
        """Map an OFP type tag ('apt', 'ltlg', 'wpt', 'vor', ...) to a FixType."""
        if tag == "apt":
            return cls.AIRPORT
        if tag == "ltlg":
            return cls.LAT_LONG
        return cls.NORMAL


def parse_coordinate(text: str) -> float:
    """Parse a textual coordinate, returning NaN when malformed."""
    try:
        return float(text)
    except (TypeError, ValueError):
        return math.nan


@dataclass(frozen=True, slots=True)
class Coordinates:
    """A latitude/longitude pair in decimal degrees.

    Values are not range-checked: location hints built from malformed
    navlog text carry NaN.
    """

    lat: float
    long: float

    @property
    def is_valid(self) -> bool:
        """Check that both components are finite numbers."""
        return math.isfinite(self.lat) and math.isfinite(self.long)


@dataclass(frozen=True, slots=True)
class NavlogFix:
    """A single fix record of the OFP navlog.

    Attributes:
        ident: Fix identifier (e.g., 'BOPTA', 'TOC', 'KJFK')
        fix_type: Kind of fix
        pos_lat: Latitude as found in the document
        pos_long: Longitude as found in the document
        via_airway: Airway, procedure or direct marker leading to this fix
        is_sid_star: Whether the fix belongs to a SID or STAR
    """

    ident: str
    fix_type: FixType
    pos_lat: str
    pos_long: str
    via_airway: str
    is_sid_star: bool = False

    @property
    def location(self) -> Coordinates:
        """Parsed position, NaN components when unparseable."""
        return Coordinates(parse_coordinate(self.pos_lat), parse_coordinate(self.pos_long))


class ChunkInstruction(str, Enum):
    """Instruction tag of a route chunk."""

    PROCEDURE = "procedure"
    SID_ENROUTE_TRANSITION = "sidEnrouteTransition"
    STAR_ENROUTE_TRANSITION = "starEnrouteTransition"
    WAYPOINT = "waypoint"
    LAT_LONG = "latlong"
    DCT = "dct"
    AIRWAY = "airway"
    AIRWAY_TERMINATION = "airwayTermination"


@dataclass(frozen=True, slots=True)
class ProcedureChunk:
    """A departure or arrival procedure reference."""

    instruction: ClassVar[ChunkInstruction] = ChunkInstruction.PROCEDURE

    ident: str


@dataclass(frozen=True, slots=True)
class SidEnrouteTransitionChunk:
    """Exit fix of a departure procedure."""

    instruction: ClassVar[ChunkInstruction] = ChunkInstruction.SID_ENROUTE_TRANSITION

    ident: str
    location_hint: Coordinates


@dataclass(frozen=True, slots=True)
class StarEnrouteTransitionChunk:
    """Entry fix of an arrival procedure. Not produced by the classifier."""

    instruction: ClassVar[ChunkInstruction] = ChunkInstruction.STAR_ENROUTE_TRANSITION

    ident: str


@dataclass(frozen=True, slots=True)
class WaypointChunk:
    """A fix reached by direct routing."""

    instruction: ClassVar[ChunkInstruction] = ChunkInstruction.WAYPOINT

    ident: str
    location_hint: Coordinates


@dataclass(frozen=True, slots=True)
class LatLongChunk:
    """A raw coordinate waypoint."""

    instruction: ClassVar[ChunkInstruction] = ChunkInstruction.LAT_LONG

    lat: float
    long: float


@dataclass(frozen=True, slots=True)
class DctChunk:
    """Direct routing marker. Not produced by the classifier."""

    instruction: ClassVar[ChunkInstruction] = ChunkInstruction.DCT


@dataclass(frozen=True, slots=True)
class AirwayChunk:
    """Entry onto a named airway."""

    instruction: ClassVar[ChunkInstruction] = ChunkInstruction.AIRWAY

    ident: str
    location_hint: Coordinates


@dataclass(frozen=True, slots=True)
class AirwayTerminationChunk:
    """Exit fix leaving the current airway."""

    instruction: ClassVar[ChunkInstruction] = ChunkInstruction.AIRWAY_TERMINATION

    ident: str


RouteChunk = Union[
    ProcedureChunk,
    SidEnrouteTransitionChunk,
    StarEnrouteTransitionChunk,
    WaypointChunk,
    LatLongChunk,
    DctChunk,
    AirwayChunk,
    AirwayTerminationChunk,
]


@dataclass(frozen=True, slots=True)
class OfpDocument:
    """The parts of an uplinked OFP used to build a route.

    Attributes:
        origin_ident: Origin airport ICAO code
        origin_runway: Planned departure runway
        origin_transition_altitude: Transition altitude at the origin (ft)
        destination_ident: Destination airport ICAO code
        destination_runway: Planned arrival runway
        destination_transition_level: Transition level at destination (ft)
        alternate_ident: Alternate airport ICAO code
        cost_index: Cost index as found in the document
        cruise_altitude: Initial cruise altitude (ft)
        average_tropopause: Average tropopause as found in the document
        callsign: ATC callsign
        navlog: Ordered navlog fixes
    """

    origin_ident: str
    origin_runway: str
    origin_transition_altitude: int
    destination_ident: str
    destination_runway: str
    destination_transition_level: int
    alternate_ident: str
    cost_index: str
    cruise_altitude: int
    average_tropopause: str
    callsign: str
    navlog: tuple[NavlogFix, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class RouteOrigin:
    ident: str
    runway: str
    transition_altitude: int


@dataclass(frozen=True, slots=True)
class RouteDestination:
    ident: str
    runway: str
    transition_level: int


@dataclass(frozen=True, slots=True)
class OfpRoute:
    """Route summary extracted from an OFP.

    Attributes:
        origin: Origin airport, runway and transition altitude
        destination: Destination airport, runway and transition level
        alternate: Alternate airport ICAO code
        cost_index: Cost index, NaN when unparseable
        cruise_altitude: Initial cruise altitude (ft)
        callsign: ATC callsign
        pilot_tropopause: Tropopause (ft), None when unparseable
        chunks: Ordered route instructions
    """

    origin: RouteOrigin
    destination: RouteDestination
    alternate: str
    cost_index: float
    cruise_altitude: int
    callsign: str
    pilot_tropopause: Optional[int] = None
    chunks: tuple[RouteChunk, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ImportedPerformanceData:
    """Performance values copied from the OFP into the flight plan."""

    departure_transition_altitude: int
    destination_transition_level: float
    cost_index: float
    cruise_flight_level: float
    pilot_tropopause: Optional[int] = None


@dataclass(frozen=True, slots=True)
class Fix:
    """A named navigational point.

    Attributes:
        ident: Fix identifier
        icao_code: Two-letter ICAO region code
        location: Position of the fix
        database_id: Unique identifier in the navigation database
    """

    ident: str
    icao_code: str
    location: Coordinates
    database_id: str = ""

    def matches(self, other: Fix) -> bool:
        """Check whether two records describe the same fix (ident and region)."""
        return self.ident == other.ident and self.icao_code == other.icao_code

    @classmethod
    def from_coordinates(cls, location: Coordinates) -> Fix:
        """Build a coordinate-only fix, named after its position."""
        lat_hemisphere = "N" if location.lat >= 0 else "S"
        long_hemisphere = "E" if location.long >= 0 else "W"
        ident = (
            f"{lat_hemisphere}{abs(location.lat):04.1f}"
            f"{long_hemisphere}{abs(location.long):05.1f}"
        )
        return cls(ident=ident, icao_code="", location=location)


@dataclass(frozen=True, slots=True)
class Airway:
    """A named chain of fixes, in published order."""

    ident: str
    fixes: tuple[Fix, ...]
    database_id: str = ""

    def index_of(self, fix: Fix) -> int:
        """Index of the fix on this airway, -1 if absent."""
        for i, candidate in enumerate(self.fixes):
            if candidate.matches(fix):
                return i
        return -1

    def contains(self, fix: Fix) -> bool:
        return self.index_of(fix) != -1


@dataclass(frozen=True, slots=True)
class ProcedureTransition:
    """An enroute transition of a procedure."""

    ident: str
    legs: tuple[Fix, ...]
    database_id: str = ""


@dataclass(frozen=True, slots=True)
class Procedure:
    """A standard departure or arrival procedure.

    Attributes:
        ident: Procedure identifier
        airport: ICAO code of the airport it serves
        runways: Runways the procedure applies to (empty = all)
        legs: Fixes of the common route of the procedure
        enroute_transitions: Available enroute transitions
        database_id: Unique identifier in the navigation database
    """

    ident: str
    airport: str
    runways: tuple[str, ...] = field(default_factory=tuple)
    legs: tuple[Fix, ...] = field(default_factory=tuple)
    enroute_transitions: tuple[ProcedureTransition, ...] = field(default_factory=tuple)
    database_id: str = ""

    def serves_runway(self, runway: Optional[str]) -> bool:
        if not self.runways or not runway:
            return True
        return runway in self.runways


@dataclass(frozen=True, slots=True)
class Leg:
    """A flight plan leg terminating at a fix.

    Attributes:
        fix: The termination fix
        via: Airway or procedure the leg belongs to, if any
    """

    is_discontinuity: ClassVar[bool] = False

    fix: Fix
    via: Optional[str] = None

    def termination_waypoint(self) -> Fix:
        return self.fix


@dataclass(frozen=True, slots=True)
class Discontinuity:
    """A gap between two legs of a flight plan."""

    is_discontinuity: ClassVar[bool] = True


FlightPlanElement = Union[Leg, Discontinuity]


class FlightPlanSegment(Enum):
    """Segments of a flight plan, in flying order."""

    ORIGIN = auto()
    DEPARTURE_RUNWAY_TRANSITION = auto()
    DEPARTURE = auto()
    DEPARTURE_ENROUTE_TRANSITION = auto()
    ENROUTE = auto()
    ARRIVAL = auto()
    DESTINATION = auto()


@dataclass(frozen=True, slots=True)
class PendingAirwayEntry:
    """One airway of an airway entry that has not been committed yet.

    Attributes:
        airway: The airway being flown
        to: Exit fix, None until the airway is terminated
    """

    airway: Airway
    to: Optional[Fix] = None
