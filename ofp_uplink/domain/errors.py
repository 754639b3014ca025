"""Typed domain errors for the OFP uplink.

All errors inherit from UplinkError and can optionally wrap a root
cause exception for debugging.

Ambiguous procedure or transition candidates are deliberately not an
error: the synthesizer skips them silently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class UplinkError(Exception):
    """Base error for the uplink domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class InvalidSequenceError(UplinkError):
    """A route instruction appeared where it cannot be applied.

    Raised when a procedure chunk is neither the first nor the last
    chunk of the route. Aborts the synthesis run.

    Attributes:
        chunk_index: Position of the offending chunk
        instruction: Instruction tag of the offending chunk
    """

    chunk_index: int = -1
    instruction: str = ""


@dataclass
class NotFoundError(UplinkError):
    """A required navigation database lookup returned no candidates.

    Aborts the synthesis run; legs inserted before the failing chunk
    stay in the flight plan.

    Attributes:
        ident: The identifier that was searched for
        instruction: Instruction tag of the chunk being applied
    """

    ident: str = ""
    instruction: str = ""


@dataclass
class OfpFetchError(UplinkError):
    """Failed to download the OFP document.

    Attributes:
        username: SimBrief username or user id used for the request
        status_code: HTTP status code if a response was received
    """

    username: str = ""
    status_code: Optional[int] = None


@dataclass
class OfpParseError(UplinkError):
    """The OFP document is missing a required field.

    Attributes:
        field_name: Dotted path of the missing or malformed field
    """

    field_name: str = ""


@dataclass
class NavDataError(UplinkError):
    """Navigation data loading or integrity error.

    Attributes:
        file_path: Path to the navigation data file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class FlightPlanError(UplinkError):
    """The flight plan rejected a mutation.

    Attributes:
        index: Flight plan element index involved, if any
    """

    index: Optional[int] = None
