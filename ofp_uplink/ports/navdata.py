"""Navigation database port - Fix, airway and procedure lookups.

Every search may return an empty sequence; emptiness is a normal
outcome that callers turn into a NotFoundError where a result is
required.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Airway, Fix, Procedure


class NavDatabasePort(Protocol):
    """Port for navigation database queries.

    Implementations:
    - adapters/navdata/csv_navdata.py (CSVNavDatabase)
    - adapters/navdata/cached_navdata.py (CachingNavDatabase decorator)
    """

    def search_fixes(self, ident: str) -> Sequence[Fix]:
        """Find every fix sharing an identifier.

        Args:
            ident: Fix identifier (e.g., 'BOPTA').

        Returns:
            All matching fixes, in database order.
        """
        ...

    def search_airways(self, ident: str, via_fix: Fix) -> Sequence[Airway]:
        """Find airways with an identifier that pass through a fix.

        Args:
            ident: Airway identifier (e.g., 'UN871').
            via_fix: Fix the airway must contain.

        Returns:
            Matching airways, in database order.
        """
        ...

    def get_departures(self, airport: str, runway: Optional[str] = None) -> Sequence[Procedure]:
        """List departure procedures at an airport.

        Args:
            airport: Airport ICAO code.
            runway: Departure runway; procedures for other runways are excluded.

        Returns:
            Departure procedures.
        """
        ...

    def get_arrivals(self, airport: str) -> Sequence[Procedure]:
        """List arrival procedures at an airport.

        Args:
            airport: Airport ICAO code.

        Returns:
            Arrival procedures.
        """
        ...
