"""Caching decorator for navigation databases.

Wraps any NavDatabasePort and memoizes its lookups through a CachePort,
so repeated searches for the same fix or airway during an uplink hit
the backing database only once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ...domain.models import Airway, Fix, Procedure
from ...ports.cache import CachePort
from ...ports.navdata import NavDatabasePort
from ..cache.memory_cache import InMemoryCache


@dataclass
class CachingNavDatabase:
    """NavDatabasePort decorator caching every lookup.

    Attributes:
        inner: The navigation database being wrapped
        cache: Cache for lookup results
    """

    inner: NavDatabasePort
    cache: CachePort[Any] = field(default_factory=lambda: InMemoryCache(name="navdata"))

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def search_fixes(self, ident: str) -> Sequence[Fix]:
        return self.cache.get_or_compute(
            f"fix:{ident}",
            lambda: tuple(self.inner.search_fixes(ident)),
        )

    def search_airways(self, ident: str, via_fix: Fix) -> Sequence[Airway]:
        return self.cache.get_or_compute(
            f"airway:{ident}:{via_fix.icao_code}:{via_fix.ident}",
            lambda: tuple(self.inner.search_airways(ident, via_fix)),
        )

    def get_departures(self, airport: str, runway: Optional[str] = None) -> Sequence[Procedure]:
        return self.cache.get_or_compute(
            f"departures:{airport}:{runway or ''}",
            lambda: tuple(self.inner.get_departures(airport, runway)),
        )

    def get_arrivals(self, airport: str) -> Sequence[Procedure]:
        return self.cache.get_or_compute(
            f"arrivals:{airport}",
            lambda: tuple(self.inner.get_arrivals(airport)),
        )

    def clear(self) -> int:
        """Drop every cached lookup."""
        cleared = self.cache.clear()
        self._logger.debug("Navigation lookups cleared", extra={"entries": cleared})
        return cleared
