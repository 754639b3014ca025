"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
collaborators: the OFP source, the navigation database, the flight
plan being built and the progress display.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .cache import CachePort
from .display import UplinkDisplayPort
from .flight_plan import FlightPlanPort, PendingAirwaysPort
from .navdata import NavDatabasePort
from .ofp_source import OfpSourcePort

__all__ = [
    # Flight plan
    "FlightPlanPort",
    "PendingAirwaysPort",
    # Navigation data
    "NavDatabasePort",
    # OFP
    "OfpSourcePort",
    # Display
    "UplinkDisplayPort",
    # Cache
    "CachePort",
]
