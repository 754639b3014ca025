"""Flight plan adapters - Implementations of FlightPlanPort.

Available implementations:
- InMemoryFlightPlan: Segmented flight plan held in memory
"""

from .in_memory import InMemoryFlightPlan, InMemoryPendingAirways

__all__ = ["InMemoryFlightPlan", "InMemoryPendingAirways"]
