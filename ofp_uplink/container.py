"""Dependency injection container.

Wires the ports used by an uplink to their adapters: the SimBrief OFP
source, the CSV navigation database (behind a lookup cache), the
in-memory flight plan and the logging display.

Tests register their own fakes:

    container = Container()
    container.register(NavDatabasePort, lambda: FakeNavDatabase())
    navdata = container.resolve(NavDatabasePort)
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(default_factory=dict, repr=False)
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)
            self._singletons.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def clear_singletons(self) -> None:
        """Clear all cached singletons (a fresh flight plan on next resolve)."""
        with self._lock:
            self._singletons.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.cache import InMemoryCache
        from .adapters.display import LoggingUplinkDisplay
        from .adapters.flight_plan import InMemoryFlightPlan
        from .adapters.navdata import CachingNavDatabase, CSVNavDatabase
        from .adapters.simbrief import SimBriefOfpSource
        from .ports.cache import CachePort
        from .ports.display import UplinkDisplayPort
        from .ports.flight_plan import FlightPlanPort
        from .ports.navdata import NavDatabasePort
        from .ports.ofp_source import OfpSourcePort
        from .services import UplinkService

        config = config or get_config()
        container = cls(config=config)

        cache: InMemoryCache[Any] = InMemoryCache(name="navdata")
        container.register(CachePort, lambda: cache)

        container.register(
            NavDatabasePort,
            lambda: CachingNavDatabase(
                inner=CSVNavDatabase(config.navdata),
                cache=container.resolve(CachePort),
            ),
        )
        container.register(
            FlightPlanPort,
            lambda: InMemoryFlightPlan(navdata=container.resolve(NavDatabasePort)),
        )
        container.register(UplinkDisplayPort, LoggingUplinkDisplay)
        container.register(OfpSourcePort, lambda: SimBriefOfpSource(config.simbrief))

        def create_uplink_service() -> UplinkService:
            return UplinkService(
                navdata=container.resolve(NavDatabasePort),
                flight_plan=container.resolve(FlightPlanPort),
                display=container.resolve(UplinkDisplayPort),
                ofp_source=container.resolve(OfpSourcePort),
            )

        container.register(UplinkService, create_uplink_service)

        return container


_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container, creating it if needed."""
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container. Call this in tests."""
    global _default_container
    with _container_lock:
        _default_container = None
