"""Display adapters - Implementations of UplinkDisplayPort.

Available implementations:
- LoggingUplinkDisplay: Reports uplink progress through logging
"""

from .logging_display import LoggingUplinkDisplay

__all__ = ["LoggingUplinkDisplay"]
