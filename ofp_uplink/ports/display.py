"""Display port - Progress notifications of an uplink."""

from __future__ import annotations

from typing import Protocol


class UplinkDisplayPort(Protocol):
    """Port notified when an uplink starts and completes.

    Implementation: adapters/display/logging_display.py
    """

    def on_uplink_in_progress(self) -> None:
        ...

    def on_uplink_done(self) -> None:
        ...
