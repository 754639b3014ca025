"""Uplink progress reported through logging."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field


@dataclass
class LoggingUplinkDisplay:
    """Display adapter that logs uplink progress.

    Attributes:
        in_progress: Whether an uplink is currently running
    """

    in_progress: bool = False

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def on_uplink_in_progress(self) -> None:
        self.in_progress = True
        self._logger.info("Uplink in progress")

    def on_uplink_done(self) -> None:
        self.in_progress = False
        self._logger.info("Uplink done")
