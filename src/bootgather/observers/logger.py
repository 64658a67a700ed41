# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/bootgather/observers/logger.py
from __future__ import annotations
import logging
from .events import BaseEvent

# carried by every event; already in the run banner
_CONTEXT_FIELDS = ("ts", "run_id", "directory")


class LoggerObserver:
    """Writes each lifecycle event as one DEBUG line of the run log."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def notify(self, event: BaseEvent) -> None:
        fields = " ".join(
            f"{k}={v}" for k, v in event.dict().items() if k not in _CONTEXT_FIELDS
        )
        self.logger.debug("[gather] %s %s", type(event).__name__, fields)
