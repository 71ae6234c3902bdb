"""Decision logging for admission reviews.

One JSONL line per admission decision is written to
<log_dir>/decisions.jsonl when a log directory is configured. Without one,
decisions go to the system logger at DEBUG level.
"""

from __future__ import annotations

__all__ = [
    "DecisionEventLogger",
    "create_decision_logger",
]

import logging
from pathlib import Path

from admission_controller.constants import APP_NAME
from admission_controller.telemetry.models import DecisionEvent
from admission_controller.utils.logging.logger_setup import setup_jsonl_logger
from admission_controller.utils.logging.logging_helpers import serialize_event


def create_decision_logger(log_path: Path) -> logging.Logger:
    """Create the JSONL logger for decision events.

    Args:
        log_path: Path to decisions.jsonl.

    Returns:
        Configured logger instance.
    """
    return setup_jsonl_logger(f"{APP_NAME}.decisions", log_path, log_level=logging.INFO)


class DecisionEventLogger:
    """Logs admission decisions as structured dict records.

    Handler-level write errors are handled by the logging module and never
    affect the admission response.
    """

    def __init__(self, *, logger: logging.Logger, level: int = logging.INFO) -> None:
        """Initialize decision event logger.

        Args:
            logger: Destination for decision events.
            level: Level decision events are logged at.
        """
        self._logger = logger
        self._level = level

    def log(self, event: DecisionEvent) -> None:
        """Write one decision event.

        Args:
            event: The decision to record.
        """
        self._logger.log(self._level, serialize_event(event))
