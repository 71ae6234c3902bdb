"""Telemetry for admission-controller.

- system_logger: Operational events (stderr + optional system.jsonl)
- decision_logger: One event per admission decision (decisions.jsonl)
- models: Pydantic event models
"""

from admission_controller.telemetry.decision_logger import DecisionEventLogger, create_decision_logger
from admission_controller.telemetry.models import DecisionEvent, DecisionOutcome
from admission_controller.telemetry.system_logger import (
    configure_system_logger_file,
    get_system_logger,
    set_system_log_level,
)

__all__ = [
    "DecisionEvent",
    "DecisionEventLogger",
    "DecisionOutcome",
    "configure_system_logger_file",
    "create_decision_logger",
    "get_system_logger",
    "set_system_log_level",
]
