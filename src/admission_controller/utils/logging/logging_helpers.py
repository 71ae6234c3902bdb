"""Serialization helpers for structured log events."""

from __future__ import annotations

__all__ = ["serialize_event"]

from typing import Any

from pydantic import BaseModel


def serialize_event(event: BaseModel) -> dict[str, Any]:
    """Serialize a Pydantic event model for logging.

    Excludes the 'time' field (added by ISO8601Formatter at log time) and
    None values for cleaner logs.

    Args:
        event: Pydantic model instance (e.g., DecisionEvent).

    Returns:
        dict: Serialized event data ready for logging.
    """
    return event.model_dump(mode="json", exclude={"time"}, exclude_none=True)
