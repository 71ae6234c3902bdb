"""Pydantic models for decision log events.

The 'time' field is None on construction; ISO8601Formatter adds the
timestamp during serialization so every logged event has exactly one.
"""

from __future__ import annotations

__all__ = ["DecisionEvent", "DecisionOutcome"]

from typing import Literal

from pydantic import BaseModel, ConfigDict

# How the handler resolved a call:
# - allowed / denied: decision function returned a Result
# - invalid_operation: operation kind outside CREATE/UPDATE/DELETE/CONNECT
# - unsupported_operation: no function registered for the kind
# - policy_error: decision function raised
# - decode_error: envelope could not be decoded
DecisionOutcome = Literal[
    "allowed",
    "denied",
    "invalid_operation",
    "unsupported_operation",
    "policy_error",
    "decode_error",
]


class DecisionEvent(BaseModel):
    """One admission decision (decisions.jsonl).

    Request bodies are never logged; only identifying metadata.
    """

    model_config = ConfigDict(extra="forbid")

    time: str | None = None
    event: Literal["admission_decision"] = "admission_decision"
    uid: str
    route: str | None = None
    operation: str | None = None
    kind: str | None = None
    namespace: str | None = None
    name: str | None = None
    allowed: bool
    outcome: DecisionOutcome
    message: str | None = None
    patch_count: int = 0
    duration_ms: float
