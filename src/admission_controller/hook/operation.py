"""Operation kinds carried by an admission request.

These values define which slot of a Hook handles a request.
"""

from __future__ import annotations

__all__ = ["Operation"]

from enum import Enum


class Operation(str, Enum):
    """Kind of change the orchestrator is asking about.

    Inherits from str so values compare equal to the wire strings.

    Attributes:
        CREATE: A new object is being created.
        UPDATE: An existing object is being modified.
        DELETE: An existing object is being removed.
        CONNECT: A connection to a sub-resource is being opened (exec, proxy).
    """

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    CONNECT = "CONNECT"

    @classmethod
    def parse(cls, value: str) -> Operation | None:
        """Return the matching Operation, or None for unrecognized kinds."""
        try:
            return cls(value)
        except ValueError:
            return None
