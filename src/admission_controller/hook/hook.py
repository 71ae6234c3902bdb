"""Operation hook: dispatches a request to its decision function.

A Hook is a fixed record with one optional slot per operation kind. An empty
slot means the operation is unsupported by this hook, which is different
from a slot holding a function that always allows.

Hooks are built once at startup and never mutated, so a single instance is
safely shared by all concurrent requests.
"""

from __future__ import annotations

__all__ = ["Hook"]

from dataclasses import dataclass
from typing import TYPE_CHECKING

from admission_controller.exceptions import UnsupportedOperationError
from admission_controller.hook.operation import Operation
from admission_controller.hook.result import Result

if TYPE_CHECKING:
    from admission_controller.hook.protocol import AdmitFunc, DecisionFunction
    from admission_controller.review.models import AdmissionRequest


def _as_admit_func(candidate: "DecisionFunction | None") -> "AdmitFunc | None":
    """Normalize a slot value to a plain callable."""
    if candidate is None or callable(candidate):
        return candidate
    return candidate.evaluate


@dataclass(frozen=True)
class Hook:
    """The set of decision functions for each operation of a webhook.

    Attributes:
        create: Decision function for CREATE requests.
        update: Decision function for UPDATE requests.
        delete: Decision function for DELETE requests.
        connect: Decision function for CONNECT requests.
    """

    create: "DecisionFunction | None" = None
    update: "DecisionFunction | None" = None
    delete: "DecisionFunction | None" = None
    connect: "DecisionFunction | None" = None

    def function_for(self, operation: Operation) -> "AdmitFunc | None":
        """Get the decision function registered for an operation.

        Args:
            operation: Operation kind.

        Returns:
            Callable decision function, or None if the slot is empty.
        """
        match operation:
            case Operation.CREATE:
                slot = self.create
            case Operation.UPDATE:
                slot = self.update
            case Operation.DELETE:
                slot = self.delete
            case Operation.CONNECT:
                slot = self.connect
        return _as_admit_func(slot)

    def registered_operations(self) -> tuple[Operation, ...]:
        """Operations that have a decision function, in declaration order."""
        return tuple(op for op in Operation if self.function_for(op) is not None)

    def execute(self, request: "AdmissionRequest") -> Result:
        """Evaluate the request with the function for its operation.

        The function's Result is returned unchanged, and anything it raises
        propagates unchanged.

        Args:
            request: Decoded admission request.

        Returns:
            Result from the decision function. For operation kinds outside
            CREATE/UPDATE/DELETE/CONNECT, a denial explaining the kind is
            invalid.

        Raises:
            UnsupportedOperationError: If no function is registered for the
                request's operation.
        """
        operation = Operation.parse(request.operation)
        if operation is None:
            return Result(allowed=False, message=f"Invalid operation: {request.operation}")

        fn = self.function_for(operation)
        if fn is None:
            raise UnsupportedOperationError(operation.value)

        return fn(request)
