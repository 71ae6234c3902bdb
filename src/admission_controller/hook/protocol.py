"""Protocol definitions for pluggable decision functions.

A decision function receives a parsed AdmissionRequest and returns a Result.
Raising an exception signals an internal fault in evaluating the policy
(e.g. a malformed resource); the admission handler renders it as a denial.

Policies implement these protocols structurally, without inheriting from
our code. Both shapes are accepted by Hook:

    def deny_everything(request: AdmissionRequest) -> Result:
        return Result.deny("nothing gets in")

    class ImageAllowList:
        def __init__(self, registries: set[str]) -> None:
            self._registries = registries

        def evaluate(self, request: AdmissionRequest) -> Result:
            ...
"""

from __future__ import annotations

__all__ = [
    "AdmissionPolicy",
    "AdmitFunc",
    "DecisionFunction",
]

from typing import TYPE_CHECKING, Protocol, Union, runtime_checkable

if TYPE_CHECKING:
    from admission_controller.hook.result import Result
    from admission_controller.review.models import AdmissionRequest


@runtime_checkable
class AdmitFunc(Protocol):
    """Callable decision function (plain function or closure).

    Thread-safety:
    - Called concurrently from the server's thread pool
    - Any shared state is owned and synchronized by the implementation
    """

    def __call__(self, request: "AdmissionRequest") -> "Result": ...


@runtime_checkable
class AdmissionPolicy(Protocol):
    """Policy object exposing a single evaluate() method."""

    def evaluate(self, request: "AdmissionRequest") -> "Result":
        """Evaluate the request.

        Args:
            request: Decoded admission request.

        Returns:
            Result with the verdict and optional patch operations.

        Raises:
            Exception: On internal faults; rendered as a denial.
        """
        ...


DecisionFunction = Union[AdmitFunc, AdmissionPolicy]
