"""Admission handler: the protocol adapter between the wire and a Hook.

For each inbound body the handler decodes the AdmissionReview, dispatches
the request to its Hook, and encodes the Result back into a response
envelope. It keeps no state across calls, so one instance serves any number
of concurrent requests.

Every path ends in a response envelope:
- Decode failure -> denial with the decode error text
- UnsupportedOperationError -> denial "operation <KIND> is not registered"
- Decision function raised -> denial with the exception text
- Result -> allowed/denied, plus patch fields when patches are present

The correlation uid is echoed unchanged in all cases.
"""

from __future__ import annotations

__all__ = ["AdmissionHandler"]

import logging
import time
from typing import TYPE_CHECKING

from admission_controller.exceptions import ReviewDecodeError, UnsupportedOperationError
from admission_controller.hook.operation import Operation
from admission_controller.review.codec import (
    build_error_response,
    build_response,
    decode_review,
    wrap_response,
)
from admission_controller.telemetry.models import DecisionEvent, DecisionOutcome
from admission_controller.telemetry.system_logger import get_system_logger

if TYPE_CHECKING:
    from admission_controller.hook.hook import Hook
    from admission_controller.review.models import AdmissionRequest, AdmissionResponse, AdmissionReview
    from admission_controller.telemetry.decision_logger import DecisionEventLogger


class AdmissionHandler:
    """Decodes admission reviews, runs them through a Hook, encodes the verdict.

    Attributes:
        hook: The Hook requests are dispatched to.
        route: Path the handler is bound to (for logging).
    """

    def __init__(
        self,
        hook: "Hook",
        *,
        route: str | None = None,
        decision_logger: "DecisionEventLogger | None" = None,
        system_logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            hook: Hook to dispatch requests to.
            route: Path this handler serves, recorded in decision logs.
            decision_logger: Optional logger for one event per decision.
            system_logger: Logger for operational events (defaults to the
                singleton system logger).
        """
        self.hook = hook
        self.route = route
        self._decision_logger = decision_logger
        self._system_logger = system_logger or get_system_logger()

    def review(self, body: bytes | str) -> "AdmissionReview":
        """Produce the response envelope for one inbound body.

        Never raises: all failures are rendered as denials.

        Args:
            body: Raw AdmissionReview JSON.

        Returns:
            AdmissionReview with the response section set.
        """
        start = time.perf_counter()

        try:
            review = decode_review(body)
        except ReviewDecodeError as e:
            self._system_logger.warning(
                {
                    "event": "admission_review_decode_failed",
                    "message": f"Could not decode admission review (uid={e.uid!r}): {e.message}",
                    "uid": e.uid,
                    "route": self.route,
                }
            )
            response = build_error_response(e.uid, e.message)
            self._record(response, "decode_error", start)
            return wrap_response(response, e.api_version)

        request = review.request
        assert request is not None  # guaranteed by decode_review
        response, outcome, patch_count = self._evaluate(request)
        self._record(response, outcome, start, request, patch_count)
        return wrap_response(response, review.api_version)

    def _evaluate(
        self, request: "AdmissionRequest"
    ) -> tuple["AdmissionResponse", DecisionOutcome, int]:
        """Run the hook and translate its outcome into a response.

        Returns:
            (response, outcome, number of patch operations emitted)
        """
        try:
            result = self.hook.execute(request)
            response = build_response(request.uid, result)
        except UnsupportedOperationError as e:
            self._system_logger.warning(
                {
                    "event": "operation_not_registered",
                    "message": f"{e} on route {self.route or '<unbound>'}",
                    "uid": request.uid,
                    "operation": e.operation,
                    "route": self.route,
                }
            )
            return build_error_response(request.uid, str(e)), "unsupported_operation", 0
        except Exception as e:
            self._system_logger.error(
                {
                    "event": "decision_function_failed",
                    "message": f"Decision function failed for uid={request.uid}: {type(e).__name__}: {e}",
                    "uid": request.uid,
                    "operation": request.operation,
                    "route": self.route,
                    "error_type": type(e).__name__,
                },
                exc_info=True,
            )
            return build_error_response(request.uid, str(e)), "policy_error", 0

        patch_count = len(result.patch_ops) if response.patch is not None else 0
        if Operation.parse(request.operation) is None:
            return response, "invalid_operation", patch_count
        return response, ("allowed" if response.allowed else "denied"), patch_count

    def _record(
        self,
        response: "AdmissionResponse",
        outcome: DecisionOutcome,
        start: float,
        request: "AdmissionRequest | None" = None,
        patch_count: int = 0,
    ) -> None:
        """Emit the decision event, if a decision logger is configured."""
        if self._decision_logger is None:
            return

        self._decision_logger.log(
            DecisionEvent(
                uid=response.uid,
                route=self.route,
                operation=request.operation if request else None,
                kind=(request.kind_name or None) if request else None,
                namespace=request.namespace if request else None,
                name=request.name if request else None,
                allowed=response.allowed,
                outcome=outcome,
                message=response.status.message if response.status else None,
                patch_count=patch_count,
                duration_ms=round((time.perf_counter() - start) * 1000, 3),
            )
        )
