"""Admission webhook endpoints.

Each configured path is bound to one Hook through its own AdmissionHandler.
The endpoint reads the raw body (regardless of content type) and always
answers 200 with an AdmissionReview: decode failures and evaluation errors
are denials inside the envelope, never HTTP errors.

Decision functions are synchronous and may block, so the handler runs in a
worker thread instead of on the event loop.
"""

from __future__ import annotations

__all__ = ["create_admission_router"]

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from admission_controller.review.handler import AdmissionHandler

if TYPE_CHECKING:
    from admission_controller.hook import Hook
    from admission_controller.telemetry.decision_logger import DecisionEventLogger


def _make_endpoint(handler: AdmissionHandler) -> Callable[[Request], Awaitable[JSONResponse]]:
    """Build the POST endpoint for one handler."""

    async def admission_review(request: Request) -> JSONResponse:
        body = await request.body()
        review = await asyncio.to_thread(handler.review, body)
        return JSONResponse(review.to_wire())

    return admission_review


def create_admission_router(
    routes: Mapping[str, "Hook"],
    decision_logger: "DecisionEventLogger | None" = None,
) -> APIRouter:
    """Create a router with one POST endpoint per webhook path.

    Args:
        routes: Mapping of path (e.g. "/validate/pods") to Hook.
        decision_logger: Optional logger shared by all handlers.

    Returns:
        APIRouter with the admission endpoints.
    """
    router = APIRouter()
    for path, hook in routes.items():
        handler = AdmissionHandler(hook, route=path, decision_logger=decision_logger)
        router.add_api_route(
            path,
            _make_endpoint(handler),
            methods=["POST"],
            name=f"admission{path.replace('/', '_')}",
            response_class=JSONResponse,
        )
    return router
