"""Liveness endpoint.

Provides:
- GET /healthz - 200 with an empty body while the server is up
"""

__all__ = ["router"]

from fastapi import APIRouter, Response

from admission_controller.constants import HEALTHZ_PATH

router = APIRouter()


@router.get(HEALTHZ_PATH, response_class=Response)
async def healthz() -> Response:
    """Report that the server is alive."""
    return Response(status_code=200)
