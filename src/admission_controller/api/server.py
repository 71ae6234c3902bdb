"""FastAPI application serving the admission webhooks.

Routes:
- POST <path> for each configured webhook (default: /validate/pods,
  /mutate/pods, /validate/deployments)
- GET /healthz

TLS is terminated by uvicorn (see cli/commands/serve.py); the app itself is
transport-agnostic, which keeps it usable with TestClient.

Usage:
    app = create_app()                       # bundled policies
    app = create_app({"/validate/x": hook})  # custom wiring
"""

from __future__ import annotations

__all__ = ["create_app"]

from collections.abc import Mapping
from typing import TYPE_CHECKING

from fastapi import FastAPI

from admission_controller import __version__
from admission_controller.api.routes import admission, health
from admission_controller.constants import APP_NAME

if TYPE_CHECKING:
    from admission_controller.hook import Hook
    from admission_controller.telemetry.decision_logger import DecisionEventLogger


def create_app(
    routes: Mapping[str, "Hook"] | None = None,
    decision_logger: "DecisionEventLogger | None" = None,
) -> FastAPI:
    """Create the FastAPI application with all webhook routes.

    Args:
        routes: Mapping of webhook path to Hook. Defaults to the bundled
            policies (see policies.default_routes()).
        decision_logger: Optional logger for one event per decision.

    Returns:
        Configured FastAPI application.
    """
    if routes is None:
        from admission_controller.policies import default_routes

        routes = default_routes()

    app = FastAPI(
        title=APP_NAME,
        description="Admission webhook policy decision endpoint",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Read-only after startup; exposed for introspection
    app.state.admission_routes = dict(routes)

    app.include_router(health.router, tags=["health"])
    app.include_router(admission.create_admission_router(routes, decision_logger), tags=["admission"])

    return app
