"""HTTP surface: FastAPI app and webhook routes."""

from admission_controller.api.server import create_app

__all__ = ["create_app"]
