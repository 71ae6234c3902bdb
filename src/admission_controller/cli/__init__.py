"""Command-line interface for admission-controller.

Provides commands for serving the webhooks, evaluating a single
AdmissionReview offline, and listing configured routes.
"""

from .main import cli, main

__all__ = ["cli", "main"]
