"""admission-controller: policy decision endpoint for admission webhooks.

The orchestrator posts an AdmissionReview describing a proposed change to a
resource. The request is dispatched to the decision function registered for
its operation, and the verdict (plus optional JSON patch) is returned in the
response envelope.

Structure:
    hook/       - Operation dispatch, decision results, patch operations
    review/     - Wire envelope models, codec, admission handler
    api/        - FastAPI app and webhook routes
    policies/   - Example decision functions for pods and deployments
    telemetry/  - System and decision logging
    cli/        - Command-line interface (serve, review, routes)
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
