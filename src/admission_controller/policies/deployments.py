"""Deployment policies: namespace protection.

- CREATE is denied in the "special" namespace.
- DELETE is denied in "special-system" when the deployment's "skip"
  annotation is the string "false". The comparison is literal: a missing
  annotation or any other spelling ("False", "0", "no") allows the delete.
"""

from __future__ import annotations

__all__ = [
    "new_validation_hook",
    "validate_create",
    "validate_delete",
]

from admission_controller.hook import Hook, Result
from admission_controller.policies.resources import Deployment, parse_resource
from admission_controller.review.models import AdmissionRequest

RESTRICTED_CREATE_NAMESPACE = "special"
PROTECTED_DELETE_NAMESPACE = "special-system"
SKIP_ANNOTATION = "skip"


def validate_create(request: AdmissionRequest) -> Result:
    """Deny deployments created in the special namespace."""
    try:
        deployment = parse_resource(Deployment, request.object_)
    except ValueError as e:
        return Result.deny(str(e))

    if deployment.namespace == RESTRICTED_CREATE_NAMESPACE:
        return Result.deny("You cannot create a deployment in `special` namespace.")

    return Result.allow()


def validate_delete(request: AdmissionRequest) -> Result:
    """Deny deleting protected deployments from the special-system namespace."""
    try:
        deployment = parse_resource(Deployment, request.old_object, field="oldObject")
    except ValueError as e:
        return Result.deny(str(e))

    if (
        deployment.namespace == PROTECTED_DELETE_NAMESPACE
        and deployment.metadata.annotations.get(SKIP_ANNOTATION) == "false"
    ):
        return Result.deny("You cannot remove a deployment from `special-system` namespace.")

    return Result.allow()


def new_validation_hook() -> Hook:
    """Create the deployments validation hook."""
    return Hook(create=validate_create, delete=validate_delete)
