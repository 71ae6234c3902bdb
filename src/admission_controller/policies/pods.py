"""Pod policies: image tag validation and sidecar injection.

Validation hook:
    CREATE is denied when any container image uses the "latest" tag.

Mutation hook:
    CREATE in the "special" namespace replaces /spec/containers with the
    original containers plus a sidecar. Every created pod gets the
    annotation origin=fromMutation.

Objects that cannot be parsed are denied with the parse error, not raised.
"""

from __future__ import annotations

__all__ = [
    "SIDECAR_CONTAINER",
    "mutate_create",
    "new_mutation_hook",
    "new_validation_hook",
    "validate_create",
]

from admission_controller.hook import (
    Hook,
    PatchOperation,
    Result,
    add_patch_operation,
    replace_patch_operation,
)
from admission_controller.policies.resources import Container, Pod, parse_resource
from admission_controller.review.models import AdmissionRequest

SIDECAR_NAMESPACE = "special"

SIDECAR_CONTAINER = Container(
    name="test-sidecar",
    image="busybox:stable",
    command=[
        "sh",
        "-c",
        "while true; do echo 'I am a container injected by mutating webhook'; sleep 2; done",
    ],
)

MUTATION_ANNOTATIONS = {"origin": "fromMutation"}


def validate_create(request: AdmissionRequest) -> Result:
    """Deny pods that run any container from a ":latest" image."""
    try:
        pod = parse_resource(Pod, request.object_)
    except ValueError as e:
        return Result.deny(str(e))

    for container in pod.spec.containers:
        if container.image.endswith(":latest"):
            return Result.deny("You cannot use the tag 'latest' in a container.")

    return Result.allow()


def mutate_create(request: AdmissionRequest) -> Result:
    """Inject a sidecar in the special namespace and annotate every pod."""
    try:
        pod = parse_resource(Pod, request.object_)
    except ValueError as e:
        return Result.deny(str(e))

    operations: list[PatchOperation] = []

    if pod.namespace == SIDECAR_NAMESPACE:
        # Original container entries are re-emitted as received
        spec = (request.object_ or {}).get("spec") or {}
        containers = [dict(c) for c in spec.get("containers") or []]
        containers.append(SIDECAR_CONTAINER.model_dump(mode="json", by_alias=True, exclude_none=True))
        operations.append(replace_patch_operation("/spec/containers", containers))

    operations.append(add_patch_operation("/metadata/annotations", dict(MUTATION_ANNOTATIONS)))
    return Result.allow(patch_ops=operations)


def new_validation_hook() -> Hook:
    """Create the pods validation hook."""
    return Hook(create=validate_create)


def new_mutation_hook() -> Hook:
    """Create the pods mutation hook."""
    return Hook(create=mutate_create)
