"""Minimal resource models for the bundled policies.

Only the fields the policies read are declared. Unknown fields are accepted
(extra="allow") so newer resource schemas still validate.
"""

from __future__ import annotations

__all__ = [
    "Container",
    "Deployment",
    "ObjectMeta",
    "Pod",
    "PodSpec",
    "parse_resource",
]

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

_RESOURCE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

R = TypeVar("R", bound=BaseModel)


class ObjectMeta(BaseModel):
    """Standard object metadata."""

    model_config = _RESOURCE_CONFIG

    name: str | None = None
    namespace: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class Container(BaseModel):
    """A container within a pod spec."""

    model_config = _RESOURCE_CONFIG

    name: str = ""
    image: str = ""
    command: list[str] | None = None
    args: list[str] | None = None


class PodSpec(BaseModel):
    """Pod specification (containers only)."""

    model_config = _RESOURCE_CONFIG

    containers: list[Container] = Field(default_factory=list)


class Pod(BaseModel):
    """A pod as embedded in an admission request."""

    model_config = _RESOURCE_CONFIG

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: PodSpec = Field(default_factory=PodSpec)

    @property
    def namespace(self) -> str:
        return self.metadata.namespace or ""


class Deployment(BaseModel):
    """A deployment as embedded in an admission request (metadata only)."""

    model_config = _RESOURCE_CONFIG

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: dict[str, Any] = Field(default_factory=dict)

    @property
    def namespace(self) -> str:
        return self.metadata.namespace or ""


def parse_resource(model_class: type[R], data: dict[str, Any] | None, field: str = "object") -> R:
    """Validate an embedded object as model_class.

    Args:
        model_class: Resource model to validate against.
        data: Decoded object from the request (None when absent).
        field: Wire field name, used in error messages.

    Returns:
        Validated resource.

    Raises:
        ValueError: If the object is absent or does not match the model.
            The message is suitable for returning in a denial.
    """
    if data is None:
        raise ValueError(f"request has no {field} to evaluate")
    try:
        return model_class.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            errors.append(f"{loc}: {error['msg']}")
        raise ValueError(f"invalid {model_class.__name__} in {field}: {'; '.join(errors)}") from e
