"""Pydantic models for the AdmissionReview wire envelope.

Field names are snake_case in Python and camelCase on the wire
(alias_generator=to_camel). Serialize with to_wire() so aliases are used and
unset optional fields are omitted.

The embedded object/oldObject may arrive either as a JSON object or as a
JSON-encoded string; both decode to a dict. A string that is not valid JSON
fails validation with the parse error text.
"""

from __future__ import annotations

__all__ = [
    "AdmissionRequest",
    "AdmissionResponse",
    "AdmissionReview",
    "GroupVersionKind",
    "GroupVersionResource",
    "ResponseStatus",
    "UserInfo",
]

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from admission_controller.constants import ADMISSION_API_VERSION_V1, ADMISSION_REVIEW_KIND

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GroupVersionKind(BaseModel):
    """Fully qualified kind of the object under review."""

    model_config = _WIRE_CONFIG

    group: str = ""
    version: str = ""
    kind: str = ""


class GroupVersionResource(BaseModel):
    """Fully qualified resource being requested."""

    model_config = _WIRE_CONFIG

    group: str = ""
    version: str = ""
    resource: str = ""


class UserInfo(BaseModel):
    """Identity of the caller that issued the change."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    username: str | None = None
    uid: str | None = None
    groups: list[str] | None = None


class AdmissionRequest(BaseModel):
    """Request section of an AdmissionReview.

    operation is kept as a plain string so kinds this server does not know
    still reach the Hook. kind/namespace/name are for logging only.

    Attributes:
        uid: Correlation token, echoed unchanged in the response.
        operation: CREATE, UPDATE, DELETE or CONNECT.
        object_: Serialized object (wire name "object"), set for
            CREATE/UPDATE/CONNECT.
        old_object: Serialized previous object, set for UPDATE/DELETE.
    """

    model_config = _WIRE_CONFIG

    uid: str
    kind: GroupVersionKind | None = None
    resource: GroupVersionResource | None = None
    sub_resource: str | None = None
    request_kind: GroupVersionKind | None = None
    request_resource: GroupVersionResource | None = None
    request_sub_resource: str | None = None
    name: str | None = None
    namespace: str | None = None
    operation: str
    user_info: UserInfo | None = None
    object_: dict[str, Any] | None = Field(default=None, alias="object")
    old_object: dict[str, Any] | None = None
    dry_run: bool | None = None
    options: dict[str, Any] | None = None

    @field_validator("object_", "old_object", mode="before")
    @classmethod
    def _decode_raw_object(cls, value: Any) -> Any:
        """Parse objects that arrive as JSON-encoded strings or bytes."""
        if isinstance(value, (str, bytes, bytearray)):
            try:
                return json.loads(value)
            except (ValueError, RecursionError) as e:
                raise ValueError(f"invalid serialized object: {e}") from e
        return value

    @property
    def kind_name(self) -> str:
        """Bare kind (e.g. "Pod"), or "" when not provided."""
        return self.kind.kind if self.kind is not None else ""


class ResponseStatus(BaseModel):
    """Status attached to a response, carrying the denial or error message."""

    model_config = _WIRE_CONFIG

    message: str | None = None
    code: int | None = None


class AdmissionResponse(BaseModel):
    """Response section of an AdmissionReview.

    Attributes:
        uid: Echo of the request uid.
        allowed: Verdict.
        status: Message, present when one exists.
        patch: Base64 of the JSON Patch array, present only with patches.
        patch_type: "JSONPatch", present only with patches.
    """

    model_config = _WIRE_CONFIG

    uid: str
    allowed: bool
    status: ResponseStatus | None = None
    patch: str | None = None
    patch_type: str | None = None
    warnings: list[str] | None = None


class AdmissionReview(BaseModel):
    """Top-level envelope exchanged with the orchestrator."""

    model_config = _WIRE_CONFIG

    api_version: str = ADMISSION_API_VERSION_V1
    kind: str = ADMISSION_REVIEW_KIND
    request: AdmissionRequest | None = None
    response: AdmissionResponse | None = None

    def to_wire(self) -> dict[str, Any]:
        """Serialize with camelCase names, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
