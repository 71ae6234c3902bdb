"""Patch operations describing partial mutations of a resource.

A PatchOperation is one RFC 6902 JSON Patch entry. Decision functions build
them with the constructors below; the admission handler serializes them into
the response envelope. Patches are never applied here.

Paths are JSON Pointers into the resource (e.g. "/spec/containers") and are
not validated: decision functions are responsible for well-formed paths.
"""

from __future__ import annotations

__all__ = [
    "PatchOperation",
    "PatchOp",
    "add_patch_operation",
    "remove_patch_operation",
    "replace_patch_operation",
]

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, model_validator

PatchOp = Literal["add", "replace", "remove"]


class PatchOperation(BaseModel):
    """A single declarative edit addressed by a JSON Pointer.

    Invariant: add/replace carry a value (JSON null is allowed when passed
    explicitly), remove carries none.

    Attributes:
        op: Edit kind.
        path: JSON Pointer to the target location.
        value: Payload for add/replace.
    """

    model_config = ConfigDict(frozen=True)

    op: PatchOp
    path: str
    value: Any = None

    @model_validator(mode="after")
    def _check_value_presence(self) -> PatchOperation:
        has_value = "value" in self.model_fields_set
        if self.op == "remove" and has_value:
            raise ValueError("remove operation must not carry a value")
        if self.op != "remove" and not has_value:
            raise ValueError(f"{self.op} operation requires a value")
        return self

    def to_json_patch(self) -> dict[str, Any]:
        """Render as a JSON Patch entry ({op, path, value?})."""
        if self.op == "remove":
            return self.model_dump(mode="json", exclude={"value"})
        return self.model_dump(mode="json")


def add_patch_operation(path: str, value: Any) -> PatchOperation:
    """Build an add operation for path."""
    return PatchOperation(op="add", path=path, value=value)


def replace_patch_operation(path: str, value: Any) -> PatchOperation:
    """Build a replace operation for path."""
    return PatchOperation(op="replace", path=path, value=value)


def remove_patch_operation(path: str) -> PatchOperation:
    """Build a remove operation for path."""
    return PatchOperation(op="remove", path=path)
