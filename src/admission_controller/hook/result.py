"""Decision result returned by decision functions.

A Result is built fresh per request, is immutable once returned, and is
consumed once by the admission handler to build the response envelope.
"""

from __future__ import annotations

__all__ = ["Result"]

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, model_validator

from admission_controller.hook.patch import PatchOperation


class Result(BaseModel):
    """Outcome of evaluating one admission request.

    Defaults to a denial with no message, so a decision function that only
    sets a message produces a denial.

    Invariant: a denied result carries no patch operations.

    Attributes:
        allowed: Whether the change may proceed.
        message: Human-readable explanation (empty when none is given).
        patch_ops: Ordered JSON Patch operations to apply to the object.
    """

    model_config = ConfigDict(frozen=True)

    allowed: bool = False
    message: str = ""
    patch_ops: tuple[PatchOperation, ...] = ()

    @model_validator(mode="after")
    def _denied_has_no_patches(self) -> Result:
        if not self.allowed and self.patch_ops:
            raise ValueError("a denied result cannot carry patch operations")
        return self

    @classmethod
    def allow(cls, message: str = "", patch_ops: Iterable[PatchOperation] = ()) -> Result:
        """Build an allowing result, optionally with patch operations."""
        return cls(allowed=True, message=message, patch_ops=tuple(patch_ops))

    @classmethod
    def deny(cls, message: str) -> Result:
        """Build a denial with an explanatory message."""
        return cls(allowed=False, message=message)

    @property
    def is_mutating(self) -> bool:
        """True when the result carries patch operations."""
        return bool(self.patch_ops)
