"""Translation between the AdmissionReview wire envelope and decision results.

Decoding:
    decode_review() parses the raw HTTP body. Any failure raises
    ReviewDecodeError carrying whatever uid/apiVersion could be recovered,
    so the error response can still be correlated by the caller.

Encoding:
    build_response() maps a Result onto an AdmissionResponse. Patch
    operations are serialized as a compact JSON array and base64-encoded,
    and patchType is set only when patches are present.
"""

from __future__ import annotations

__all__ = [
    "build_error_response",
    "build_response",
    "decode_patch",
    "decode_review",
    "encode_patch",
    "wrap_response",
]

import base64
import binascii
import json
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from admission_controller.constants import (
    ADMISSION_API_VERSION_V1,
    JSON_PATCH_TYPE,
    SUPPORTED_API_VERSIONS,
)
from admission_controller.exceptions import ReviewDecodeError
from admission_controller.hook.patch import PatchOperation
from admission_controller.hook.result import Result
from admission_controller.review.models import (
    AdmissionResponse,
    AdmissionReview,
    ResponseStatus,
)


# =============================================================================
# Decoding
# =============================================================================


def _recover_identity(raw: Any) -> tuple[str, str | None]:
    """Best-effort extraction of uid and apiVersion from an undecoded body."""
    if not isinstance(raw, dict):
        return "", None
    api_version = raw.get("apiVersion")
    if not isinstance(api_version, str):
        api_version = None
    request = raw.get("request")
    uid = request.get("uid") if isinstance(request, dict) else None
    return (uid if isinstance(uid, str) else ""), api_version


def _format_validation_error(error: ValidationError) -> str:
    """Flatten a ValidationError into "loc: msg; loc: msg"."""
    parts = []
    for item in error.errors():
        loc = ".".join(str(x) for x in item["loc"])
        parts.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "; ".join(parts)


def decode_review(body: bytes | str) -> AdmissionReview:
    """Decode an HTTP body into an AdmissionReview with a request.

    Args:
        body: Raw request body.

    Returns:
        Validated AdmissionReview whose request is set.

    Raises:
        ReviewDecodeError: If the body is not JSON, does not match the
            envelope schema, has no request, or embeds a malformed object.
    """
    try:
        raw = json.loads(body)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, UnicodeDecodeError and the int digit limit are ValueErrors
        raise ReviewDecodeError(f"could not parse admission review: {e}") from e

    uid, api_version = _recover_identity(raw)

    try:
        review = AdmissionReview.model_validate(raw)
    except ValidationError as e:
        raise ReviewDecodeError(
            _format_validation_error(e),
            uid=uid,
            api_version=api_version,
        ) from e

    if review.request is None:
        raise ReviewDecodeError("admission review has no request", uid=uid, api_version=api_version)

    return review


# =============================================================================
# Patch serialization
# =============================================================================


def encode_patch(patch_ops: Sequence[PatchOperation]) -> str:
    """Serialize patch operations as a base64-encoded JSON Patch document.

    Args:
        patch_ops: Operations in application order.

    Returns:
        ASCII base64 string of the compact JSON array.
    """
    document = json.dumps(
        [op.to_json_patch() for op in patch_ops],
        separators=(",", ":"),
    )
    return base64.b64encode(document.encode("utf-8")).decode("ascii")


def decode_patch(data: str | bytes) -> list[dict[str, Any]]:
    """Decode a base64 JSON Patch document back into its operation list.

    Args:
        data: Value of the response's patch field.

    Returns:
        List of {op, path, value?} dicts in the original order.

    Raises:
        ValueError: If data is not base64 of a JSON array.
    """
    try:
        document = json.loads(base64.b64decode(data, validate=True))
    except (binascii.Error, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValueError(f"invalid patch document: {e}") from e
    if not isinstance(document, list):
        raise ValueError("invalid patch document: expected a JSON array")
    return document


# =============================================================================
# Encoding
# =============================================================================


def build_response(uid: str, result: Result) -> AdmissionResponse:
    """Translate a decision Result into an AdmissionResponse.

    Args:
        uid: Correlation token from the request.
        result: Decision result.

    Returns:
        Response with allowed, optional status message, and patch fields
        only when the result allows and carries patch operations.
    """
    response = AdmissionResponse(uid=uid, allowed=result.allowed)
    if result.message:
        response.status = ResponseStatus(message=result.message)
    if result.allowed and result.patch_ops:
        response.patch = encode_patch(result.patch_ops)
        response.patch_type = JSON_PATCH_TYPE
    return response


def build_error_response(uid: str, message: str) -> AdmissionResponse:
    """Build a denial carrying an error message.

    Args:
        uid: Correlation token ("" when it could not be recovered).
        message: Error text shown to the caller.

    Returns:
        Denying response with status.message set.
    """
    return AdmissionResponse(uid=uid, allowed=False, status=ResponseStatus(message=message))


def wrap_response(response: AdmissionResponse, api_version: str | None = None) -> AdmissionReview:
    """Wrap a response in an AdmissionReview envelope.

    The envelope uses the request's apiVersion when it is one we speak,
    otherwise admission.k8s.io/v1.
    """
    if api_version not in SUPPORTED_API_VERSIONS:
        api_version = ADMISSION_API_VERSION_V1
    return AdmissionReview(api_version=api_version, response=response)
