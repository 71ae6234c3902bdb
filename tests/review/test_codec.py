"""Tests for AdmissionReview decoding and response encoding."""

from __future__ import annotations

import base64
import json
from collections.abc import Callable
from typing import Any

import pytest

from admission_controller.exceptions import ReviewDecodeError
from admission_controller.hook import Result, add_patch_operation, remove_patch_operation, replace_patch_operation
from admission_controller.review import (
    AdmissionResponse,
    build_error_response,
    build_response,
    decode_patch,
    decode_review,
    encode_patch,
    wrap_response,
)

ReviewFactory = Callable[..., dict[str, Any]]


# =============================================================================
# Decoding
# =============================================================================


class TestDecodeReview:
    """Tests for decode_review()."""

    def test_decodes_request_fields(self, make_review: ReviewFactory) -> None:
        """Wire camelCase fields map onto the request model."""
        body = json.dumps(make_review(operation="UPDATE", obj={"a": 1}, old_obj={"a": 0}, uid="u-1"))

        review = decode_review(body.encode())

        request = review.request
        assert request is not None
        assert request.uid == "u-1"
        assert request.operation == "UPDATE"
        assert request.object_ == {"a": 1}
        assert request.old_object == {"a": 0}
        assert request.kind_name == "Pod"
        assert request.namespace == "default"
        assert request.user_info is not None
        assert request.user_info.username == "admin"

    def test_object_as_json_string_is_parsed(self, make_review: ReviewFactory) -> None:
        """An object embedded as a serialized string decodes to a dict."""
        body = json.dumps(make_review(obj=json.dumps({"metadata": {"name": "x"}})))

        review = decode_review(body)

        assert review.request is not None
        assert review.request.object_ == {"metadata": {"name": "x"}}

    def test_unknown_operation_survives_decoding(self, make_review: ReviewFactory) -> None:
        """Operation kinds are not restricted at the wire level."""
        review = decode_review(json.dumps(make_review(operation="PATCH")))

        assert review.request is not None
        assert review.request.operation == "PATCH"

    def test_malformed_object_keeps_uid(self, make_review: ReviewFactory) -> None:
        """A broken serialized object fails with its uid still recovered."""
        body = json.dumps(make_review(obj="{not json", uid="u-2", api_version="admission.k8s.io/v1beta1"))

        with pytest.raises(ReviewDecodeError) as exc_info:
            decode_review(body)

        assert exc_info.value.uid == "u-2"
        assert exc_info.value.api_version == "admission.k8s.io/v1beta1"
        assert "invalid serialized object" in exc_info.value.message
        assert "request.object" in exc_info.value.message

    def test_invalid_json_has_empty_uid(self) -> None:
        """A body that is not JSON fails with no recoverable uid."""
        with pytest.raises(ReviewDecodeError) as exc_info:
            decode_review(b"{{{")

        assert exc_info.value.uid == ""
        assert exc_info.value.message.startswith("could not parse admission review")

    def test_empty_body_fails(self) -> None:
        """An empty body is a decode error."""
        with pytest.raises(ReviewDecodeError):
            decode_review(b"")

    def test_missing_request_fails(self) -> None:
        """A review without a request section is rejected."""
        with pytest.raises(ReviewDecodeError, match="has no request"):
            decode_review(json.dumps({"apiVersion": "admission.k8s.io/v1", "kind": "AdmissionReview"}))

    def test_missing_operation_fails_with_uid(self) -> None:
        """Schema errors report the field and keep the uid."""
        body = json.dumps({"request": {"uid": "u-3"}})

        with pytest.raises(ReviewDecodeError) as exc_info:
            decode_review(body)

        assert exc_info.value.uid == "u-3"
        assert "request.operation" in exc_info.value.message

    def test_oversized_integer_fails(self) -> None:
        """Integers past the interpreter's digit limit are a decode error."""
        body = '{"request": {"uid": "u-1", "operation": "CREATE", "object": {"n": ' + "1" * 5000 + "}}}"

        with pytest.raises(ReviewDecodeError) as exc_info:
            decode_review(body)

        assert exc_info.value.uid == ""
        assert exc_info.value.message.startswith("could not parse admission review")

    def test_deep_nesting_fails(self) -> None:
        """Nesting beyond the recursion limit is a decode error."""
        with pytest.raises(ReviewDecodeError) as exc_info:
            decode_review("[" * 100_000)

        assert exc_info.value.uid == ""

    def test_oversized_integer_in_string_object_keeps_uid(self, make_review: ReviewFactory) -> None:
        """A string-encoded object that cannot be parsed still reports the uid."""
        body = json.dumps(make_review(obj='{"n": ' + "1" * 5000 + "}", uid="u-big"))

        with pytest.raises(ReviewDecodeError) as exc_info:
            decode_review(body)

        assert exc_info.value.uid == "u-big"
        assert "invalid serialized object" in exc_info.value.message

    def test_non_object_body_fails(self) -> None:
        """A JSON array is not an envelope."""
        with pytest.raises(ReviewDecodeError) as exc_info:
            decode_review(b"[1, 2]")

        assert exc_info.value.uid == ""


# =============================================================================
# Patch serialization
# =============================================================================


class TestPatchEncoding:
    """Tests for encode_patch() / decode_patch()."""

    def test_encoded_document_is_compact_base64_json(self) -> None:
        """The patch is base64 of a compact JSON array."""
        encoded = encode_patch([add_patch_operation("/metadata/annotations", {"origin": "fromMutation"})])

        assert base64.b64decode(encoded) == (
            b'[{"op":"add","path":"/metadata/annotations","value":{"origin":"fromMutation"}}]'
        )

    def test_replace_then_add_decodes_in_order(self) -> None:
        """Two operations come back as exactly two entries in their original order."""
        containers = [{"name": "app", "image": "app:1"}, {"name": "sidecar", "image": "busybox:stable"}]
        annotations = {"origin": "fromMutation"}
        ops = [
            replace_patch_operation("/spec/containers", containers),
            add_patch_operation("/metadata/annotations", annotations),
        ]

        decoded = decode_patch(encode_patch(ops))

        assert decoded == [
            {"op": "replace", "path": "/spec/containers", "value": containers},
            {"op": "add", "path": "/metadata/annotations", "value": annotations},
        ]

    def test_remove_entries_have_no_value_key(self) -> None:
        """remove operations serialize without a value member."""
        decoded = decode_patch(encode_patch([remove_patch_operation("/metadata/labels/tier")]))

        assert decoded == [{"op": "remove", "path": "/metadata/labels/tier"}]

    def test_decode_rejects_non_array(self) -> None:
        """A patch document must be a JSON array."""
        with pytest.raises(ValueError, match="expected a JSON array"):
            decode_patch(base64.b64encode(b'{"op":"add"}'))

    def test_decode_rejects_invalid_base64(self) -> None:
        """Garbage input raises ValueError."""
        with pytest.raises(ValueError, match="invalid patch document"):
            decode_patch("***")


# =============================================================================
# Response encoding
# =============================================================================


class TestBuildResponse:
    """Tests for build_response() and build_error_response()."""

    def test_allow_without_message_or_patches(self) -> None:
        """A bare allow emits only uid and allowed."""
        response = build_response("u-1", Result.allow())

        assert AdmissionReviewWire.of(response) == {"uid": "u-1", "allowed": True}

    def test_denial_has_message_and_no_patch_fields(self) -> None:
        """Denials carry status.message and never patch/patchType."""
        response = build_response("u-1", Result.deny("nope"))

        wire = AdmissionReviewWire.of(response)
        assert wire == {"uid": "u-1", "allowed": False, "status": {"message": "nope"}}

    def test_patches_set_patch_and_patch_type(self) -> None:
        """Non-empty patches emit patchType JSONPatch and the encoded document."""
        ops = [add_patch_operation("/metadata/annotations", {"k": "v"})]

        response = build_response("u-1", Result.allow(patch_ops=ops))

        wire = AdmissionReviewWire.of(response)
        assert wire["patchType"] == "JSONPatch"
        assert decode_patch(wire["patch"]) == [{"op": "add", "path": "/metadata/annotations", "value": {"k": "v"}}]

    def test_allow_with_message_keeps_message(self) -> None:
        """An allowing result may still explain itself."""
        response = build_response("u-1", Result.allow("allowed by default"))

        assert response.status is not None
        assert response.status.message == "allowed by default"

    def test_error_response_is_denial(self) -> None:
        """Error responses deny with the error text."""
        response = build_error_response("u-9", "operation CONNECT is not registered")

        assert AdmissionReviewWire.of(response) == {
            "uid": "u-9",
            "allowed": False,
            "status": {"message": "operation CONNECT is not registered"},
        }


class TestWrapResponse:
    """Tests for wrap_response()."""

    def test_echoes_supported_api_version(self) -> None:
        """v1beta1 requests get v1beta1 envelopes."""
        envelope = wrap_response(build_error_response("u", "x"), "admission.k8s.io/v1beta1")

        assert envelope.api_version == "admission.k8s.io/v1beta1"
        assert envelope.kind == "AdmissionReview"

    @pytest.mark.parametrize("api_version", [None, "admission.k8s.io/v2"])
    def test_defaults_to_v1(self, api_version: str | None) -> None:
        """Unknown or missing versions fall back to v1."""
        envelope = wrap_response(build_error_response("u", "x"), api_version)

        assert envelope.api_version == "admission.k8s.io/v1"

    def test_wire_form_omits_request(self) -> None:
        """The response envelope has no request section."""
        wire = wrap_response(build_response("u", Result.allow())).to_wire()

        assert wire == {
            "apiVersion": "admission.k8s.io/v1",
            "kind": "AdmissionReview",
            "response": {"uid": "u", "allowed": True},
        }


class AdmissionReviewWire:
    """Helper rendering a response the way it appears on the wire."""

    @staticmethod
    def of(response: AdmissionResponse) -> dict[str, Any]:
        return response.model_dump(mode="json", by_alias=True, exclude_none=True)
