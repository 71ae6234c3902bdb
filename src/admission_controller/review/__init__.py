"""AdmissionReview wire protocol.

- models.py: Pydantic models for the AdmissionReview envelope
- codec.py: Decoding requests, encoding results and JSON patches
- handler.py: AdmissionHandler (decode -> Hook.execute -> encode)
"""

from admission_controller.review.codec import (
    build_error_response,
    build_response,
    decode_patch,
    decode_review,
    encode_patch,
    wrap_response,
)
from admission_controller.review.handler import AdmissionHandler
from admission_controller.review.models import (
    AdmissionRequest,
    AdmissionResponse,
    AdmissionReview,
    GroupVersionKind,
    GroupVersionResource,
    ResponseStatus,
    UserInfo,
)

__all__ = [
    # Handler
    "AdmissionHandler",
    # Codec
    "build_error_response",
    "build_response",
    "decode_patch",
    "decode_review",
    "encode_patch",
    "wrap_response",
    # Models
    "AdmissionRequest",
    "AdmissionResponse",
    "AdmissionReview",
    "GroupVersionKind",
    "GroupVersionResource",
    "ResponseStatus",
    "UserInfo",
]
