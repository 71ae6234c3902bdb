"""Custom exceptions for admission-controller.

Exceptions are organized into two categories:

Recoverable Errors (server continues, caller receives a denial):
    - AdmissionError: Base for errors raised while evaluating one request
    - ReviewDecodeError: Inbound envelope or embedded object is malformed
    - UnsupportedOperationError: No decision function registered for the kind

Startup Failures (process exits before serving):
    - StartupFailure: Base for failures that abort the process
    - ConfigurationError: Settings are invalid
    - TLSMaterialError: Certificate or key cannot be used

Policy denials are not errors: decision functions return
Result(allowed=False, ...) for those.

Usage:
    from admission_controller.exceptions import UnsupportedOperationError
"""

from __future__ import annotations

__all__ = [
    "AdmissionError",
    "ConfigurationError",
    "ReviewDecodeError",
    "StartupFailure",
    "TLSMaterialError",
    "UnsupportedOperationError",
]


# =============================================================================
# Recoverable Errors (server continues, caller receives a denial)
# =============================================================================


class AdmissionError(Exception):
    """Base exception for errors raised while evaluating a single request.

    The admission handler renders every AdmissionError as a denial whose
    message is str(exc). None of these are fatal to the process.
    """


class ReviewDecodeError(AdmissionError):
    """Raised when an AdmissionReview cannot be decoded.

    Covers invalid JSON, schema mismatches, a missing request section, and
    object/oldObject payloads that are not valid serialized resources.

    Attributes:
        uid: Correlation token recovered from the raw body, or "" if none.
        api_version: apiVersion recovered from the raw body, or None.
    """

    def __init__(self, message: str, *, uid: str = "", api_version: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.uid = uid
        self.api_version = api_version

    def __repr__(self) -> str:
        return f"ReviewDecodeError({self.message!r}, uid={self.uid!r})"


class UnsupportedOperationError(AdmissionError):
    """Raised when a Hook has no decision function for the requested operation.

    This is a wiring error in the deployment, not a policy decision.
    Operators see "operation <KIND> is not registered" in the denial.

    Attributes:
        operation: The operation kind that has no registered function.
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"operation {operation} is not registered")


# =============================================================================
# Startup Failures (process exits before serving)
# =============================================================================


class StartupFailure(Exception):
    """Base exception for failures that abort the process before serving.

    Attributes:
        exit_code: Process exit code.
        failure_type: Category string for logging.
    """

    exit_code: int = 1
    failure_type: str = "unknown"


class ConfigurationError(StartupFailure):
    """Server configuration is invalid.

    Raised when:
    - A setting fails Pydantic validation (port out of range, bad log level)
    - A config file cannot be read or contains invalid JSON

    Exit code 2 indicates configuration failure.
    """

    exit_code = 2
    failure_type = "configuration_failure"


class TLSMaterialError(StartupFailure):
    """TLS certificate or key cannot be loaded.

    Raised when TLS is enabled and the certificate or key path does not
    exist or is not a regular file.

    Exit code 3 indicates TLS material failure.
    """

    exit_code = 3
    failure_type = "tls_material_failure"
