"""Application-wide constants for admission-controller.

Constants that define protocol and server behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    "ENV_PREFIX",
    # Wire protocol
    "ADMISSION_API_VERSION_V1",
    "ADMISSION_API_VERSION_V1BETA1",
    "SUPPORTED_API_VERSIONS",
    "ADMISSION_REVIEW_KIND",
    "JSON_PATCH_TYPE",
    # Server defaults
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "DEFAULT_TLS_CERT_PATH",
    "DEFAULT_TLS_KEY_PATH",
    "DEFAULT_LOG_LEVEL",
    "LOG_LEVELS",
    # Routes
    "HEALTHZ_PATH",
    "VALIDATE_PODS_PATH",
    "MUTATE_PODS_PATH",
    "VALIDATE_DEPLOYMENTS_PATH",
]

# =============================================================================
# Application Identity
# =============================================================================

APP_NAME = "admission-controller"

# Environment variables read by the CLI: ADMISSION_CONTROLLER_PORT, etc.
ENV_PREFIX = "ADMISSION_CONTROLLER"

# =============================================================================
# Wire Protocol
# =============================================================================

ADMISSION_API_VERSION_V1 = "admission.k8s.io/v1"
ADMISSION_API_VERSION_V1BETA1 = "admission.k8s.io/v1beta1"
SUPPORTED_API_VERSIONS: tuple[str, ...] = (
    ADMISSION_API_VERSION_V1,
    ADMISSION_API_VERSION_V1BETA1,
)
ADMISSION_REVIEW_KIND = "AdmissionReview"

# Only patch document format the orchestrator accepts (RFC 6902)
JSON_PATCH_TYPE = "JSONPatch"

# =============================================================================
# Server Defaults
# =============================================================================

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8443
DEFAULT_TLS_CERT_PATH = "/etc/certs/tls.crt"
DEFAULT_TLS_KEY_PATH = "/etc/certs/tls.key"
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR")

# =============================================================================
# Routes
# =============================================================================

HEALTHZ_PATH = "/healthz"
VALIDATE_PODS_PATH = "/validate/pods"
MUTATE_PODS_PATH = "/mutate/pods"
VALIDATE_DEPLOYMENTS_PATH = "/validate/deployments"
