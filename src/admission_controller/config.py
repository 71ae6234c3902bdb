"""Server configuration for admission-controller.

Settings come from CLI flags (each with an environment variable fallback,
see cli/commands/serve.py) or from a JSON config file. Both paths end in
ServerConfig validation, so invalid values fail the same way.

Example usage:
    config = ServerConfig.load(port=9443, tls_enabled=False)
    config = ServerConfig.load_from_file(Path("/etc/admission/config.json"))
    config.require_tls_material()
"""

from __future__ import annotations

__all__ = [
    "ServerConfig",
]

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from admission_controller.constants import (
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    DEFAULT_TLS_CERT_PATH,
    DEFAULT_TLS_KEY_PATH,
)
from admission_controller.exceptions import ConfigurationError, TLSMaterialError
from admission_controller.utils.file_helpers import load_validated_json

DECISIONS_LOG_FILENAME = "decisions.jsonl"
SYSTEM_LOG_FILENAME = "system.jsonl"


class ServerConfig(BaseModel):
    """Admission server settings.

    Attributes:
        host: Interface to bind.
        port: TCP port to listen on.
        tls_cert: Path to the PEM server certificate.
        tls_key: Path to the PEM private key.
        tls_enabled: Serve HTTPS. The orchestrator only calls HTTPS
            webhooks; disable for local testing behind a terminating proxy.
        log_level: Console log level.
        log_dir: Directory for decisions.jsonl and system.jsonl. None logs
            to stderr only.
    """

    model_config = {"extra": "forbid"}

    host: str = Field(default=DEFAULT_HOST, min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    tls_cert: str = Field(default=DEFAULT_TLS_CERT_PATH, min_length=1)
    tls_key: str = Field(default=DEFAULT_TLS_KEY_PATH, min_length=1)
    tls_enabled: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = DEFAULT_LOG_LEVEL
    log_dir: str | None = None

    @classmethod
    def load(cls, **values: Any) -> ServerConfig:
        """Validate settings, dropping None values so defaults apply.

        Args:
            **values: Field values (e.g. from CLI options).

        Returns:
            Validated ServerConfig.

        Raises:
            ConfigurationError: If any value is invalid.
        """
        provided = {k: v for k, v in values.items() if v is not None}
        if isinstance(provided.get("log_level"), str):
            provided["log_level"] = provided["log_level"].upper()
        try:
            return cls.model_validate(provided)
        except ValidationError as e:
            errors = []
            for error in e.errors():
                loc = ".".join(str(x) for x in error["loc"])
                errors.append(f"  - {loc}: {error['msg']}")
            raise ConfigurationError("Invalid server configuration:\n" + "\n".join(errors)) from e

    @classmethod
    def load_from_file(cls, config_path: Path) -> ServerConfig:
        """Load settings from a JSON file.

        Args:
            config_path: Path to the config file.

        Returns:
            Validated ServerConfig.

        Raises:
            ConfigurationError: If the file is missing, unreadable, not JSON,
                or fails validation.
        """
        try:
            return load_validated_json(config_path, cls, file_type="config")
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    @property
    def decisions_log_path(self) -> Path | None:
        """Path to decisions.jsonl, or None when file logging is off."""
        if self.log_dir is None:
            return None
        return Path(self.log_dir).expanduser() / DECISIONS_LOG_FILENAME

    @property
    def system_log_path(self) -> Path | None:
        """Path to system.jsonl, or None when file logging is off."""
        if self.log_dir is None:
            return None
        return Path(self.log_dir).expanduser() / SYSTEM_LOG_FILENAME

    def require_tls_material(self) -> None:
        """Check that the certificate and key exist when TLS is enabled.

        Raises:
            TLSMaterialError: If either file is missing or not a regular file.
        """
        if not self.tls_enabled:
            return
        for label, path in (("certificate", self.tls_cert), ("key", self.tls_key)):
            if not Path(path).expanduser().is_file():
                raise TLSMaterialError(f"TLS {label} not found at {path}")
