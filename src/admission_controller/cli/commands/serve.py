"""Serve command for admission-controller CLI.

Starts the HTTPS webhook server. SIGINT/SIGTERM trigger a graceful shutdown
(handled by uvicorn). Invalid settings and missing TLS material exit with
the failure's exit code before uvicorn starts. Unusable TLS material and
bind failures (port in use) are reported as server_failed and exit 1.
"""

from __future__ import annotations

__all__ = ["serve"]

import logging
import sys
from pathlib import Path

import click
import uvicorn

from admission_controller.api.server import create_app
from admission_controller.config import ServerConfig
from admission_controller.constants import ENV_PREFIX, LOG_LEVELS
from admission_controller.exceptions import StartupFailure
from admission_controller.telemetry import (
    DecisionEventLogger,
    configure_system_logger_file,
    create_decision_logger,
    get_system_logger,
    set_system_log_level,
)

from ..styling import style_error


def _build_config(config_path: Path | None, **overrides: object) -> ServerConfig:
    """Merge the optional config file with CLI/env overrides."""
    values: dict[str, object] = {}
    if config_path is not None:
        values = ServerConfig.load_from_file(config_path).model_dump()
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ServerConfig.load(**values)


def _build_decision_logger(config: ServerConfig, system_logger: logging.Logger) -> DecisionEventLogger:
    """Decisions go to decisions.jsonl when log_dir is set, else to stderr at DEBUG."""
    log_path = config.decisions_log_path
    if log_path is None:
        return DecisionEventLogger(logger=system_logger, level=logging.DEBUG)
    return DecisionEventLogger(logger=create_decision_logger(log_path))


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    envvar=f"{ENV_PREFIX}_CONFIG",
    help="JSON config file (flags override its values)",
)
@click.option("--port", type=int, envvar=f"{ENV_PREFIX}_PORT", help="The port on which to listen [8443]")
@click.option(
    "--tlscert", "tls_cert", envvar=f"{ENV_PREFIX}_TLS_CERT", help="Path to the TLS certificate"
)
@click.option("--tlskey", "tls_key", envvar=f"{ENV_PREFIX}_TLS_KEY", help="Path to the TLS key")
@click.option("--host", envvar=f"{ENV_PREFIX}_HOST", help="Interface to bind [0.0.0.0]")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    envvar=f"{ENV_PREFIX}_LOG_LEVEL",
    help="Console log level [INFO]",
)
@click.option(
    "--log-dir",
    envvar=f"{ENV_PREFIX}_LOG_DIR",
    help="Directory for decisions.jsonl and system.jsonl",
)
@click.option("--no-tls", is_flag=True, help="Serve plain HTTP (local testing only)")
def serve(
    config_path: Path | None,
    port: int | None,
    tls_cert: str | None,
    tls_key: str | None,
    host: str | None,
    log_level: str | None,
    log_dir: str | None,
    no_tls: bool,
) -> None:
    """Start the admission webhook server.

    Examples:
        admission-controller serve --tlscert /etc/certs/tls.crt --tlskey /etc/certs/tls.key
        admission-controller serve --no-tls --port 8080
    """
    system_logger = get_system_logger()

    try:
        config = _build_config(
            config_path,
            port=port,
            tls_cert=tls_cert,
            tls_key=tls_key,
            host=host,
            log_level=log_level,
            log_dir=log_dir,
            tls_enabled=False if no_tls else None,
        )
        set_system_log_level(config.log_level)
        if config.system_log_path is not None:
            configure_system_logger_file(config.system_log_path)
        config.require_tls_material()
        decision_logger = _build_decision_logger(config, system_logger)
    except StartupFailure as e:
        system_logger.error(
            {
                "event": "startup_failed",
                "message": f"Startup failed: {e}",
                "failure_type": e.failure_type,
                "exit_code": e.exit_code,
            }
        )
        click.echo(style_error(str(e)), err=True)
        sys.exit(e.exit_code)

    app = create_app(decision_logger=decision_logger)

    # Our system logger reports; uvicorn only surfaces its own problems
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    server_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        ssl_certfile=config.tls_cert if config.tls_enabled else None,
        ssl_keyfile=config.tls_key if config.tls_enabled else None,
        log_config=None,
        access_log=False,
    )

    system_logger.info(
        {
            "event": "server_starting",
            "message": f"Starting server on port: {config.port}",
            "host": config.host,
            "port": config.port,
            "tls": config.tls_enabled,
            "routes": sorted(app.state.admission_routes),
        }
    )

    try:
        uvicorn.Server(server_config).run()
    except OSError as e:
        # ssl.SSLError from unreadable or invalid TLS material
        system_logger.error(
            {
                "event": "server_failed",
                "message": f"Failed to listen and serve: {e}",
                "error_type": type(e).__name__,
            }
        )
        click.echo(style_error(f"Failed to listen and serve: {e}"), err=True)
        sys.exit(1)
    except SystemExit as e:
        # uvicorn exits 1 itself when the socket cannot be bound
        if e.code in (None, 0):
            raise
        system_logger.error(
            {
                "event": "server_failed",
                "message": "Failed to listen and serve: uvicorn exited during startup",
                "error_type": "SystemExit",
                "exit_code": e.code,
            }
        )
        click.echo(style_error("Failed to listen and serve"), err=True)
        sys.exit(1)

    system_logger.info({"event": "server_stopped", "message": "Server stopped"})
