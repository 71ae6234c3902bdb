"""Main CLI entry point for admission-controller.

Defines the CLI group and registers all subcommands.

Commands:
    review  - Evaluate one AdmissionReview against a configured route
    routes  - List webhook routes and the operations each handles
    serve   - Start the HTTPS webhook server

Subcommand help:
    admission-controller COMMAND -h    Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys

import click

from admission_controller import __version__
from admission_controller.constants import APP_NAME

from .commands.review import review
from .commands.routes import routes
from .commands.serve import serve


class ReorderedGroup(click.Group):
    """Custom group that shows commands before custom help text."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Add extra help after commands section."""
        formatter.write(
            """
Quick Start:
  admission-controller serve --tlscert tls.crt --tlskey tls.key
  admission-controller serve --no-tls --port 8080      Local testing only

Offline Evaluation:
  admission-controller review /validate/pods review.json
  cat review.json | admission-controller review /mutate/pods --decode-patch

Environment:
  ADMISSION_CONTROLLER_PORT, ADMISSION_CONTROLLER_TLS_CERT,
  ADMISSION_CONTROLLER_TLS_KEY, ADMISSION_CONTROLLER_HOST,
  ADMISSION_CONTROLLER_LOG_LEVEL, ADMISSION_CONTROLLER_LOG_DIR,
  ADMISSION_CONTROLLER_CONFIG
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """admission-controller: policy decisions for admission webhooks."""
    if version:
        click.echo(f"{APP_NAME} {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(review)
cli.add_command(routes)
cli.add_command(serve)


def main() -> None:
    """CLI entry point."""
    cli()
