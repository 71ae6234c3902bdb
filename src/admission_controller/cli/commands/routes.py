"""Routes command for admission-controller CLI."""

from __future__ import annotations

__all__ = ["routes"]

import click

from admission_controller.policies import default_routes

from ..styling import style_dim, style_label


@click.command()
def routes() -> None:
    """List webhook routes and the operations each one handles.

    Operations without a decision function are answered with
    "operation <KIND> is not registered".
    """
    configured = default_routes()
    click.echo(style_label("Routes") + f" {len(configured)}")
    for path, hook in sorted(configured.items()):
        operations = hook.registered_operations()
        if operations:
            click.echo(f"  {path}  {', '.join(op.value for op in operations)}")
        else:
            click.echo(f"  {path}  " + style_dim("(no operations)"))
