"""Review command for admission-controller CLI.

Runs one AdmissionReview through the same handler the server uses and
prints the response envelope. Useful for checking policy wiring without a
cluster.
"""

from __future__ import annotations

__all__ = ["review"]

import json
import sys
from typing import IO

import click

from admission_controller.policies import default_routes
from admission_controller.review.codec import decode_patch
from admission_controller.review.handler import AdmissionHandler

from ..styling import style_error, style_header


@click.command()
@click.argument("route")
@click.argument("review_file", type=click.File("rb"), default="-")
@click.option(
    "--decode-patch",
    "show_patch",
    is_flag=True,
    help="Also print the decoded JSON patch (to stderr)",
)
def review(route: str, review_file: IO[bytes], show_patch: bool) -> None:
    """Evaluate an AdmissionReview against ROUTE.

    Reads the review from REVIEW_FILE, or stdin when omitted or "-".
    The response envelope is printed to stdout as JSON.

    Examples:
        admission-controller review /validate/pods review.json
        admission-controller review /mutate/pods review.json --decode-patch
    """
    routes = default_routes()
    hook = routes.get(route)
    if hook is None:
        click.echo(style_error(f"Unknown route: {route}"), err=True)
        click.echo(f"Available routes: {', '.join(sorted(routes))}", err=True)
        sys.exit(2)

    envelope = AdmissionHandler(hook, route=route).review(review_file.read())
    click.echo(json.dumps(envelope.to_wire(), indent=2))

    response = envelope.response
    if show_patch and response is not None and response.patch is not None:
        click.echo(style_header("Patch"), err=True)
        click.echo(json.dumps(decode_patch(response.patch), indent=2), err=True)
