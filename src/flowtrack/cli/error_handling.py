"""CLI error handling helpers."""

import logging

import click

from flowtrack.domain.errors import DomainError, UnauthorizedError

logger = logging.getLogger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error on stderr and exit with status 1."""
    logger.debug("Command failed: %r", error)
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, UnauthorizedError):
        click.echo("Pass --user or set FLOWTRACK_USER.", err=True)
    ctx.exit(1)
