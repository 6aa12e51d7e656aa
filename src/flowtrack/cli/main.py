"""Main CLI entry point."""

import logging

import click
from flowtrack.config import Settings
from flowtrack.database.factories import create_database

# Import and register all commands at module level
from flowtrack.cli.commands import (
    account,
    add,
    budget,
    jobs,
    stats,
    transaction,
    user,
)


class ClickEchoHandler(logging.Handler):
    """Logging handler that writes through click so output follows the active stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool) -> None:
    """Attach the CLI log handler to the flowtrack logger once."""
    logger = logging.getLogger("flowtrack")
    if not any(isinstance(h, ClickEchoHandler) for h in logger.handlers):
        handler = ClickEchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FLOWTRACK_DB_PATH environment variable)",
    envvar="FLOWTRACK_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    type=int,
    help="ID of the acting user (overrides FLOWTRACK_USER environment variable)",
    envvar="FLOWTRACK_USER",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, user_id: int | None, verbose: bool):
    """Flowtrack - Personal finance tracker.

    Track accounts, income and expenses, keep a monthly budget and run the
    scheduled jobs for recurring transactions, budget alerts and monthly
    reports.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        settings = Settings.from_env()
        db = create_database(
            database_url=None if db_path else settings.database_url,
            database_path=db_path or settings.database_path,
        )
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        ctx.obj["settings"] = settings
        ctx.obj["user_id"] = user_id


# Register all commands
user.register_commands(cli)
account.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)
stats.register_commands(cli)
jobs.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
