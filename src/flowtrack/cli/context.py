"""CLI helpers for the acting user and account resolution."""

from __future__ import annotations

import click

from flowtrack.cli.error_handling import handle_domain_error
from flowtrack.domain.account import AccountService
from flowtrack.domain.entities import User
from flowtrack.domain.errors import DomainError
from flowtrack.domain.user import UserService
from flowtrack.utils.account_resolver import resolve_account


def require_user_or_exit(ctx: click.Context) -> User:
    """Resolve the user given with --user / FLOWTRACK_USER, or exit with a CLI error."""
    try:
        return UserService(ctx.obj["db"]).require_user(ctx.obj.get("user_id"))
    except DomainError as e:
        handle_domain_error(ctx, e)


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, user_id: int, account: str | int | None
) -> int:
    """Resolve account name or ID, falling back to the user's default account.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        if account is None:
            default = account_service.get_default_account(user_id)
            if default is None:
                raise DomainError("No default account; pass --account")
            return default.id
        return resolve_account(account_service, user_id, account)
    except DomainError as e:
        handle_domain_error(ctx, e)
