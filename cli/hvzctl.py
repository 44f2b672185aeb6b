"""hvzctl: CLI for managing HvZ organizations, their staff and games."""

from __future__ import annotations

import json
import os

import click

from hvz_orgs.control_plane.services import Services, create_services
from hvz_orgs.shared.exceptions import (
    ConfigurationError,
    ConflictError,
    HvzError,
    InvalidOperationError,
    NotFoundError,
    UnauthorizedError,
)
from hvz_orgs.shared.logging import bind_invocation, configure_logging
from hvz_orgs.shared.models import Organization
from hvz_orgs.shared.validation import ValidationError

_ERROR_KINDS = (
    (NotFoundError, "NOT_FOUND"),
    (UnauthorizedError, "UNAUTHORIZED"),
    (ConflictError, "CONFLICT"),
    (InvalidOperationError, "INVALID_OPERATION"),
    (ValidationError, "INVALID_ARGUMENT"),
    (ConfigurationError, "CONFIGURATION"),
)


def _handle_error(e: Exception) -> None:
    """Print a user-friendly error for platform failures."""
    kind = next((k for cls, k in _ERROR_KINDS if isinstance(e, cls)), "ERROR")
    click.echo(f"Error [{kind}]: {e}", err=True)
    raise SystemExit(1)


def _echo_org(org: Organization) -> None:
    click.echo(json.dumps(org.to_dict(), indent=2))


@click.group()
@click.option("--database-url", envvar="DATABASE_URL", default=None, help="Postgres DSN (required)")
@click.pass_context
def cli(ctx: click.Context, database_url: str | None) -> None:
    """HvZ CLI: manage organizations, administrators, moderators and games."""
    ctx.ensure_object(dict)
    ctx.obj["database_url"] = database_url
    bind_invocation(command=ctx.invoked_subcommand)


def _services(ctx: click.Context) -> Services:
    """Services for this invocation.

    Each hvzctl run is a separate process, so state only survives between
    commands in Postgres; without a database URL there is nothing to act on.
    """
    if "services" not in ctx.obj:
        database_url = ctx.obj.get("database_url")
        if not database_url:
            _handle_error(ConfigurationError("no database configured; pass --database-url or set DATABASE_URL"))
        services = create_services(database_url)
        ctx.call_on_close(services.close)
        ctx.obj["services"] = services
    return ctx.obj["services"]


# --- Users ---

@cli.group()
def users() -> None:
    """Manage users known to the platform."""
    pass


@users.command("add")
@click.argument("user_id")
@click.option("--name", default="")
@click.option("--email", default="")
@click.pass_context
def users_add(ctx: click.Context, user_id: str, name: str, email: str) -> None:
    """Register a user."""
    try:
        user = _services(ctx).users.register(user_id, name=name, email=email)
        click.echo(json.dumps(user.to_dict(), indent=2))
    except (HvzError, ValidationError) as e:
        _handle_error(e)


# --- Organizations ---

@cli.group()
def orgs() -> None:
    """Manage organizations."""
    pass


@orgs.command("create")
@click.argument("name")
@click.argument("url")
@click.option("--creator", required=True, help="User id of the creating user")
@click.pass_context
def orgs_create(ctx: click.Context, name: str, url: str, creator: str) -> None:
    """Create an organization owned by CREATOR."""
    try:
        _echo_org(_services(ctx).orgs.create_org(name, url, creator))
    except (HvzError, ValidationError) as e:
        _handle_error(e)


@orgs.command("show")
@click.argument("key")
@click.option("--by", "field", default="id", type=click.Choice(["id", "url", "name"]))
@click.pass_context
def orgs_show(ctx: click.Context, key: str, field: str) -> None:
    """Show an organization by id, url or name."""
    svc = _services(ctx).orgs
    lookup = {"id": svc.get_by_id, "url": svc.get_by_url, "name": svc.get_by_name}[field]
    try:
        _echo_org(lookup(key))
    except HvzError as e:
        _handle_error(e)


@orgs.command("owned")
@click.argument("owner_id")
@click.pass_context
def orgs_owned(ctx: click.Context, owner_id: str) -> None:
    """List organizations owned by a user."""
    for org in _services(ctx).orgs.list_owned_by(owner_id):
        click.echo(f"{org.org_id}\t{org.url}\t{org.name}")


@orgs.command("set-owner")
@click.argument("org_id")
@click.argument("user_id")
@click.pass_context
def orgs_set_owner(ctx: click.Context, org_id: str, user_id: str) -> None:
    """Transfer ownership to an existing administrator."""
    try:
        _echo_org(_services(ctx).orgs.set_owner(org_id, user_id))
    except HvzError as e:
        _handle_error(e)


# --- Administrators ---

@cli.group()
def admins() -> None:
    """Manage organization administrators."""
    pass


@admins.command("list")
@click.argument("org_id")
@click.pass_context
def admins_list(ctx: click.Context, org_id: str) -> None:
    try:
        for user_id in sorted(_services(ctx).orgs.get_admins(org_id)):
            click.echo(user_id)
    except HvzError as e:
        _handle_error(e)


@admins.command("add")
@click.argument("org_id")
@click.argument("user_id")
@click.pass_context
def admins_add(ctx: click.Context, org_id: str, user_id: str) -> None:
    try:
        _echo_org(_services(ctx).orgs.add_admin(org_id, user_id))
    except HvzError as e:
        _handle_error(e)


@admins.command("remove")
@click.argument("org_id")
@click.argument("user_id")
@click.pass_context
def admins_remove(ctx: click.Context, org_id: str, user_id: str) -> None:
    try:
        _echo_org(_services(ctx).orgs.remove_admin(org_id, user_id))
    except HvzError as e:
        _handle_error(e)


# --- Moderators ---

@cli.group()
def mods() -> None:
    """Manage organization moderators."""
    pass


@mods.command("list")
@click.argument("org_id")
@click.pass_context
def mods_list(ctx: click.Context, org_id: str) -> None:
    try:
        for user_id in sorted(_services(ctx).orgs.get_moderators(org_id)):
            click.echo(user_id)
    except HvzError as e:
        _handle_error(e)


@mods.command("add")
@click.argument("org_id")
@click.argument("user_id")
@click.pass_context
def mods_add(ctx: click.Context, org_id: str, user_id: str) -> None:
    try:
        _echo_org(_services(ctx).orgs.add_moderator(org_id, user_id))
    except HvzError as e:
        _handle_error(e)


@mods.command("remove")
@click.argument("org_id")
@click.argument("user_id")
@click.pass_context
def mods_remove(ctx: click.Context, org_id: str, user_id: str) -> None:
    try:
        _echo_org(_services(ctx).orgs.remove_moderator(org_id, user_id))
    except HvzError as e:
        _handle_error(e)


# --- Games ---

@cli.group()
def games() -> None:
    """Start and inspect an organization's games."""
    pass


@games.command("create")
@click.argument("org_id")
@click.argument("name")
@click.option("--as", "requester", required=True, help="User id of the requesting administrator")
@click.pass_context
def games_create(ctx: click.Context, org_id: str, name: str, requester: str) -> None:
    """Create a game and make it the org's active game."""
    try:
        game = _services(ctx).orgs.create_game(name, requester, org_id)
        click.echo(json.dumps(game.to_dict(), indent=2))
    except (HvzError, ValidationError) as e:
        _handle_error(e)


@games.command("active")
@click.argument("org_id")
@click.pass_context
def games_active(ctx: click.Context, org_id: str) -> None:
    """Show the org's active game."""
    try:
        game = _services(ctx).orgs.find_active_game(org_id)
    except HvzError as e:
        _handle_error(e)
    click.echo(json.dumps(game.to_dict(), indent=2) if game else "no active game")


@games.command("end")
@click.argument("org_id")
@click.pass_context
def games_end(ctx: click.Context, org_id: str) -> None:
    """Clear the org's active game so a new one can be created."""
    try:
        _echo_org(_services(ctx).orgs.clear_active_game(org_id))
    except HvzError as e:
        _handle_error(e)


def main() -> None:
    configure_logging(os.environ.get("HVZ_LOG_LEVEL", "INFO"))
    cli()


if __name__ == "__main__":
    main()
