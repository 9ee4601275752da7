"""Registry bootstrap, inspection, and bulk loading CLI commands."""

import asyncio
from pathlib import Path  # noqa: TC003 - Typer needs Path at runtime

import typer

from votesmart_api.cli.token_cmd import validate_account_id
from votesmart_api.schemas.snapshot import RegistrySnapshot

registry_app = typer.Typer()

# Referenced entities load before the entities that reference them.
_LOAD_ORDER = ("parties", "campaigns", "regions", "districts", "candidates", "recommendations")


@registry_app.command("init")
def init_registry(
    admin: str = typer.Option(..., "--admin", help="Master account id", callback=validate_account_id),
) -> None:
    """Initialize the registry with ADMIN as the master account."""
    asyncio.run(_init_registry(admin))


async def _init_registry(admin: str) -> None:
    from votesmart_api.core.config import get_settings
    from votesmart_api.core.database import registry_session
    from votesmart_api.services.access_service import RegistryAlreadyInitializedError, initialize_registry

    try:
        async with registry_session(get_settings()) as session:
            state = await initialize_registry(session, caller_id=admin, admin_id=admin)
    except RegistryAlreadyInitializedError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    typer.echo(f"Registry initialized with master account '{state.master_account_id}'")


@registry_app.command("show")
def show_registry() -> None:
    """Show the master account and the size of each table."""
    asyncio.run(_show_registry())


async def _show_registry() -> None:
    from votesmart_api.core.config import get_settings
    from votesmart_api.core.database import registry_session
    from votesmart_api.services.access_service import get_master_account_id
    from votesmart_api.services.registry_store import (
        campaign_table,
        candidate_table,
        district_table,
        party_table,
        region_table,
    )

    async with registry_session(get_settings()) as session:
        master = await get_master_account_id(session)
        typer.echo(f"Master account: {master or '(not initialized)'}")
        tables = {
            "parties": party_table(session),
            "campaigns": campaign_table(session),
            "regions": region_table(session),
            "districts": district_table(session),
            "candidates": candidate_table(session),
        }
        for name, table in tables.items():
            typer.echo(f"{name:<12} {await table.count():>8}")


@registry_app.command("load")
def load_registry(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON snapshot file"),
    caller: str = typer.Option(..., "--caller", help="Account performing the load", callback=validate_account_id),
) -> None:
    """Bulk-load a JSON snapshot through the admin-gated add operations.

    Each section is committed separately. Reloading the same file is safe:
    every entry simply overwrites itself.
    """
    from pydantic import ValidationError

    try:
        snapshot = RegistrySnapshot.model_validate_json(path.read_bytes())
    except ValidationError as e:
        typer.echo(f"Error: invalid snapshot {path}:\n{e}", err=True)
        raise typer.Exit(code=1) from e
    asyncio.run(_load_registry(snapshot, caller))


async def _load_registry(snapshot: RegistrySnapshot, caller: str) -> None:
    from loguru import logger

    from votesmart_api.core.config import get_settings
    from votesmart_api.core.database import registry_session
    from votesmart_api.services import directory_service, recommendation_service
    from votesmart_api.services.access_service import UnauthorizedError

    try:
        async with registry_session(get_settings()) as session:
            for section in _LOAD_ORDER:
                entries = getattr(snapshot, section)
                if not entries:
                    continue
                if section == "campaigns":
                    for campaign_id, title in entries:
                        await directory_service.add_campaign(
                            session, caller_id=caller, campaign_id=campaign_id, title=title
                        )
                    count = len(entries)
                elif section == "recommendations":
                    count = await recommendation_service.add_recommendations(
                        session, caller_id=caller, recommendations=entries
                    )
                else:
                    add = getattr(directory_service, f"add_{section}")
                    count = await add(session, caller_id=caller, **{section: entries})
                logger.info(f"Loaded {count} {section}")
                typer.echo(f"{section:<16} {count:>8}")
    except UnauthorizedError as e:
        typer.echo(f"Error: '{caller}' is not the master account", err=True)
        raise typer.Exit(code=1) from e
