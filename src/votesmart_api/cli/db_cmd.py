"""Schema migration commands for the registry database.

Thin wrappers over Alembic's command API. The database URL and schema come
from the application settings (see ``alembic/env.py``), not from the ini file.
"""

from pathlib import Path

import typer
from loguru import logger

db_app = typer.Typer()


def _alembic_config(ini_path: Path):  # type: ignore[no-untyped-def]
    from alembic.config import Config

    if not ini_path.is_file():
        typer.echo(f"Error: {ini_path} not found; run from the project root or pass --config", err=True)
        raise typer.Exit(code=1)
    return Config(str(ini_path))


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
    sql: bool = typer.Option(False, "--sql", help="Print the migration SQL instead of running it"),
    config: Path = typer.Option(Path("alembic.ini"), "--config", "-c", help="Path to alembic.ini"),
) -> None:
    """Create or upgrade the registry tables up to REVISION."""
    from alembic import command

    logger.info(f"Upgrading registry schema to {revision}")
    command.upgrade(_alembic_config(config), revision, sql=sql)
    if not sql:
        logger.info("Registry schema upgrade complete")


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Target revision"),
    config: Path = typer.Option(Path("alembic.ini"), "--config", "-c", help="Path to alembic.ini"),
) -> None:
    """Roll the registry schema back to REVISION."""
    from alembic import command

    logger.info(f"Downgrading registry schema to {revision}")
    command.downgrade(_alembic_config(config), revision)
    logger.info("Registry schema downgrade complete")


@db_app.command()
def current(config: Path = typer.Option(Path("alembic.ini"), "--config", "-c", help="Path to alembic.ini")) -> None:
    """Show the revision the database is at."""
    from alembic import command

    command.current(_alembic_config(config), verbose=True)


@db_app.command()
def history(config: Path = typer.Option(Path("alembic.ini"), "--config", "-c", help="Path to alembic.ini")) -> None:
    """List all migration revisions."""
    from alembic import command

    command.history(_alembic_config(config))
