"""Caller token CLI commands."""

import typer
from pydantic import TypeAdapter, ValidationError

from votesmart_api.schemas.common import AccountId

token_app = typer.Typer()

_account_id_adapter = TypeAdapter(AccountId)


def validate_account_id(value: str) -> str:
    """Typer callback rejecting malformed account ids."""
    try:
        return _account_id_adapter.validate_python(value)
    except ValidationError as e:
        raise typer.BadParameter(f"Invalid account id: {value!r}") from e


@token_app.command("issue")
def issue_token(
    account_id: str = typer.Argument(..., help="Account id the token identifies", callback=validate_account_id),
    expires_minutes: int | None = typer.Option(
        None,
        "--expires-minutes",
        min=1,
        help="Token lifetime (default: JWT_ACCESS_TOKEN_EXPIRE_MINUTES)",
    ),
) -> None:
    """Print a bearer token for ACCOUNT_ID."""
    from votesmart_api.core.config import get_settings
    from votesmart_api.core.security import create_access_token

    settings = get_settings()
    token = create_access_token(
        account_id,
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=expires_minutes or settings.jwt_access_token_expire_minutes,
    )
    typer.echo(token)
