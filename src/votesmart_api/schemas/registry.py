"""Pydantic v2 schemas for registry bootstrap and master account management."""

from pydantic import BaseModel, Field

from votesmart_api.schemas.common import AccountId


class InitRegistryRequest(BaseModel):
    """Bootstrap request. Without ``admin_id`` the caller becomes master."""

    admin_id: AccountId | None = None


class MasterAccountRequest(BaseModel):
    """Hand the master role to another account."""

    admin_id: AccountId


class MasterAccountResponse(BaseModel):
    """Current master account, ``None`` before initialization."""

    master_account_id: str | None = Field(description="Account allowed to mutate the registry")
