"""Login response model."""

from __future__ import annotations

from pydantic import Field

from pyacurite.models._base import AcuriteBaseModel


class AccountUser(AcuriteBaseModel):
    account_id: int | str | None = None


class LoginUser(AcuriteBaseModel):
    account_users: list[AccountUser] = Field(default_factory=list)


class LoginResponse(AcuriteBaseModel):
    """Body of a successful ``POST /users/login``."""

    token_id: str
    user: LoginUser = Field(default_factory=LoginUser)

    @property
    def account_id(self) -> str | None:
        """Account id of the first ``account_users`` entry, if any."""
        if not self.user.account_users:
            return None
        value = self.user.account_users[0].account_id
        return str(value) if value else None
