"""Hub models."""

from __future__ import annotations

from pydantic import Field

from pyacurite.models._base import AcuriteBaseModel


class HubSummary(AcuriteBaseModel):
    """A hub listed under ``/accounts/{id}/dashboard/hubs``.

    Only the id is used; the rest of the payload is kept in ``raw``.
    """

    id: int | str
    name: str | None = None


class HubListResponse(AcuriteBaseModel):
    account_hubs: list[HubSummary] = Field(default_factory=list)
