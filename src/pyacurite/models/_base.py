"""Base model for MyAcuRite API payloads.

Every payload model inherits from :class:`AcuriteBaseModel` which:

* keeps the vendor's snake_case keys as field names,
* ignores unknown keys (the API adds fields freely),
* stashes the original payload dict in ``raw``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AcuriteBaseModel(BaseModel):
    """Frozen base for API payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        # Vendor fields such as ``model_code`` collide with pydantic's namespace.
        protected_namespaces=(),
    )

    raw: dict[str, Any] = Field(default_factory=dict, repr=False)
    """Original API payload."""

    @model_validator(mode="before")
    @classmethod
    def _stash_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict) or "raw" in values:
            return values
        return {**values, "raw": dict(values)}
