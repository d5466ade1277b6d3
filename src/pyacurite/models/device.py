"""Device and sensor payload models."""

from __future__ import annotations

from pydantic import Field

from pyacurite.models._base import AcuriteBaseModel


class DeviceModel(AcuriteBaseModel):
    """Hardware model block of a device (``{"id", "description"}``)."""

    id: int | str = ""
    description: str = ""


class RawSensor(AcuriteBaseModel):
    """A measurement channel as returned by the hub-detail endpoint."""

    id: int | str
    sensor_name: str = ""
    sensor_code: str = ""
    last_reading_value: float | str | None = None
    """Latest value; the API sends numbers or numeric strings."""
    chart_unit: str | None = None
    """Display unit, e.g. ``"F"``, ``"C"`` or ``"%"``."""


class RawDevice(AcuriteBaseModel):
    """A weather-station unit attached to a hub."""

    model_code: str = ""
    name: str = ""
    model: DeviceModel = Field(default_factory=DeviceModel)
    battery_level: float | str | None = None
    sensors: list[RawSensor] = Field(default_factory=list)


class HubDetailResponse(AcuriteBaseModel):
    devices: list[RawDevice] = Field(default_factory=list)
