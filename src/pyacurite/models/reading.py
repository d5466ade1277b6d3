"""Normalized sensor reading model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pyacurite.models.device import DeviceModel


class SensorReading(BaseModel):
    """One (device, sensor) pair that survived the allow-list filters.

    Device-level fields (name, model, battery level) are copied onto every
    reading of that device. Rebuilt on every poll cycle.
    """

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    id: int | str
    device_name: str
    model: DeviceModel
    battery_level: float | str | None = None
    sensor_name: str
    sensor_code: str | None = None
    last_reading_value: float | str | None = None
    chart_unit: str | None = None
