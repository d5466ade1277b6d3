"""Data models for MyAcuRite API payloads."""

from pyacurite.models._base import AcuriteBaseModel
from pyacurite.models.device import DeviceModel, HubDetailResponse, RawDevice, RawSensor
from pyacurite.models.hub import HubListResponse, HubSummary
from pyacurite.models.login import LoginResponse
from pyacurite.models.reading import SensorReading

__all__ = [
    "AcuriteBaseModel",
    "DeviceModel",
    "HubDetailResponse",
    "HubListResponse",
    "HubSummary",
    "LoginResponse",
    "RawDevice",
    "RawSensor",
    "SensorReading",
]
