"""pyacurite - Async poller for MyAcuRite weather-station readings."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyacurite")
except PackageNotFoundError:
    __version__ = "0+local"
from pyacurite.client import AcuriteClient
from pyacurite.config import AcuriteConfig, Credentials
from pyacurite.exceptions import (
    AcuriteApiError,
    AcuriteAuthenticationError,
    AcuriteConfigError,
    AcuriteError,
    AcuriteTransportError,
    AcuriteValueParseError,
)
from pyacurite.models import DeviceModel, HubSummary, RawDevice, RawSensor, SensorReading
from pyacurite.poller import PollScheduler, SchedulerState, WeatherStationPoller, compute_backoff
from pyacurite.session import Session, SessionManager
from pyacurite.state.change import ChangeDetector
from pyacurite.state.registry import CharacteristicSink, Channel, DeviceRegistry, RegistryReconciler

__all__ = [
    "__version__",
    "AcuriteApiError",
    "AcuriteAuthenticationError",
    "AcuriteClient",
    "AcuriteConfig",
    "AcuriteConfigError",
    "AcuriteError",
    "AcuriteTransportError",
    "AcuriteValueParseError",
    "ChangeDetector",
    "Channel",
    "CharacteristicSink",
    "Credentials",
    "DeviceModel",
    "DeviceRegistry",
    "HubSummary",
    "PollScheduler",
    "RawDevice",
    "RawSensor",
    "RegistryReconciler",
    "SchedulerState",
    "SensorReading",
    "Session",
    "SessionManager",
    "WeatherStationPoller",
    "compute_backoff",
]
