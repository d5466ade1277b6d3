"""Client configuration for pyacurite."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyacurite._constants import (
    BASE_URL,
    DEFAULT_BATTERY_LOW_THRESHOLD,
    DEFAULT_DEVICE_CODES,
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SENSOR_CODES,
    MANUFACTURER,
)
from pyacurite.exceptions import AcuriteConfigError


def _env_list(value: str | None) -> tuple[str, ...] | None:
    if value is None:
        return None
    items = tuple(part.strip() for part in value.split(",") if part.strip())
    return items or None


def _codes_or_default(value: Any, default: tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(value, (list, tuple)) and value:
        return tuple(str(item) for item in value)
    return default


def _number_or_default(data: Mapping[str, Any], key: str, default: float) -> float:
    value = data.get(key)
    if not value:
        return default
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise AcuriteConfigError(f"{key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class Credentials:
    """Login credentials for the MyAcuRite account."""

    email: str
    password: str


@dataclasses.dataclass(frozen=True)
class AcuriteConfig:
    """Poller configuration.

    Parameters
    ----------
    email : str
        MyAcuRite account email.
    password : str
        MyAcuRite account password.
    account_id : str or None
        Manual account id override. When unset the id is taken from the
        first ``account_users`` entry of the login response.
    refresh_interval_seconds : float
        Nominal delay between two successful poll cycles.
    supported_device_codes : tuple[str, ...]
        Device model codes to keep (e.g. ``"5in1WS"``).
    supported_sensor_codes : tuple[str, ...]
        Sensor codes to keep within kept devices.
    battery_low_threshold : float
        Battery levels at or below this value are reported as low.
    name_overrides : Mapping[str, str]
        Display names keyed by sensor id or ``"<deviceName>:<sensorName>"``.
    base_url : str
        API base URL.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    manufacturer : str
        Manufacturer string written to registry metadata.
    """

    email: str
    password: str
    account_id: str | None = None
    refresh_interval_seconds: float = DEFAULT_REFRESH_INTERVAL_SECONDS
    supported_device_codes: tuple[str, ...] = DEFAULT_DEVICE_CODES
    supported_sensor_codes: tuple[str, ...] = DEFAULT_SENSOR_CODES
    battery_low_threshold: float = DEFAULT_BATTERY_LOW_THRESHOLD
    name_overrides: Mapping[str, str] = dataclasses.field(default_factory=dict)
    base_url: str = BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    manufacturer: str = MANUFACTURER

    @property
    def credentials(self) -> Credentials:
        return Credentials(email=self.email, password=self.password)

    def validate(self) -> None:
        """Raise :class:`AcuriteConfigError` when the configuration is unusable."""
        missing = [name for name in ("email", "password") if not getattr(self, name)]
        if missing:
            raise AcuriteConfigError(f"Missing required config: {' and '.join(missing)}")
        if self.refresh_interval_seconds <= 0:
            raise AcuriteConfigError(
                f"refresh_interval_seconds must be positive, got {self.refresh_interval_seconds}"
            )
        if self.request_timeout <= 0:
            raise AcuriteConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> AcuriteConfig:
        """Create configuration from a host platform config block.

        Keys follow the host's camelCase convention (``accountId``,
        ``refreshIntervalSeconds`` ...). Missing, empty or zero values fall
        back to the defaults.
        """
        account_id = data.get("accountId")
        overrides = data.get("nameOverrides")
        return cls(
            email=str(data.get("email") or ""),
            password=str(data.get("password") or ""),
            account_id=str(account_id) if account_id else None,
            refresh_interval_seconds=_number_or_default(
                data, "refreshIntervalSeconds", DEFAULT_REFRESH_INTERVAL_SECONDS
            ),
            supported_device_codes=_codes_or_default(data.get("supportedDeviceCodes"), DEFAULT_DEVICE_CODES),
            supported_sensor_codes=_codes_or_default(data.get("supportedSensorCodes"), DEFAULT_SENSOR_CODES),
            battery_low_threshold=_number_or_default(data, "batteryLowThreshold", DEFAULT_BATTERY_LOW_THRESHOLD),
            name_overrides={str(k): str(v) for k, v in overrides.items()} if isinstance(overrides, Mapping) else {},
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> AcuriteConfig:
        """Create configuration from ``ACURITE_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "ACURITE_EMAIL": "email",
            "ACURITE_PASSWORD": "password",
            "ACURITE_ACCOUNT_ID": "account_id",
            "ACURITE_BASE_URL": "base_url",
        }
        config_kwargs: dict[str, Any] = {"email": "", "password": ""}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "ACURITE_REFRESH_INTERVAL": "refresh_interval_seconds",
            "ACURITE_REQUEST_TIMEOUT": "request_timeout",
            "ACURITE_BATTERY_LOW_THRESHOLD": "battery_low_threshold",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                try:
                    config_kwargs[field_name] = float(val)
                except ValueError as exc:
                    raise AcuriteConfigError(f"{env_key} must be numeric, got {val!r}") from exc

        device_codes = _env_list(env.get("ACURITE_DEVICE_CODES"))
        if device_codes is not None:
            config_kwargs["supported_device_codes"] = device_codes
        sensor_codes = _env_list(env.get("ACURITE_SENSOR_CODES"))
        if sensor_codes is not None:
            config_kwargs["supported_sensor_codes"] = sensor_codes

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
