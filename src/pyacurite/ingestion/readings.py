"""Hub payload → :class:`SensorReading` mapping and per-reading helpers."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping

from pyacurite._constants import FAHRENHEIT_UNIT, TEMPERATURE_SENSOR
from pyacurite.exceptions import AcuriteValueParseError
from pyacurite.ingestion.normalize import fahrenheit_to_celsius, safe_float
from pyacurite.models.device import RawDevice
from pyacurite.models.reading import SensorReading


def map_devices_to_readings(
    devices: Iterable[RawDevice],
    allowed_device_codes: Collection[str],
    allowed_sensor_codes: Collection[str],
) -> list[SensorReading]:
    """Flatten devices into one reading per allowed sensor.

    Devices whose ``model_code`` is not in *allowed_device_codes* are
    dropped, then sensors whose ``sensor_code`` is not in
    *allowed_sensor_codes*. Output order follows input order.
    """
    readings: list[SensorReading] = []
    for device in devices:
        if device.model_code not in allowed_device_codes:
            continue
        for sensor in device.sensors:
            if sensor.sensor_code not in allowed_sensor_codes:
                continue
            readings.append(
                SensorReading(
                    id=sensor.id,
                    device_name=device.name,
                    model=device.model,
                    battery_level=device.battery_level,
                    sensor_name=sensor.sensor_name,
                    sensor_code=sensor.sensor_code,
                    last_reading_value=sensor.last_reading_value,
                    chart_unit=sensor.chart_unit,
                )
            )
    return readings


def identity_key(reading: SensorReading) -> str:
    """Stable registry key for a reading, derived from sensor id and name."""
    return f"{reading.id}:{reading.sensor_name}"


def build_display_name(reading: SensorReading, name_overrides: Mapping[str, str] | None) -> str:
    """Resolve the display name.

    An override keyed by sensor id wins over one keyed by
    ``"<deviceName>:<sensorName>"``; otherwise ``"<deviceName> <sensorName>"``.
    """
    if name_overrides:
        by_id = name_overrides.get(str(reading.id))
        if by_id:
            return by_id
        by_composite = name_overrides.get(f"{reading.device_name}:{reading.sensor_name}")
        if by_composite:
            return by_composite
    return f"{reading.device_name} {reading.sensor_name}"


def parse_reading_value(reading: SensorReading) -> float:
    """Return the reading as a float, temperatures always in Celsius.

    Raises
    ------
    AcuriteValueParseError
        If the value is not numeric.
    """
    value = safe_float(reading.last_reading_value)
    if value is None:
        raise AcuriteValueParseError(
            f"Invalid {reading.sensor_name.lower() or 'sensor'} value {reading.last_reading_value!r} "
            f"for sensor {reading.id}",
            key=identity_key(reading),
            value=reading.last_reading_value,
        )
    if reading.sensor_name == TEMPERATURE_SENSOR and reading.chart_unit == FAHRENHEIT_UNIT:
        return fahrenheit_to_celsius(value)
    return value
