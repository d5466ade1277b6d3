"""Registry reconciliation.

Maps the readings of a poll cycle onto entries of the host's device
registry: create on first sighting, update on every sighting, prune what
a completed cycle did not see.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from pyacurite._constants import (
    DEFAULT_BATTERY_LOW_THRESHOLD,
    HUMIDITY_SENSOR,
    MANUFACTURER,
    TEMPERATURE_SENSOR,
)
from pyacurite.exceptions import AcuriteValueParseError
from pyacurite.ingestion.normalize import safe_float
from pyacurite.ingestion.readings import build_display_name, identity_key, parse_reading_value
from pyacurite.models.reading import SensorReading
from pyacurite.state.change import ChangeDetector

_logger = logging.getLogger(__name__)

RegistryHandle = Any
"""Opaque handle owned by the host registry."""


class Channel(enum.StrEnum):
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    ACTIVE = "active"
    """Whether the last value of the entry could be used."""


_SENSOR_CHANNELS: dict[str, Channel] = {
    TEMPERATURE_SENSOR: Channel.TEMPERATURE,
    HUMIDITY_SENSOR: Channel.HUMIDITY,
}


class DeviceRegistry(Protocol):
    """Host-side store of device entries."""

    def upsert(self, key: str, display_name: str) -> RegistryHandle:
        ...

    def remove(self, handle: RegistryHandle) -> None:
        ...


class CharacteristicSink(Protocol):
    """Host-side receiver of per-entry values and metadata."""

    def set_channel_value(self, handle: RegistryHandle, channel: Channel, value: float | bool) -> None:
        ...

    def set_metadata(
        self,
        handle: RegistryHandle,
        manufacturer: str,
        model: str,
        serial: str,
        display_name: str,
    ) -> None:
        ...

    def set_battery(self, handle: RegistryHandle, level: float, is_low: bool) -> None:
        ...


class RegistryReconciler:
    """Keeps the host registry in line with the readings of each poll cycle.

    A cycle is ``begin_cycle()``, one or more ``apply()`` calls (one per
    hub), then ``finish_cycle()``. A cycle that is abandoned halfway never
    reaches ``finish_cycle()`` and therefore prunes nothing.
    """

    def __init__(
        self,
        registry: DeviceRegistry,
        sink: CharacteristicSink,
        *,
        change_detector: ChangeDetector | None = None,
        battery_low_threshold: float = DEFAULT_BATTERY_LOW_THRESHOLD,
        name_overrides: Mapping[str, str] | None = None,
        manufacturer: str = MANUFACTURER,
    ) -> None:
        self._registry = registry
        self._sink = sink
        self._changes = change_detector if change_detector is not None else ChangeDetector()
        self._battery_low_threshold = battery_low_threshold
        self._name_overrides = dict(name_overrides or {})
        self._manufacturer = manufacturer
        self._handles: dict[str, RegistryHandle] = {}
        self._seen: set[str] = set()
        self._unsupported_reported: set[str] = set()

    @property
    def keys(self) -> frozenset[str]:
        return frozenset(self._handles)

    def handle_for(self, key: str) -> RegistryHandle | None:
        return self._handles.get(key)

    def adopt(self, key: str, handle: RegistryHandle) -> None:
        """Take over an entry the host restored from an earlier run.

        It is kept if the next completed cycle sees *key*, otherwise pruned.
        """
        if key in self._handles:
            _logger.debug("Ignoring adopted duplicate for key %s", key)
            return
        self._handles[key] = handle

    def begin_cycle(self) -> None:
        self._seen = set()

    def apply(self, readings: Iterable[SensorReading]) -> None:
        for reading in readings:
            self._apply_reading(reading)

    def finish_cycle(self) -> list[str]:
        """Remove every known entry not seen since :meth:`begin_cycle`.

        Returns the pruned keys.
        """
        stale = [key for key in self._handles if key not in self._seen]
        for key in stale:
            handle = self._handles.pop(key)
            self._registry.remove(handle)
            _logger.info("Removed registry entry %s (not reported by the API anymore)", key)
        return stale

    def reconcile(self, readings: Iterable[SensorReading]) -> list[str]:
        """Run a whole single-batch cycle."""
        self.begin_cycle()
        self.apply(readings)
        return self.finish_cycle()

    def _apply_reading(self, reading: SensorReading) -> None:
        key = identity_key(reading)
        display_name = build_display_name(reading, self._name_overrides)

        handle = self._handles.get(key)
        created = handle is None
        if handle is None:
            handle = self._registry.upsert(key, display_name)
            self._handles[key] = handle
            _logger.info("Registered %s as %r", key, display_name)
        self._seen.add(key)

        self._update_channel(key, handle, reading, created=created)

        self._sink.set_metadata(
            handle,
            self._manufacturer,
            reading.model.description,
            str(reading.model.id),
            display_name,
        )

        if reading.battery_level is not None:
            level = safe_float(reading.battery_level)
            if level is not None:
                self._sink.set_battery(handle, level, level <= self._battery_low_threshold)

    def _update_channel(self, key: str, handle: RegistryHandle, reading: SensorReading, *, created: bool) -> None:
        channel = _SENSOR_CHANNELS.get(reading.sensor_name)
        if channel is None:
            if key not in self._unsupported_reported:
                self._unsupported_reported.add(key)
                _logger.info(
                    "Unsupported sensor type %r (%s); keeping entry without a value channel",
                    reading.sensor_name,
                    reading.sensor_code,
                )
            return

        try:
            value = parse_reading_value(reading)
        except AcuriteValueParseError as exc:
            _logger.warning("Skipping %s update: %s", channel.value, exc)
            self._sink.set_channel_value(handle, Channel.ACTIVE, False)
            return

        # A fresh handle starts empty even when the cache already knows the key.
        if created:
            self._changes.record(key, value)
            self._sink.set_channel_value(handle, channel, value)
        elif self._changes.should_propagate(key, value):
            self._sink.set_channel_value(handle, channel, value)
        self._sink.set_channel_value(handle, Channel.ACTIVE, True)
