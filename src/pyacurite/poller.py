"""Poll scheduling.

:class:`PollScheduler` runs a poll cycle on a timer with exponential
backoff after failures. :class:`WeatherStationPoller` wires one cycle end to
end: hubs → devices → readings → registry.

Cycles run inside a single task, one after the other, so two cycles can
never overlap. The only cross-cycle state (session, last-value cache,
key → handle map) is therefore touched from one timeline only.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from pyacurite._constants import MAX_BACKOFF_FACTOR
from pyacurite.client import AcuriteClient
from pyacurite.config import AcuriteConfig
from pyacurite.exceptions import AcuriteConfigError, AcuriteError
from pyacurite.ingestion.readings import map_devices_to_readings
from pyacurite.state.registry import CharacteristicSink, DeviceRegistry, RegistryReconciler

_logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[Any]]


class SchedulerState(enum.StrEnum):
    IDLE = "idle"
    POLLING = "polling"
    BACKOFF_WAIT = "backoff_wait"
    STOPPED = "stopped"


def compute_backoff(interval: float, failures: int, *, max_factor: float = MAX_BACKOFF_FACTOR) -> float:
    """Delay before the next cycle after *failures* consecutive failures.

    ``min(interval * 2**failures, interval * max_factor)``; the nominal
    *interval* when there were no failures.
    """
    if failures <= 0:
        return interval
    return min(interval * 2**failures, interval * max_factor)


class PollScheduler:
    """Runs *cycle* forever: poll, settle, wait, poll again.

    State machine::

        IDLE --start--> POLLING --success--> IDLE --interval--> POLLING
                                --failure--> BACKOFF_WAIT --backoff--> POLLING

    Parameters
    ----------
    cycle : callable
        Coroutine function running one complete poll cycle.
    interval : float
        Nominal delay in seconds after a successful cycle.
    sleep : callable
        Delay primitive; ``asyncio.sleep`` unless a test drives the clock.
    """

    def __init__(
        self,
        cycle: Callable[[], Awaitable[None]],
        *,
        interval: float,
        sleep: SleepFn = asyncio.sleep,
        max_backoff_factor: float = MAX_BACKOFF_FACTOR,
    ) -> None:
        self._cycle = cycle
        self._interval = interval
        self._sleep = sleep
        self._max_backoff_factor = max_backoff_factor
        self._state = SchedulerState.IDLE
        self._failure_count = 0
        self._next_delay = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    @property
    def next_delay(self) -> float:
        return self._next_delay

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> float:
        """Run one cycle, settle the state and return the delay until the next."""
        if self._state is SchedulerState.POLLING:
            raise RuntimeError("A poll cycle is already in flight")
        self._state = SchedulerState.POLLING
        try:
            await self._cycle()
        except AcuriteError as exc:
            return self._record_failure(exc)
        except Exception as exc:  # noqa: BLE001 - keep polling on unexpected payload bugs
            return self._record_failure(exc, unexpected=True)

        self._failure_count = 0
        self._next_delay = self._interval
        self._state = SchedulerState.IDLE
        return self._next_delay

    def _record_failure(self, exc: BaseException, *, unexpected: bool = False) -> float:
        self._failure_count += 1
        self._next_delay = compute_backoff(
            self._interval,
            self._failure_count,
            max_factor=self._max_backoff_factor,
        )
        self._state = SchedulerState.BACKOFF_WAIT
        _logger.error(
            "Polling failed (%d in a row), retrying in %ds: %s",
            self._failure_count,
            round(self._next_delay),
            exc,
            exc_info=unexpected,
        )
        return self._next_delay

    async def _run(self) -> None:
        try:
            while True:
                delay = await self.run_once()
                await self._sleep(delay)
        finally:
            self._state = SchedulerState.STOPPED

    def start(self) -> asyncio.Task[None]:
        """Start polling now. Calling it again while running is a no-op."""
        if self._task is not None and not self._task.done():
            return self._task
        self._state = SchedulerState.IDLE
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pyacurite-poll")
        return self._task

    async def stop(self) -> None:
        """Cancel the loop, abandoning an in-flight request, and wait for it."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        self._state = SchedulerState.STOPPED


class WeatherStationPoller:
    """Polls the account and reconciles the host registry.

    Usage::

        async with WeatherStationPoller(config, registry, sink) as poller:
            await poller.start()   # once the host is ready
            ...

    The instance owns its session, last-value cache and key → handle map,
    so several pollers (e.g. one per account) can coexist.
    """

    def __init__(
        self,
        config: AcuriteConfig,
        registry: DeviceRegistry,
        sink: CharacteristicSink,
        *,
        session: aiohttp.ClientSession | None = None,
        client: AcuriteClient | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._config = config
        self._client = client if client is not None else AcuriteClient(config, session=session)
        self._client_entered = False
        self._reconciler = RegistryReconciler(
            registry,
            sink,
            battery_low_threshold=config.battery_low_threshold,
            name_overrides=config.name_overrides,
            manufacturer=config.manufacturer,
        )
        self._scheduler = PollScheduler(
            self.poll_once,
            interval=config.refresh_interval_seconds,
            sleep=sleep,
        )

    @property
    def client(self) -> AcuriteClient:
        return self._client

    @property
    def reconciler(self) -> RegistryReconciler:
        return self._reconciler

    @property
    def scheduler(self) -> PollScheduler:
        return self._scheduler

    async def __aenter__(self) -> WeatherStationPoller:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        """Validate the configuration and begin polling.

        Raises
        ------
        AcuriteConfigError
            If credentials are missing. Polling does not start.
        """
        try:
            self._config.validate()
        except AcuriteConfigError as exc:
            _logger.error("%s. Polling will not start.", exc)
            raise

        if not self._client_entered:
            await self._client.__aenter__()
            self._client_entered = True
        self._scheduler.start()

    async def stop(self) -> None:
        await self._scheduler.stop()
        if self._client_entered:
            self._client_entered = False
            await self._client.__aexit__(None, None, None)

    async def poll_once(self) -> None:
        """Run one cycle: fetch hubs, then devices per hub, and reconcile.

        A failing fetch aborts the cycle. Hubs already applied stay applied,
        but nothing is pruned until a cycle completes.
        """
        hubs = await self._client.list_hubs()
        self._reconciler.begin_cycle()
        readings_count = 0
        for hub in hubs:
            devices = await self._client.get_hub_devices(hub.id)
            readings = map_devices_to_readings(
                devices,
                self._config.supported_device_codes,
                self._config.supported_sensor_codes,
            )
            readings_count += len(readings)
            self._reconciler.apply(readings)
        pruned = self._reconciler.finish_cycle()
        _logger.debug(
            "Poll cycle done: %d hubs, %d readings, %d entries pruned",
            len(hubs),
            readings_count,
            len(pruned),
        )
