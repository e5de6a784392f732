"""Device handler tying polling, caching and commands together."""

from __future__ import annotations

import asyncio
import logging
from numbers import Real
from typing import Any

import httpx

from .api import DingzApiClient
from .cache import ExpiringCache
from .commands import OnOffType, RefreshType
from .config import DingzConfig
from .const import (
    CHANNEL_LED,
    CHANNEL_TARGET_TEMPERATURE,
    REPOLL_DELAY,
    STATE_CACHE_TTL,
    THERMOSTAT_UPDATE_POLL,
)
from .exceptions import DingzCommunicationError, DingzError
from .models import HsvColor, RequestParameters, StateSnapshot
from .reconciler import StateReconciler
from .scheduler import PollScheduler
from .state import DingzState, ThingStatus, ThingStatusDetail

_LOGGER = logging.getLogger(__name__)


class DingzHandler:
    """Own the polling lifecycle and command handling for one device.

    The scheduled poll and inbound commands share one expiring cache, so
    bursts of refreshes never issue more than one device fetch at a time.
    """

    def __init__(
        self,
        config: DingzConfig,
        http_client: httpx.AsyncClient,
        *,
        state: DingzState | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Create the handler; nothing is scheduled until ``initialize``."""

        self.config = config
        self.state = state or DingzState()
        self._logger = logger or _LOGGER
        self._client = DingzApiClient(http_client, config.base_url)
        self._reconciler = StateReconciler(self.state, config.features)
        self._cache: ExpiringCache[StateSnapshot] = ExpiringCache(
            STATE_CACHE_TTL, self._async_fetch_state
        )
        self._scheduler = PollScheduler(
            self.async_refresh,
            config.refresh_interval,
            logger=self._logger,
        )
        self._repoll_handles: set[asyncio.TimerHandle] = set()
        self._pending_tasks: set[asyncio.Task[Any]] = set()
        self._disposed = False

    @property
    def client(self) -> DingzApiClient:
        """Return the transport bound to this device."""

        return self._client

    @property
    def cache(self) -> ExpiringCache[StateSnapshot]:
        """Return the shared state cache."""

        return self._cache

    @property
    def scheduler(self) -> PollScheduler:
        """Return the poll scheduler."""

        return self._scheduler

    def initialize(self) -> None:
        """Start polling; the first poll runs without delay.

        Must be called from within the running event loop.
        """

        self._logger.info(
            "Initialising dingz %s (refresh every %ss)",
            self.config.hostname,
            self.config.refresh,
        )
        self._disposed = False
        self.state.update_status(ThingStatus.UNKNOWN)
        self._scheduler.start()

    def dispose(self) -> None:
        """Stop polling and drop pending work; safe to call twice."""

        self._disposed = True
        self._scheduler.cancel()
        for handle in self._repoll_handles:
            handle.cancel()
        self._repoll_handles.clear()
        for task in self._pending_tasks:
            task.cancel()
        self._pending_tasks.clear()
        self._cache.invalidate()

    async def async_refresh(self) -> None:
        """Handle a refresh command, as issued by the poll timer."""

        await self.async_handle_command(None, RefreshType.REFRESH)

    async def async_handle_command(self, channel: str | None, command: Any) -> None:
        """Handle a platform command addressed to ``channel``.

        Device errors are logged and never raised to the caller. The work
        runs as a tracked task, so ``dispose`` interrupts it.
        """

        if self._disposed:
            return
        task = asyncio.get_running_loop().create_task(
            self._async_dispatch(channel, command)
        )
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)
        try:
            await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            self._logger.debug(
                "Command %s on %s interrupted by dispose", command, channel
            )

    async def _async_dispatch(self, channel: str | None, command: Any) -> None:
        try:
            if isinstance(command, RefreshType):
                await self.async_poll_device()
            elif channel == CHANNEL_TARGET_TEMPERATURE:
                if isinstance(command, Real) and not isinstance(command, bool):
                    await self._async_set_target_temperature(float(command))
            elif channel == CHANNEL_LED:
                parameters = self._build_led_parameters(command)
                if parameters is not None:
                    await self._async_set_led(parameters)
        except DingzError as err:
            self._logger.warning(
                "Error while handling command %s on %s: %s", command, channel, err
            )

    async def async_poll_device(self) -> None:
        """Reconcile the cached (or freshly fetched) device state."""

        snapshot = await self._cache.async_get_value()
        if snapshot is None:
            return
        self._reconciler.apply(snapshot)

    async def _async_fetch_state(self) -> StateSnapshot | None:
        """Produce a fresh snapshot, converting failures into status changes."""

        try:
            if self.config.combined_state:
                snapshot = await self._client.async_get_state()
            else:
                snapshot = StateSnapshot(
                    sensors=await self._client.async_get_sensors(),
                    thermostat=await self._client.async_get_thermostat(),
                )
        except DingzCommunicationError as err:
            self.state.update_status(
                ThingStatus.OFFLINE, ThingStatusDetail.CONFIGURATION_ERROR, str(err)
            )
            return None
        self.state.update_status(ThingStatus.ONLINE)
        return snapshot

    async def _async_set_target_temperature(self, value: float) -> None:
        report = await self._client.async_set_target_temperature(value)
        if self.config.thermostat_update == THERMOSTAT_UPDATE_POLL:
            self._schedule_repoll()
            return
        if report is not None:
            self._reconciler.apply_thermostat(report)

    async def _async_set_led(self, parameters: RequestParameters) -> None:
        report = await self._client.async_set_led(parameters)
        if report is not None:
            self._reconciler.apply_set_led(report)

    @staticmethod
    def _build_led_parameters(command: Any) -> RequestParameters | None:
        """Translate an LED command into the form body of ``led/set``."""

        if isinstance(command, HsvColor):
            action = "on" if int(command.brightness) > 0 else "off"
            return (
                RequestParameters.create("action", action)
                .add("color", command.to_wire())
                .add("mode", "hsv")
            )
        if isinstance(command, OnOffType):
            return RequestParameters.create("action", command.value)
        return None

    def _schedule_repoll(self) -> None:
        """Poll again shortly, once the device settled the new setting."""

        if self._disposed:
            return
        loop = asyncio.get_running_loop()

        def _fire() -> None:
            self._repoll_handles.discard(handle)
            task = loop.create_task(self.async_refresh())
            self._pending_tasks.add(task)
            task.add_done_callback(self._pending_tasks.discard)

        handle = loop.call_later(REPOLL_DELAY.total_seconds(), _fire)
        self._repoll_handles.add(handle)
