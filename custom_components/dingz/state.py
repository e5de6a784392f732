"""Channel values and device status shared with the platform layer."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

_LOGGER = logging.getLogger(__name__)

StateListener = Callable[[str | None], None]


class ThingStatus(str, Enum):
    """Reachability of the device."""

    UNKNOWN = "unknown"
    ONLINE = "online"
    OFFLINE = "offline"


class ThingStatusDetail(str, Enum):
    """Reason attached to a status transition."""

    NONE = "none"
    CONFIGURATION_ERROR = "configuration_error"


@dataclass(frozen=True, slots=True)
class DeviceStatus:
    """Status, detail and human readable description."""

    status: ThingStatus = ThingStatus.UNKNOWN
    detail: ThingStatusDetail = ThingStatusDetail.NONE
    description: str | None = None


class DingzState:
    """Last written value per channel plus the device status.

    Values are overwritten on every update; no history is kept. Listeners
    receive the channel id of each update, or ``None`` for status changes.
    """

    def __init__(self) -> None:
        """Start with no channel values and an unknown status."""

        self._values: dict[str, Any] = {}
        self._status = DeviceStatus()
        self._listeners: list[StateListener] = []

    @property
    def status(self) -> DeviceStatus:
        """Return the current device status."""

        return self._status

    @property
    def values(self) -> dict[str, Any]:
        """Return a copy of all channel values."""

        return dict(self._values)

    def get(self, channel: str, default: Any = None) -> Any:
        """Return the last value written to ``channel``."""

        return self._values.get(channel, default)

    def update_state(self, channel: str, value: Any) -> None:
        """Store ``value`` for ``channel`` and notify listeners."""

        self._values[channel] = value
        self._notify(channel)

    def update_status(
        self,
        status: ThingStatus,
        detail: ThingStatusDetail = ThingStatusDetail.NONE,
        description: str | None = None,
    ) -> None:
        """Record a status transition, notifying listeners when it changed."""

        next_status = DeviceStatus(status, detail, description)
        if next_status == self._status:
            return
        _LOGGER.debug("Device status changed to %s", next_status)
        self._status = next_status
        self._notify(None)

    def add_listener(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable removing it."""

        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def _notify(self, channel: str | None) -> None:
        for listener in list(self._listeners):
            listener(channel)
