"""Shared entity helpers for the dingz integration."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity, EntityDescription

from .const import DOMAIN
from .handler import DingzHandler
from .models import Measurement
from .state import ThingStatus


class DingzEntity(Entity):
    """Base entity bound to a single dingz channel."""

    _attr_should_poll = False
    _attr_has_entity_name = True

    def __init__(
        self,
        handler: DingzHandler,
        entry_id: str,
        description: EntityDescription,
    ) -> None:
        """Bind the entity to ``description.key`` on ``handler``."""

        self.entity_description = description
        self._handler = handler
        self._channel = description.key
        self._remove_listener: Callable[[], None] | None = None
        self._attr_unique_id = f"{entry_id}-{description.key}"
        self._attr_device_info = DeviceInfo(
            identifiers={(DOMAIN, entry_id)},
            name=f"dingz {handler.config.hostname}",
            manufacturer="Iolo AG",
            model="dingz",
            configuration_url=handler.config.base_url,
        )

    @property
    def channel(self) -> str:
        """Return the channel id this entity mirrors."""

        return self._channel

    @property
    def channel_value(self) -> Any:
        """Return the last value reconciled for the channel."""

        return self._handler.state.get(self._channel)

    @property
    def available(self) -> bool:
        """Entities are available while the device answers polls."""

        return self._handler.state.status.status is ThingStatus.ONLINE

    async def async_added_to_hass(self) -> None:
        """Subscribe to channel and status updates."""

        await super().async_added_to_hass()
        self._remove_listener = self._handler.state.add_listener(
            self._handle_state_update
        )

    async def async_will_remove_from_hass(self) -> None:
        """Detach from the state store."""

        remove = self._remove_listener
        if remove is not None:
            remove()
            self._remove_listener = None
        await super().async_will_remove_from_hass()

    def _handle_state_update(self, channel: str | None) -> None:
        """Write Home Assistant state for our channel or status changes."""

        if channel is not None and channel != self._channel:
            return
        if getattr(self, "hass", None) is not None:
            self.async_write_ha_state()

    async def _async_send_command(self, command: Any) -> None:
        await self._handler.async_handle_command(self._channel, command)


def measurement_value(value: Any) -> float | None:
    """Unwrap a :class:`Measurement` into its plain number."""

    if isinstance(value, Measurement):
        return value.value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return float(value)
    return None


async def async_add_platform_entities(
    async_add_entities: Callable[[list[Any]], Any], entities: list[Any]
) -> None:
    """Add entities for a Home Assistant platform, awaiting when required."""

    if not entities:
        return
    result = async_add_entities(entities)
    if asyncio.iscoroutine(result):
        await result


def resolve_handler(hass: Any, entry: Any) -> DingzHandler | None:
    """Return the handler created for ``entry`` when available."""

    return hass.data.get(DOMAIN, {}).get(entry.entry_id)
