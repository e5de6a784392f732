"""Binary sensor platform for the dingz integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
    BinarySensorEntityDescription,
)

from .const import CHANNEL_THERMOSTAT_OUTPUT
from .entity import DingzEntity, async_add_platform_entities, resolve_handler

THERMOSTAT_OUTPUT_DESCRIPTION = BinarySensorEntityDescription(
    key=CHANNEL_THERMOSTAT_OUTPUT,
    name="Thermostat output",
    device_class=BinarySensorDeviceClass.HEAT,
)


class DingzBinarySensorEntity(DingzEntity, BinarySensorEntity):
    """Whether the thermostat currently drives its output."""

    @property
    def is_on(self) -> bool | None:
        """Return the output state."""

        value = self.channel_value
        if isinstance(value, bool) or value is None:
            return value
        return bool(value)


async def async_setup_entry(hass: Any, entry: Any, async_add_entities: Any) -> None:
    """Set up binary sensor entities for a config entry."""

    handler = resolve_handler(hass, entry)
    if handler is None or not handler.config.features.thermostat:
        return

    await async_add_platform_entities(
        async_add_entities,
        [
            DingzBinarySensorEntity(
                handler, entry.entry_id, THERMOSTAT_OUTPUT_DESCRIPTION
            )
        ],
    )
