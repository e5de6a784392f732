"""Number platform for the dingz integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.number import (
    NumberDeviceClass,
    NumberEntity,
    NumberEntityDescription,
    NumberMode,
)
from homeassistant.const import UnitOfTemperature

from .const import (
    CHANNEL_MAX_TARGET_TEMPERATURE,
    CHANNEL_MIN_TARGET_TEMPERATURE,
    CHANNEL_TARGET_TEMPERATURE,
)
from .entity import (
    DingzEntity,
    async_add_platform_entities,
    measurement_value,
    resolve_handler,
)

DEFAULT_MIN_TARGET_TEMPERATURE = 0.0
DEFAULT_MAX_TARGET_TEMPERATURE = 40.0

TARGET_TEMPERATURE_DESCRIPTION = NumberEntityDescription(
    key=CHANNEL_TARGET_TEMPERATURE,
    name="Target temperature",
    device_class=NumberDeviceClass.TEMPERATURE,
    native_unit_of_measurement=UnitOfTemperature.CELSIUS,
    native_step=0.5,
    mode=NumberMode.BOX,
)


class DingzTargetTemperatureEntity(DingzEntity, NumberEntity):
    """Thermostat target temperature, bounded by the reported limits."""

    def _handle_state_update(self, channel: str | None) -> None:
        """Also refresh when the target limits change."""

        if channel in (CHANNEL_MIN_TARGET_TEMPERATURE, CHANNEL_MAX_TARGET_TEMPERATURE):
            channel = self.channel
        super()._handle_state_update(channel)

    @property
    def native_value(self) -> float | None:
        """Return the current target temperature."""

        return measurement_value(self.channel_value)

    @property
    def native_min_value(self) -> float:
        """Return the lowest target the device accepts."""

        value = measurement_value(
            self._handler.state.get(CHANNEL_MIN_TARGET_TEMPERATURE)
        )
        return DEFAULT_MIN_TARGET_TEMPERATURE if value is None else value

    @property
    def native_max_value(self) -> float:
        """Return the highest target the device accepts."""

        value = measurement_value(
            self._handler.state.get(CHANNEL_MAX_TARGET_TEMPERATURE)
        )
        return DEFAULT_MAX_TARGET_TEMPERATURE if value is None else value

    async def async_set_native_value(self, value: float) -> None:
        """Send the new target temperature to the device."""

        await self._async_send_command(value)


async def async_setup_entry(hass: Any, entry: Any, async_add_entities: Any) -> None:
    """Set up number entities for a config entry."""

    handler = resolve_handler(hass, entry)
    if handler is None or not handler.config.features.thermostat:
        return

    await async_add_platform_entities(
        async_add_entities,
        [
            DingzTargetTemperatureEntity(
                handler, entry.entry_id, TARGET_TEMPERATURE_DESCRIPTION
            )
        ],
    )
