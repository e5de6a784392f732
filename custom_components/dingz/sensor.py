"""Sensor platform for the dingz integration."""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorEntityDescription,
    SensorStateClass,
)
from homeassistant.const import LIGHT_LUX, EntityCategory, UnitOfPower, UnitOfTemperature

from .const import (
    CHANNEL_BRIGHTNESS,
    CHANNEL_MAX_TARGET_TEMPERATURE,
    CHANNEL_MIN_TARGET_TEMPERATURE,
    CHANNEL_TEMPERATURE,
    CHANNEL_THERMOSTAT_MODE,
    POWER_CHANNELS,
)
from .entity import (
    DingzEntity,
    async_add_platform_entities,
    measurement_value,
    resolve_handler,
)
from .handler import DingzHandler

SENSOR_DESCRIPTIONS: tuple[SensorEntityDescription, ...] = (
    SensorEntityDescription(
        key=CHANNEL_TEMPERATURE,
        name="Temperature",
        device_class=SensorDeviceClass.TEMPERATURE,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
    ),
    SensorEntityDescription(
        key=CHANNEL_BRIGHTNESS,
        name="Brightness",
        device_class=SensorDeviceClass.ILLUMINANCE,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=LIGHT_LUX,
    ),
)

POWER_DESCRIPTIONS: tuple[SensorEntityDescription, ...] = tuple(
    SensorEntityDescription(
        key=channel,
        name=f"Power {index}",
        device_class=SensorDeviceClass.POWER,
        state_class=SensorStateClass.MEASUREMENT,
        native_unit_of_measurement=UnitOfPower.WATT,
    )
    for index, channel in enumerate(POWER_CHANNELS, start=1)
)

THERMOSTAT_DESCRIPTIONS: tuple[SensorEntityDescription, ...] = (
    SensorEntityDescription(
        key=CHANNEL_THERMOSTAT_MODE,
        name="Thermostat mode",
    ),
    SensorEntityDescription(
        key=CHANNEL_MIN_TARGET_TEMPERATURE,
        name="Minimum target temperature",
        device_class=SensorDeviceClass.TEMPERATURE,
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        entity_category=EntityCategory.DIAGNOSTIC,
    ),
    SensorEntityDescription(
        key=CHANNEL_MAX_TARGET_TEMPERATURE,
        name="Maximum target temperature",
        device_class=SensorDeviceClass.TEMPERATURE,
        native_unit_of_measurement=UnitOfTemperature.CELSIUS,
        entity_category=EntityCategory.DIAGNOSTIC,
    ),
)


class DingzSensorEntity(DingzEntity, SensorEntity):
    """Representation of a dingz reading."""

    @property
    def native_value(self) -> Any:
        """Return the latest reading, unwrapping measurements."""

        value = self.channel_value
        if isinstance(value, str):
            return value
        return measurement_value(value)


def build_sensor_entities(
    handler: DingzHandler, entry_id: str
) -> list[DingzSensorEntity]:
    """Create the sensor entities matching the device's features."""

    features = handler.config.features
    descriptions = list(SENSOR_DESCRIPTIONS)
    if features.power_outputs:
        descriptions.extend(POWER_DESCRIPTIONS)
    if features.thermostat:
        descriptions.extend(THERMOSTAT_DESCRIPTIONS)
    return [
        DingzSensorEntity(handler, entry_id, description)
        for description in descriptions
    ]


async def async_setup_entry(hass: Any, entry: Any, async_add_entities: Any) -> None:
    """Set up sensor entities for a config entry."""

    handler = resolve_handler(hass, entry)
    if handler is None:
        return

    await async_add_platform_entities(
        async_add_entities, build_sensor_entities(handler, entry.entry_id)
    )
