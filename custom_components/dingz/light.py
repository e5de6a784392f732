"""Light platform for the dingz LED ring."""

from __future__ import annotations

from typing import Any

from homeassistant.components.light import (
    ATTR_BRIGHTNESS,
    ATTR_HS_COLOR,
    ColorMode,
    LightEntity,
    LightEntityDescription,
)

from .commands import OnOffType
from .const import CHANNEL_LED
from .entity import DingzEntity, async_add_platform_entities, resolve_handler
from .models import HsvColor

LED_DESCRIPTION = LightEntityDescription(key=CHANNEL_LED, name="LED")


class DingzLedEntity(DingzEntity, LightEntity):
    """The LED as an HS color light."""

    _attr_color_mode = ColorMode.HS
    _attr_supported_color_modes = {ColorMode.HS}

    @staticmethod
    def _percent_to_brightness(percent: float) -> int:
        """Convert a device brightness percentage to Home Assistant scale."""

        return round(percent * 255 / 100)

    @staticmethod
    def _brightness_to_percent(value: float | int) -> int:
        """Convert Home Assistant brightness to a device percentage."""

        return max(0, min(100, round(value * 100 / 255)))

    @property
    def _color(self) -> HsvColor | None:
        value = self.channel_value
        return value if isinstance(value, HsvColor) else None

    @property
    def is_on(self) -> bool | None:
        """Return True while the LED shines."""

        color = self._color
        if color is None:
            return None
        return color.brightness > 0

    @property
    def brightness(self) -> int | None:
        """Return the Home Assistant brightness."""

        color = self._color
        if color is None:
            return None
        return self._percent_to_brightness(color.brightness)

    @property
    def hs_color(self) -> tuple[float, float] | None:
        """Return hue and saturation."""

        color = self._color
        if color is None:
            return None
        return (color.hue, color.saturation)

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Turn the LED on, optionally changing color or brightness."""

        hs_color = kwargs.get(ATTR_HS_COLOR)
        brightness = kwargs.get(ATTR_BRIGHTNESS)
        if hs_color is None and brightness is None:
            await self._async_send_command(OnOffType.ON)
            return

        current = self._color or HsvColor(0, 0, 100)
        hue, saturation = hs_color if hs_color is not None else (
            current.hue,
            current.saturation,
        )
        if brightness is not None:
            percent = self._brightness_to_percent(brightness)
        else:
            percent = current.brightness or 100
        await self._async_send_command(HsvColor(hue, saturation, percent))

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Turn the LED off."""

        await self._async_send_command(OnOffType.OFF)


async def async_setup_entry(hass: Any, entry: Any, async_add_entities: Any) -> None:
    """Set up the LED light for a config entry."""

    handler = resolve_handler(hass, entry)
    if handler is None or not handler.config.features.led:
        return

    await async_add_platform_entities(
        async_add_entities,
        [DingzLedEntity(handler, entry.entry_id, LED_DESCRIPTION)],
    )
