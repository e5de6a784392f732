"""Integration entry point for the dingz custom component."""

from __future__ import annotations

import logging
from typing import Any

from .const import DOMAIN

_LOGGER = logging.getLogger(__name__)

PLATFORMS: tuple[str, ...] = (
    "sensor",
    "binary_sensor",
    "number",
    "light",
)

__all__ = [
    "DOMAIN",
    "PLATFORMS",
    "async_setup_entry",
    "async_unload_entry",
]


def _get_handler_class() -> type[Any]:
    from .handler import DingzHandler

    return DingzHandler


def _get_http_client(hass: Any) -> Any:
    """Return Home Assistant's shared httpx client."""

    from homeassistant.helpers.httpx_client import get_async_client

    return get_async_client(hass, verify_ssl=False)


async def async_setup_entry(hass: Any, entry: Any) -> bool:
    """Set up a dingz device from a config entry."""

    from .config import DingzConfig

    config = DingzConfig.from_mapping({**entry.data, **(entry.options or {})})
    handler_class = _get_handler_class()
    handler = handler_class(config, _get_http_client(hass))

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = handler
    handler.initialize()

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    return True


async def async_unload_entry(hass: Any, entry: Any) -> bool:
    """Unload a config entry and stop polling its device."""

    unload_success = await hass.config_entries.async_unload_platforms(
        entry, PLATFORMS
    )

    domain_data = hass.data.get(DOMAIN, {})
    handler = domain_data.pop(entry.entry_id, None)
    if handler is not None:
        handler.dispose()
        _LOGGER.debug("Disposed dingz handler for %s", handler.config.hostname)

    if not domain_data:
        hass.data.pop(DOMAIN, None)

    return unload_success
