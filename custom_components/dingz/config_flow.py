"""Configuration flow for the dingz integration."""

from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import ConfigFlow
from homeassistant.helpers.httpx_client import get_async_client

from .api import DingzApiClient
from .config import DingzConfig
from .const import (
    CONF_COMBINED_STATE,
    CONF_HOSTNAME,
    CONF_LED,
    CONF_POWER_OUTPUTS,
    CONF_REFRESH,
    CONF_THERMOSTAT,
    CONF_THERMOSTAT_UPDATE,
    DEFAULT_REFRESH_SECONDS,
    DOMAIN,
    THERMOSTAT_UPDATE_POLL,
    THERMOSTAT_UPDATE_RESPONSE,
)
from .exceptions import DingzCommunicationError

_LOGGER = logging.getLogger(__name__)

_USER_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOSTNAME): str,
        vol.Optional(CONF_REFRESH, default=DEFAULT_REFRESH_SECONDS): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(
            CONF_THERMOSTAT_UPDATE, default=THERMOSTAT_UPDATE_RESPONSE
        ): vol.In([THERMOSTAT_UPDATE_RESPONSE, THERMOSTAT_UPDATE_POLL]),
        vol.Optional(CONF_COMBINED_STATE, default=True): bool,
        vol.Optional(CONF_THERMOSTAT, default=True): bool,
        vol.Optional(CONF_LED, default=True): bool,
        vol.Optional(CONF_POWER_OUTPUTS, default=True): bool,
    }
)


async def async_validate_connection(hass: Any, config: DingzConfig) -> None:
    """Fetch the device state once to prove the host is a reachable dingz."""

    client = DingzApiClient(get_async_client(hass, verify_ssl=False), config.base_url)
    if config.combined_state:
        await client.async_get_state()
    else:
        await client.async_get_sensors()


class DingzConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for a dingz device."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> Any:
        """Ask for the hostname and polling options."""

        errors: dict[str, str] = {}
        if user_input is not None:
            try:
                config = DingzConfig.from_mapping(user_input)
            except vol.Invalid:
                errors[CONF_HOSTNAME] = "invalid_host"
            else:
                await self.async_set_unique_id(config.hostname)
                self._abort_if_unique_id_configured()
                try:
                    await async_validate_connection(self.hass, config)
                except DingzCommunicationError as err:
                    _LOGGER.debug("Unable to reach %s: %s", config.hostname, err)
                    errors["base"] = "cannot_connect"
                else:
                    return self.async_create_entry(
                        title=f"dingz {config.hostname}",
                        data={**user_input, CONF_HOSTNAME: config.hostname},
                    )

        return self.async_show_form(
            step_id="user", data_schema=_USER_SCHEMA, errors=errors
        )
