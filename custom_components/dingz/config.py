"""Configuration handling for dingz devices."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

import voluptuous as vol

from .const import (
    CONF_COMBINED_STATE,
    CONF_HOSTNAME,
    CONF_LED,
    CONF_POWER_OUTPUTS,
    CONF_REFRESH,
    CONF_THERMOSTAT,
    CONF_THERMOSTAT_UPDATE,
    DEFAULT_REFRESH_SECONDS,
    HTTP_REQUEST_URL_PREFIX,
    THERMOSTAT_UPDATE_POLL,
    THERMOSTAT_UPDATE_RESPONSE,
)

DEVICE_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_HOSTNAME): vol.All(str, vol.Strip, vol.Length(min=1)),
        vol.Optional(CONF_REFRESH, default=DEFAULT_REFRESH_SECONDS): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(
            CONF_THERMOSTAT_UPDATE, default=THERMOSTAT_UPDATE_RESPONSE
        ): vol.In((THERMOSTAT_UPDATE_RESPONSE, THERMOSTAT_UPDATE_POLL)),
        vol.Optional(CONF_COMBINED_STATE, default=True): bool,
        vol.Optional(CONF_THERMOSTAT, default=True): bool,
        vol.Optional(CONF_LED, default=True): bool,
        vol.Optional(CONF_POWER_OUTPUTS, default=True): bool,
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True, slots=True)
class DingzFeatures:
    """Which groups of channels a device exposes."""

    thermostat: bool = True
    led: bool = True
    power_outputs: bool = True


@dataclass(frozen=True, slots=True)
class DingzConfig:
    """Validated, immutable device configuration."""

    hostname: str
    refresh: int = DEFAULT_REFRESH_SECONDS
    thermostat_update: str = THERMOSTAT_UPDATE_RESPONSE
    combined_state: bool = True
    features: DingzFeatures = DingzFeatures()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DingzConfig:
        """Validate raw configuration data and build the config."""

        validated = DEVICE_SCHEMA(dict(data))
        return cls(
            hostname=validated[CONF_HOSTNAME],
            refresh=validated[CONF_REFRESH],
            thermostat_update=validated[CONF_THERMOSTAT_UPDATE],
            combined_state=validated[CONF_COMBINED_STATE],
            features=DingzFeatures(
                thermostat=validated[CONF_THERMOSTAT],
                led=validated[CONF_LED],
                power_outputs=validated[CONF_POWER_OUTPUTS],
            ),
        )

    @property
    def base_url(self) -> str:
        """Return the scheme prefixed device URL."""

        return f"{HTTP_REQUEST_URL_PREFIX}{self.hostname}"

    @property
    def refresh_interval(self) -> timedelta:
        """Return the polling interval."""

        return timedelta(seconds=self.refresh)
