"""HTTP transport for the dingz local API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .const import (
    LED_SET_CALL,
    REQUEST_TIMEOUT_SECONDS,
    SENSORS_CALL,
    STATE_CALL,
    THERMOSTAT_CALL,
)
from .exceptions import DingzCommunicationError
from .models import (
    RequestParameters,
    SensorReport,
    SetLedReport,
    StateSnapshot,
    ThermostatReport,
)

_LOGGER = logging.getLogger(__name__)

COMMUNICATION_ERROR = "Error while communicating to the dingz switch: "
_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class DingzApiClient:
    """Issue requests against a single dingz device.

    Every failure (timeout, connection problem, non-2xx status) surfaces as
    :class:`DingzCommunicationError`; nothing is retried here.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        """Bind the client to the device reachable at ``base_url``."""

        self._http_client = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        """Return the device base URL."""

        return self._base_url

    async def async_request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        content: str | None = None,
    ) -> str:
        """Send a request and return the raw response body."""

        url = f"{self._base_url}/{path}"
        headers: dict[str, str] = {}
        if content is not None:
            headers["Content-Type"] = _FORM_CONTENT_TYPE
        _LOGGER.debug("%s %s params=%s content=%s", method, url, params, content)
        try:
            response = await self._http_client.request(
                method,
                url,
                params=params,
                content=content,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as err:
            _LOGGER.debug("Request to %s timed out after %ss", url, self._timeout)
            raise DingzCommunicationError(
                f"{COMMUNICATION_ERROR}request timed out ({err})"
            ) from err
        except httpx.HTTPError as err:
            _LOGGER.debug("Request to %s failed: %s", url, err)
            raise DingzCommunicationError(f"{COMMUNICATION_ERROR}{err}") from err

        if not response.is_success:
            _LOGGER.debug(
                "Request to %s answered with status %s", url, response.status_code
            )
            raise DingzCommunicationError(
                f"Error sending HTTP request to {path}. "
                f"Got response code: {response.status_code}",
                status_code=response.status_code,
            )
        return response.text

    async def async_get(self, path: str) -> str:
        """Send a GET request to ``path``."""

        return await self.async_request("GET", path)

    async def async_post(
        self,
        path: str,
        *,
        params: dict[str, str] | None = None,
        content: RequestParameters | None = None,
    ) -> str:
        """Send a POST request with query parameters or a form body."""

        return await self.async_request(
            "POST",
            path,
            params=params,
            content=content.payload if content is not None else None,
        )

    async def async_get_state(self) -> StateSnapshot | None:
        """Fetch the combined state snapshot."""

        return StateSnapshot.from_json(await self.async_get(STATE_CALL))

    async def async_get_sensors(self) -> SensorReport | None:
        """Fetch the sensor report alone."""

        return SensorReport.from_json(await self.async_get(SENSORS_CALL))

    async def async_get_thermostat(self) -> ThermostatReport | None:
        """Fetch the thermostat report alone."""

        return ThermostatReport.from_json(await self.async_get(THERMOSTAT_CALL))

    async def async_set_target_temperature(
        self, value: float
    ) -> ThermostatReport | None:
        """Set the thermostat target and return the device's answer."""

        body = await self.async_post(
            THERMOSTAT_CALL, params={"target_temp": _format_float(value)}
        )
        return ThermostatReport.from_json(body)

    async def async_set_led(self, parameters: RequestParameters) -> SetLedReport | None:
        """Send an LED action and return the device's answer."""

        body = await self.async_post(LED_SET_CALL, content=parameters)
        return SetLedReport.from_json(body)


def _format_float(value: Any) -> str:
    """Render a number as a plain decimal string."""

    return repr(float(value))
