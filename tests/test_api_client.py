"""Tests for the dingz HTTP transport."""

from __future__ import annotations

import httpx
import pytest

from custom_components.dingz.api import COMMUNICATION_ERROR, DingzApiClient
from custom_components.dingz.exceptions import DingzCommunicationError
from custom_components.dingz.models import RequestParameters

BASE_URL = "http://dingz.local"


@pytest.mark.asyncio
async def test_get_state_parses_snapshot(fake_dingz, make_http_client) -> None:
    """The combined state endpoint is fetched and decoded."""

    async with make_http_client() as http_client:
        client = DingzApiClient(http_client, BASE_URL)
        snapshot = await client.async_get_state()

    assert snapshot is not None
    assert snapshot.sensors is not None
    assert snapshot.sensors.power_outputs == (1.5, 0.0, 12.25, 60.0)
    assert snapshot.led is not None
    assert snapshot.led.hsv == "120;50;80"
    (request,) = fake_dingz.requests
    assert request.method == "GET"
    assert str(request.url) == "http://dingz.local/api/v1/state"


@pytest.mark.asyncio
async def test_split_endpoints(fake_dingz, make_http_client) -> None:
    """Sensors and thermostat can be read separately."""

    async with make_http_client() as http_client:
        client = DingzApiClient(http_client, BASE_URL + "/")
        sensors = await client.async_get_sensors()
        thermostat = await client.async_get_thermostat()

    assert sensors is not None
    assert sensors.room_temperature == 22.7
    assert thermostat is not None
    assert thermostat.mode == "heating"
    assert [request.url.path for request in fake_dingz.requests] == [
        "/api/v1/sensors",
        "/api/v1/thermostat",
    ]


@pytest.mark.asyncio
async def test_target_temperature_is_sent_as_query(
    fake_dingz, make_http_client
) -> None:
    """The target temperature travels in the ``target_temp`` query parameter."""

    async with make_http_client() as http_client:
        client = DingzApiClient(http_client, BASE_URL)
        report = await client.async_set_target_temperature(21.5)

    assert report is not None
    assert report.target_temp == 21.5
    (request,) = fake_dingz.requests_for("POST", "/api/v1/thermostat")
    assert request.url.params["target_temp"] == "21.5"
    assert request.content == b""


@pytest.mark.asyncio
async def test_led_parameters_are_sent_verbatim(fake_dingz, make_http_client) -> None:
    """The LED form body keeps the literal semicolons of the color."""

    parameters = (
        RequestParameters.create("action", "on")
        .add("color", "120;50;80")
        .add("mode", "hsv")
    )

    async with make_http_client() as http_client:
        client = DingzApiClient(http_client, BASE_URL)
        report = await client.async_set_led(parameters)

    assert report is not None
    assert report.color == "120;50;80"
    assert report.on is True
    (request,) = fake_dingz.requests_for("POST", "/api/v1/led/set")
    assert request.content == b"action=on&color=120;50;80&mode=hsv"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"


@pytest.mark.asyncio
async def test_non_success_status_raises(fake_dingz, make_http_client) -> None:
    """Non-2xx answers carry the status code in the error."""

    fake_dingz.respond("GET", "/api/v1/state", httpx.Response(500, text="boom"))

    async with make_http_client() as http_client:
        client = DingzApiClient(http_client, BASE_URL)
        with pytest.raises(DingzCommunicationError) as excinfo:
            await client.async_get_state()

    assert excinfo.value.status_code == 500
    assert str(excinfo.value) == (
        "Error sending HTTP request to api/v1/state. Got response code: 500"
    )


@pytest.mark.asyncio
async def test_timeout_raises_communication_error(
    fake_dingz, make_http_client
) -> None:
    """Timeouts surface as communication errors without a status code."""

    fake_dingz.error = httpx.ConnectTimeout("timed out")

    async with make_http_client() as http_client:
        client = DingzApiClient(http_client, BASE_URL)
        with pytest.raises(DingzCommunicationError) as excinfo:
            await client.async_get_thermostat()

    assert excinfo.value.status_code is None
    assert str(excinfo.value).startswith(COMMUNICATION_ERROR)
    assert "timed out" in str(excinfo.value)


@pytest.mark.asyncio
async def test_connection_error_raises_communication_error(
    fake_dingz, make_http_client
) -> None:
    """Transport failures other than timeouts are wrapped as well."""

    fake_dingz.error = httpx.ConnectError("connection refused")

    async with make_http_client() as http_client:
        client = DingzApiClient(http_client, BASE_URL)
        with pytest.raises(DingzCommunicationError) as excinfo:
            await client.async_get_sensors()

    assert excinfo.value.status_code is None
    assert "connection refused" in str(excinfo.value)
