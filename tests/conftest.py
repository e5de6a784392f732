"""Pytest configuration for the dingz integration tests."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

root_path = Path(__file__).resolve().parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

STATE_PAYLOAD: dict[str, Any] = {
    "sensors": {
        "brightness": 153,
        "light_state": "day",
        "room_temperature": 22.7,
        "power_outputs": [
            {"value": 1.5},
            {"value": 0.0},
            {"value": 12.25},
            {"value": 60.0},
        ],
    },
    "thermostat": {
        "target_temp": 21.0,
        "mode": "heating",
        "on": True,
        "temp": 22.5,
        "min_target_temp": 10,
        "max_target_temp": 30,
    },
    "led": {
        "mode": "hsv",
        "on": True,
        "rgb": "#33cc33",
        "hsv": "120;50;80",
    },
}


class FakeDingz:
    """Record requests and answer them like a dingz device would."""

    def __init__(self) -> None:
        """Start with canned responses for every endpoint."""

        self.requests: list[httpx.Request] = []
        self.responses: dict[tuple[str, str], httpx.Response] = {
            ("GET", "/api/v1/state"): httpx.Response(200, json=STATE_PAYLOAD),
            ("GET", "/api/v1/sensors"): httpx.Response(
                200, json=STATE_PAYLOAD["sensors"]
            ),
            ("GET", "/api/v1/thermostat"): httpx.Response(
                200, json=STATE_PAYLOAD["thermostat"]
            ),
            ("POST", "/api/v1/thermostat"): httpx.Response(
                200,
                json={**STATE_PAYLOAD["thermostat"], "target_temp": 21.5},
            ),
            ("POST", "/api/v1/led/set"): httpx.Response(
                200, json={"color": "120;50;80", "on": True, "mode": "hsv"}
            ),
        }
        self.error: Exception | None = None
        self.delay = 0.0

    def respond(self, method: str, path: str, response: httpx.Response) -> None:
        """Override the response for ``method`` ``path``."""

        self.responses[(method, path)] = response

    def requests_for(self, method: str, path: str) -> list[httpx.Request]:
        """Return the recorded requests matching ``method`` and ``path``."""

        return [
            request
            for request in self.requests
            if request.method == method and request.url.path == path
        ]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        response = self.responses.get((request.method, request.url.path))
        if response is None:
            return httpx.Response(404, text="not found")
        return httpx.Response(
            response.status_code, content=response.content, headers=response.headers
        )


@pytest.fixture
def fake_dingz() -> FakeDingz:
    """Return a fresh fake device."""

    return FakeDingz()


@pytest.fixture
def make_http_client(
    fake_dingz: FakeDingz,
) -> Callable[[], httpx.AsyncClient]:
    """Return a factory for httpx clients routed to ``fake_dingz``."""

    def _factory() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(fake_dingz.handler))

    return _factory


def pytest_configure(config: pytest.Config) -> None:
    """Register markers used throughout the test suite."""

    config.addinivalue_line(
        "markers", "asyncio: mark coroutine tests to execute via asyncio loop"
    )


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute coroutine tests within a dedicated event loop."""

    test_function = pyfuncitem.obj
    if not asyncio.iscoroutinefunction(test_function):
        return None

    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        argnames = pyfuncitem._fixtureinfo.argnames
        kwargs = {name: pyfuncitem.funcargs[name] for name in argnames}
        loop.run_until_complete(test_function(**kwargs))
    finally:
        asyncio.set_event_loop(None)
        loop.close()
    return True
