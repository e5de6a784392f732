"""Command values accepted by the dingz handler."""

from __future__ import annotations

from enum import Enum


class RefreshType(Enum):
    """Request to re-read the device state."""

    REFRESH = "REFRESH"


class OnOffType(str, Enum):
    """Plain on/off command."""

    ON = "on"
    OFF = "off"


REFRESH = RefreshType.REFRESH
