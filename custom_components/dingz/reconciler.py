"""Map device reports onto channel values."""

from __future__ import annotations

import logging

from .config import DingzFeatures
from .const import (
    CHANNEL_BRIGHTNESS,
    CHANNEL_LED,
    CHANNEL_MAX_TARGET_TEMPERATURE,
    CHANNEL_MIN_TARGET_TEMPERATURE,
    CHANNEL_TARGET_TEMPERATURE,
    CHANNEL_TEMPERATURE,
    CHANNEL_THERMOSTAT_MODE,
    CHANNEL_THERMOSTAT_OUTPUT,
    LED_MODE_HSV,
    POWER_CHANNELS,
)
from .exceptions import DingzReportError
from .models import (
    CELSIUS,
    WATT,
    HsvColor,
    LedReport,
    Measurement,
    SensorReport,
    SetLedReport,
    StateSnapshot,
    ThermostatReport,
)
from .state import DingzState

_LOGGER = logging.getLogger(__name__)


class StateReconciler:
    """Write typed channel values derived from device reports.

    The same report always lands on the same channels, whether it came from
    a scheduled poll or from the synchronous answer to a command.
    """

    def __init__(
        self, state: DingzState, features: DingzFeatures | None = None
    ) -> None:
        """Bind the reconciler to the channel store it writes to."""

        self._state = state
        self._features = features or DingzFeatures()

    def apply(self, snapshot: StateSnapshot) -> None:
        """Apply every sub-report present in ``snapshot``."""

        if snapshot.sensors is not None:
            self.apply_sensors(snapshot.sensors)
        if snapshot.thermostat is not None:
            self.apply_thermostat(snapshot.thermostat)
        if snapshot.led is not None:
            self.apply_led(snapshot.led)

    def apply_sensors(self, report: SensorReport) -> None:
        """Update temperature, brightness and power channels."""

        outputs = report.power_outputs if self._features.power_outputs else None
        if outputs is not None and len(outputs) < len(POWER_CHANNELS):
            raise DingzReportError(
                f"Expected {len(POWER_CHANNELS)} power outputs, got {len(outputs)}"
            )

        self._state.update_state(
            CHANNEL_TEMPERATURE, Measurement(report.room_temperature, CELSIUS)
        )
        self._state.update_state(CHANNEL_BRIGHTNESS, report.brightness)
        if outputs is None:
            return
        for index, channel in enumerate(POWER_CHANNELS):
            self._state.update_state(channel, Measurement(outputs[index], WATT))

    def apply_thermostat(self, report: ThermostatReport) -> None:
        """Update the thermostat channels."""

        if not self._features.thermostat:
            return
        self._state.update_state(CHANNEL_THERMOSTAT_OUTPUT, report.on)
        self._state.update_state(CHANNEL_THERMOSTAT_MODE, report.mode)
        self._state.update_state(
            CHANNEL_TARGET_TEMPERATURE, Measurement(report.target_temp, CELSIUS)
        )
        if report.min_target_temp is not None:
            self._state.update_state(
                CHANNEL_MIN_TARGET_TEMPERATURE,
                Measurement(report.min_target_temp, CELSIUS),
            )
        if report.max_target_temp is not None:
            self._state.update_state(
                CHANNEL_MAX_TARGET_TEMPERATURE,
                Measurement(report.max_target_temp, CELSIUS),
            )

    def apply_led(self, report: LedReport) -> None:
        """Update the LED color when the LED runs in HSV mode."""

        if not self._features.led or report.mode != LED_MODE_HSV:
            return
        color = self._parse_color(report.hsv)
        if color is not None:
            self._state.update_state(CHANNEL_LED, color)

    def apply_set_led(self, report: SetLedReport) -> None:
        """Update the LED color from the answer to a set command.

        A switched off LED keeps its hue and saturation with zero brightness
        so the color can be restored later.
        """

        if not self._features.led:
            return
        color = self._parse_color(report.color)
        if color is None:
            return
        if not report.on:
            color = color.with_brightness(0)
        self._state.update_state(CHANNEL_LED, color)

    @staticmethod
    def _parse_color(value: str) -> HsvColor | None:
        try:
            return HsvColor.from_wire(value)
        except ValueError as err:
            _LOGGER.debug("Skipping LED color %r: %s", value, err)
            return None
