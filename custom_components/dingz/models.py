"""Wire models for the dingz local HTTP API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, TypeVar

_LOGGER = logging.getLogger(__name__)

CELSIUS = "°C"
WATT = "W"

ReportT = TypeVar("ReportT")


def _load_object(text: str | bytes | None) -> dict[str, Any] | None:
    """Decode a JSON object, treating anything else as an absent report."""

    if not text:
        return None
    try:
        payload = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError):
        _LOGGER.debug("Unable to decode device payload: %s", text)
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def _parse_optional(
    report_cls: type[ReportT], payload: Any
) -> ReportT | None:
    """Build ``report_cls`` from ``payload`` or return ``None`` when unusable."""

    if not isinstance(payload, Mapping):
        return None
    try:
        return report_cls.from_dict(payload)  # type: ignore[attr-defined]
    except (TypeError, ValueError, OverflowError) as err:
        _LOGGER.debug("Ignoring malformed %s: %s", report_cls.__name__, err)
        return None


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    return int(value)


@dataclass(frozen=True, slots=True)
class Measurement:
    """A numeric reading paired with its unit of measurement."""

    value: float
    unit: str


@dataclass(frozen=True, slots=True)
class HsvColor:
    """Hue (0-360), saturation (0-100 %) and brightness (0-100 %)."""

    hue: float
    saturation: float
    brightness: float

    def __post_init__(self) -> None:
        """Reject components outside their ranges."""

        if not 0 <= self.hue <= 360:
            raise ValueError(f"Hue must be between 0 and 360, got {self.hue}")
        if not 0 <= self.saturation <= 100:
            raise ValueError(
                f"Saturation must be between 0 and 100, got {self.saturation}"
            )
        if not 0 <= self.brightness <= 100:
            raise ValueError(
                f"Brightness must be between 0 and 100, got {self.brightness}"
            )

    @classmethod
    def parse(cls, value: str) -> HsvColor:
        """Parse a comma separated ``hue,saturation,brightness`` string."""

        parts = [part.strip() for part in value.split(",")]
        if len(parts) != 3:
            raise ValueError(f"Expected three color components, got {value!r}")
        hue, saturation, brightness = (float(part) for part in parts)
        return cls(hue, saturation, brightness)

    @classmethod
    def from_wire(cls, value: str) -> HsvColor:
        """Parse the device's semicolon separated color representation."""

        return cls.parse(value.replace(";", ","))

    def to_wire(self) -> str:
        """Render the color the way the device expects it."""

        return f"{int(self.hue)};{int(self.saturation)};{int(self.brightness)}"

    def with_brightness(self, brightness: float) -> HsvColor:
        """Return a copy with a different brightness, keeping hue and saturation."""

        return replace(self, brightness=brightness)


@dataclass(frozen=True, slots=True)
class SensorReport:
    """Ambient readings reported by the device."""

    brightness: int = 0
    light_state: str = ""
    room_temperature: float = 0.0
    power_outputs: tuple[float, ...] | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> SensorReport:
        """Normalise the ``sensors`` object of a device report."""

        raw_outputs = payload.get("power_outputs")
        power_outputs: tuple[float, ...] | None = None
        if raw_outputs is not None:
            if not isinstance(raw_outputs, list):
                raise TypeError("power_outputs must be a list")
            if not all(isinstance(entry, Mapping) for entry in raw_outputs):
                raise TypeError("power_outputs entries must be objects")
            power_outputs = tuple(
                float(entry.get("value", 0.0)) for entry in raw_outputs
            )
        return cls(
            brightness=int(payload.get("brightness", 0)),
            light_state=str(payload.get("light_state", "")),
            room_temperature=float(payload.get("room_temperature", 0.0)),
            power_outputs=power_outputs,
        )

    @classmethod
    def from_json(cls, text: str | bytes | None) -> SensorReport | None:
        """Parse a ``GET api/v1/sensors`` response body."""

        return _parse_optional(cls, _load_object(text))


@dataclass(frozen=True, slots=True)
class ThermostatReport:
    """Thermostat settings and readings.

    The target temperature limits are only reported by newer firmware.
    """

    target_temp: float = 0.0
    mode: str = ""
    on: bool = False
    temp: float = 0.0
    min_target_temp: int | None = None
    max_target_temp: int | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ThermostatReport:
        """Normalise the ``thermostat`` object of a device report."""

        return cls(
            target_temp=float(payload.get("target_temp", 0.0)),
            mode=str(payload.get("mode", "")),
            on=bool(payload.get("on", False)),
            temp=float(payload.get("temp", 0.0)),
            min_target_temp=_optional_int(payload.get("min_target_temp")),
            max_target_temp=_optional_int(payload.get("max_target_temp")),
        )

    @classmethod
    def from_json(cls, text: str | bytes | None) -> ThermostatReport | None:
        """Parse a thermostat GET or POST response body."""

        return _parse_optional(cls, _load_object(text))


@dataclass(frozen=True, slots=True)
class LedReport:
    """LED state with the color in both of the device's encodings."""

    mode: str = ""
    on: bool = False
    rgb: str = ""
    hsv: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> LedReport:
        """Normalise the ``led`` object of a device report."""

        return cls(
            mode=str(payload.get("mode", "")),
            on=bool(payload.get("on", False)),
            rgb=str(payload.get("rgb", "")),
            hsv=str(payload.get("hsv", "")),
        )


@dataclass(frozen=True, slots=True)
class SetLedReport:
    """Response of ``POST api/v1/led/set``."""

    color: str = ""
    on: bool = False
    mode: str = ""

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> SetLedReport:
        """Normalise the LED set response."""

        return cls(
            color=str(payload.get("color", "")),
            on=bool(payload.get("on", False)),
            mode=str(payload.get("mode", "")),
        )

    @classmethod
    def from_json(cls, text: str | bytes | None) -> SetLedReport | None:
        """Parse the LED set response body."""

        return _parse_optional(cls, _load_object(text))


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Point in time aggregate of the device's sub-reports.

    Each sub-report is optional; a missing or malformed one leaves the
    others intact.
    """

    sensors: SensorReport | None = None
    thermostat: ThermostatReport | None = None
    led: LedReport | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> StateSnapshot:
        """Normalise a combined ``GET api/v1/state`` payload."""

        return cls(
            sensors=_parse_optional(SensorReport, payload.get("sensors")),
            thermostat=_parse_optional(ThermostatReport, payload.get("thermostat")),
            led=_parse_optional(LedReport, payload.get("led")),
        )

    @classmethod
    def from_json(cls, text: str | bytes | None) -> StateSnapshot | None:
        """Parse a combined state response body."""

        payload = _load_object(text)
        if payload is None:
            return None
        return cls.from_dict(payload)


class RequestParameters:
    """Immutable ``name=value`` pairs joined with ``&``.

    Values are sent verbatim; the LED endpoint expects the literal ``;``
    separators of the color value.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: tuple[tuple[str, str], ...]) -> None:
        """Store the ordered parameter pairs."""

        self._pairs = pairs

    @classmethod
    def create(cls, name: str, value: str) -> RequestParameters:
        """Start a parameter set with a single pair."""

        return cls(((name, value),))

    def add(self, name: str, value: str) -> RequestParameters:
        """Return a new parameter set with ``name=value`` appended."""

        return RequestParameters((*self._pairs, (name, value)))

    def as_dict(self) -> dict[str, str]:
        """Return the parameters as a mapping."""

        return dict(self._pairs)

    @property
    def payload(self) -> str:
        """Return the encoded parameter string."""

        return "&".join(f"{name}={value}" for name, value in self._pairs)

    def __str__(self) -> str:
        return self.payload

    def __repr__(self) -> str:
        return f"RequestParameters({self.payload!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RequestParameters):
            return NotImplemented
        return self._pairs == other._pairs

    def __hash__(self) -> int:
        return hash(self._pairs)
