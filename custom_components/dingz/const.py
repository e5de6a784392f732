"""Constants for the dingz integration."""

from datetime import timedelta

DOMAIN = "dingz"

DEFAULT_REFRESH_SECONDS = 10
REQUEST_TIMEOUT_SECONDS = 10
STATE_CACHE_TTL = timedelta(seconds=3)
REPOLL_DELAY = timedelta(milliseconds=500)

HTTP_REQUEST_URL_PREFIX = "http://"

STATE_CALL = "api/v1/state"
SENSORS_CALL = "api/v1/sensors"
THERMOSTAT_CALL = "api/v1/thermostat"
LED_SET_CALL = "api/v1/led/set"

CONF_HOSTNAME = "hostname"
CONF_REFRESH = "refresh"
CONF_THERMOSTAT_UPDATE = "thermostat_update"
CONF_COMBINED_STATE = "combined_state"
CONF_THERMOSTAT = "thermostat"
CONF_LED = "led"
CONF_POWER_OUTPUTS = "power_outputs"

# Thermostat set strategies: reconcile the POST response, or re-poll shortly after.
THERMOSTAT_UPDATE_RESPONSE = "response"
THERMOSTAT_UPDATE_POLL = "poll"

LED_MODE_HSV = "hsv"

# Channel ids
CHANNEL_TEMPERATURE = "temperature"
CHANNEL_TARGET_TEMPERATURE = "target-temperature"
CHANNEL_MIN_TARGET_TEMPERATURE = "min-target-temperature"
CHANNEL_MAX_TARGET_TEMPERATURE = "max-target-temperature"
CHANNEL_THERMOSTAT_MODE = "thermostat-mode"
CHANNEL_THERMOSTAT_OUTPUT = "thermostat-output"
CHANNEL_BRIGHTNESS = "brightness"
CHANNEL_POWER1 = "power-1"
CHANNEL_POWER2 = "power-2"
CHANNEL_POWER3 = "power-3"
CHANNEL_POWER4 = "power-4"
CHANNEL_LED = "led-color"

POWER_CHANNELS: tuple[str, ...] = (
    CHANNEL_POWER1,
    CHANNEL_POWER2,
    CHANNEL_POWER3,
    CHANNEL_POWER4,
)
