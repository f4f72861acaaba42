#  SPDX-License-Identifier: Apache-2.0
"""Constants for the Tesla owner API."""

AUTH_BASE_URL = "https://owner-api.teslamotors.com"
API_BASE_URL = "https://owner-api.teslamotors.com/api/1"

USER_AGENT = "pyteslaownerapi"
TIMEOUT = 90

# Query used to fetch the combined state bundle in a single request
VEHICLE_DATA_QUERY = "vehicle_summary&climate_state&charge_state&drive_state&gui_settings&vehicle_state"

# Fields masked whenever a request body is logged
REDACTED_FIELDS = ("password", "client_secret")

CMD_DOOR_LOCK = "door_lock"
CMD_DOOR_UNLOCK = "door_unlock"
CMD_CHARGE_PORT_OPEN = "charge_port_door_open"
CMD_CHARGE_PORT_CLOSE = "charge_port_door_close"
CMD_SUN_ROOF = "sun_roof_control"
CMD_FLASH_LIGHTS = "flash_lights"
CMD_HONK_HORN = "honk_horn"
CMD_WAKE_UP = "wake_up"
CMD_CHARGE_START = "charge_start"
CMD_CHARGE_STOP = "charge_stop"
CMD_CLIMATE_START = "auto_conditioning_start"
CMD_CLIMATE_STOP = "auto_conditioning_stop"
CMD_SET_TEMPS = "set_temps"
CMD_SET_CHARGE_LIMIT = "set_charge_limit"
CMD_VALET_MODE = "set_valet_mode"
CMD_RESET_VALET_PIN = "reset_valet_pin"
CMD_REMOTE_START = "remote_start_drive"

CHARGE_LIMIT_MIN = 50
CHARGE_LIMIT_MAX = 100

# Values at or below this are read as Celsius, anything above as Fahrenheit
CELSIUS_MAX = 28
CELSIUS_MIN = 15
FAHRENHEIT_MIN = 59
FAHRENHEIT_MAX = 82
