"""Trigger remote services on a vehicle."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from . import const
from .connection import Connection
from .exceptions import TeslaCommandRejectedError, TeslaValidationError
from .utils import redact, vehicle_id_of

_LOGGER = logging.getLogger(__name__)

_VALET_PIN = re.compile(r"^[0-9]{4}$")


async def execute_command(
    connection: Connection,
    vehicle: int | str | Mapping,
    command: str,
    body: dict | None = None,
) -> bool:
    """Send a named command to a vehicle.

    :param connection: connection holding the token and API base
    :param vehicle: vehicle id or a vehicle record with an ``id`` field
    :param command: command name as understood by the API
    :param body: optional JSON body
    :return: True when the vehicle reports success
    :raises TeslaCommandRejectedError: when the vehicle reports failure
    :raises TeslaTransportError: when the request itself fails
    """
    vehicle_id = vehicle_id_of(vehicle)
    _LOGGER.debug("Executing remote command %s on %s with payload %s", command, vehicle_id, redact(body))

    response = await connection.post(f"/vehicles/{vehicle_id}/command/{command}", json=body)
    if not isinstance(response, dict):
        response = {}

    _LOGGER.debug("Got result: %s (%s)", response.get("result"), response.get("reason"))

    if response.get("result") is True:
        return True
    raise TeslaCommandRejectedError(response.get("reason"))


async def get_climate_state(connection: Connection, vehicle: int | str | Mapping) -> dict:
    """Return the current climate state of a vehicle."""
    vehicle_id = vehicle_id_of(vehicle)
    _LOGGER.debug("Getting climate state for vehicle %s", vehicle_id)
    return await connection.get(f"/vehicles/{vehicle_id}/data_request/climate_state")


def validate_valet_pin(pin: str | None) -> str | None:
    """Check that a valet pin is a four digit string, leading zeros included."""
    if pin is None:
        return None
    if not isinstance(pin, str) or not _VALET_PIN.match(pin):
        msg = f"Valet pin must be four digits between 0000 and 9999, got {pin!r}"
        raise TeslaValidationError(msg)
    return pin


def validate_charge_limit(percent: int) -> int:
    """Check that a charge limit is a whole percentage within the accepted range."""
    if isinstance(percent, bool) or not isinstance(percent, int):
        msg = f"Charge limit must be an integer, got {percent!r}"
        raise TeslaValidationError(msg)
    if not const.CHARGE_LIMIT_MIN <= percent <= const.CHARGE_LIMIT_MAX:
        msg = f"Charge limit must be between {const.CHARGE_LIMIT_MIN} and {const.CHARGE_LIMIT_MAX}, got {percent}"
        raise TeslaValidationError(msg)
    return percent


def to_celsius(temperature: float) -> float:
    """Return a temperature setting in Celsius.

    Values up to 28 are taken as Celsius in half degree steps from 15,
    anything above as whole Fahrenheit degrees from 59 to 82.
    """
    if isinstance(temperature, bool) or not isinstance(temperature, int | float):
        msg = f"Temperature must be a number, got {temperature!r}"
        raise TeslaValidationError(msg)

    if temperature <= const.CELSIUS_MAX:
        if temperature < const.CELSIUS_MIN or (temperature * 2) % 1:
            msg = (
                f"Celsius temperature must be between {const.CELSIUS_MIN} and "
                f"{const.CELSIUS_MAX} in steps of 0.5, got {temperature}"
            )
            raise TeslaValidationError(msg)
        return temperature

    if temperature > const.FAHRENHEIT_MAX or temperature < const.FAHRENHEIT_MIN or temperature % 1:
        msg = (
            f"Fahrenheit temperature must be a whole number between {const.FAHRENHEIT_MIN} and "
            f"{const.FAHRENHEIT_MAX}, got {temperature}"
        )
        raise TeslaValidationError(msg)
    return round((temperature - 32) * 5 / 9)


class RemoteServices:
    """Trigger remote services on a vehicle."""

    def __init__(self, connection: Connection, vehicle: int | str | Mapping):
        """Initialise the remote services for a vehicle id or vehicle record."""
        self._connection = connection
        self._vehicle_id = vehicle_id_of(vehicle)

    async def lock_doors(self):
        """Remote service for locking the doors."""
        _LOGGER.debug("Locking vehicle %s", self._vehicle_id)
        return await self._send_command(const.CMD_DOOR_LOCK)

    async def unlock_doors(self):
        """Remote service for unlocking the doors."""
        _LOGGER.debug("Unlocking vehicle %s", self._vehicle_id)
        return await self._send_command(const.CMD_DOOR_UNLOCK)

    async def open_charge_port(self):
        """Remote service for opening the charge port door."""
        return await self._send_command(const.CMD_CHARGE_PORT_OPEN)

    async def close_charge_port(self):
        """Remote service for closing the charge port door."""
        return await self._send_command(const.CMD_CHARGE_PORT_CLOSE)

    async def vent_sunroof(self):
        """Remote service for moving the sunroof to the vent position."""
        return await self._send_command(const.CMD_SUN_ROOF, {"state": "vent"})

    async def close_sunroof(self):
        """Remote service for closing the sunroof."""
        return await self._send_command(const.CMD_SUN_ROOF, {"state": "close"})

    async def flash_lights(self):
        """Remote service for flashing the headlights briefly."""
        return await self._send_command(const.CMD_FLASH_LIGHTS)

    async def honk_horn(self):
        """Remote service for sounding the horn briefly."""
        return await self._send_command(const.CMD_HONK_HORN)

    async def wake_up(self):
        """Remote service for waking the vehicle from sleep."""
        _LOGGER.debug("Waking up vehicle %s", self._vehicle_id)
        return await self._send_command(const.CMD_WAKE_UP)

    async def start_charging(self):
        """Remote service for starting a charge."""
        return await self._send_command(const.CMD_CHARGE_START)

    async def stop_charging(self):
        """Remote service for stopping a charge."""
        return await self._send_command(const.CMD_CHARGE_STOP)

    async def start_climate(self):
        """Remote service for turning climate control on."""
        _LOGGER.debug("Starting climate control for %s", self._vehicle_id)
        return await self._send_command(const.CMD_CLIMATE_START)

    async def stop_climate(self):
        """Remote service for turning climate control off."""
        _LOGGER.debug("Stopping climate control for %s", self._vehicle_id)
        return await self._send_command(const.CMD_CLIMATE_STOP)

    async def set_temperature(
        self,
        driver: float | None = None,
        passenger: float | None = None,
    ):
        """Remote service for setting the driver and passenger temperatures.

        Either side may be given in Celsius or Fahrenheit. A side left out keeps
        the setting currently reported by the vehicle.
        """
        if driver is None and passenger is None:
            msg = "At least one of driver or passenger temperature is required"
            raise TeslaValidationError(msg)

        driver_temp = to_celsius(driver) if driver is not None else None
        passenger_temp = to_celsius(passenger) if passenger is not None else None

        if driver_temp is None or passenger_temp is None:
            climate_state = await get_climate_state(self._connection, self._vehicle_id)
            if not isinstance(climate_state, dict):
                climate_state = {}
            if driver_temp is None:
                driver_temp = climate_state.get("driver_temp_setting")
            if passenger_temp is None:
                passenger_temp = climate_state.get("passenger_temp_setting")
            _LOGGER.debug("Filled temperatures from climate state: %s / %s", driver_temp, passenger_temp)
            if driver_temp is None or passenger_temp is None:
                msg = "Climate state did not report the current temperature setting to keep"
                raise TeslaValidationError(msg)

        payload = {"driver_temp": driver_temp, "passenger_temp": passenger_temp}
        return await self._send_command(const.CMD_SET_TEMPS, payload)

    async def set_charge_limit(self, percent: int):
        """Remote service for setting the charge limit in percent."""
        payload = {"percent": validate_charge_limit(percent)}
        return await self._send_command(const.CMD_SET_CHARGE_LIMIT, payload)

    async def enable_valet_mode(self, pin: str | None = None):
        """Remote service for turning valet mode on, optionally with a four digit pin."""
        return await self._set_valet_mode(on=True, pin=pin)

    async def disable_valet_mode(self, pin: str | None = None):
        """Remote service for turning valet mode off."""
        return await self._set_valet_mode(on=False, pin=pin)

    async def reset_valet_pin(self):
        """Remote service for clearing the valet pin."""
        return await self._send_command(const.CMD_RESET_VALET_PIN)

    async def remote_start(self, password: str):
        """Remote service for enabling keyless driving.

        Requires the account password, not the access token.
        """
        if not password:
            msg = "The account password is required for remote start"
            raise TeslaValidationError(msg)
        _LOGGER.debug("Enabling keyless driving for %s", self._vehicle_id)
        return await self._send_command(const.CMD_REMOTE_START, {"password": password})

    async def _set_valet_mode(self, *, on: bool, pin: str | None):
        payload = {"on": "true" if on else "false"}
        pin = validate_valet_pin(pin)
        if pin is not None:
            payload["password"] = pin
        return await self._send_command(const.CMD_VALET_MODE, payload)

    async def _send_command(self, command: str, payload: dict | None = None) -> bool:
        return await execute_command(self._connection, self._vehicle_id, command, payload)
