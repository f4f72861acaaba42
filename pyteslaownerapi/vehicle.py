"""Models the state of a Tesla vehicle."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping

from .connection import Connection
from .const import VEHICLE_DATA_QUERY
from .remote_services import RemoteServices
from .utils import flatten_tokens, from_epoch_millis, vehicle_id_of

_LOGGER = logging.getLogger(__name__)


async def get_vehicle_state(connection: Connection, vehicle: int | str | Mapping) -> dict:
    """Return the combined state bundle of a vehicle.

    Covers the summary plus climate, charge, drive, GUI and vehicle state.
    """
    vehicle_id = vehicle_id_of(vehicle)
    _LOGGER.debug("Getting vehicle data for %s", vehicle_id)
    data = await connection.get(f"/vehicles/{vehicle_id}/data?{VEHICLE_DATA_QUERY}")
    return flatten_tokens(data or {})


class TeslaVehicle:
    """Representation of a Tesla vehicle."""

    def __init__(
        self,
        connection: Connection,
        data: dict | None = None,
    ) -> None:
        """Initialise the Tesla vehicle from its summary record."""
        if data is None:
            data = {}
        self.connection = connection
        self.data = data

    @property
    def remote_services(self) -> RemoteServices:
        """Return the remote services bound to this vehicle."""
        return RemoteServices(self.connection, self.data)

    @property
    def id(self) -> int:
        """Get the API id used in request paths."""
        return vehicle_id_of(self.data)

    @property
    def vehicle_id(self) -> int | None:
        """Get the manufacturer's vehicle id, which is not the API id."""
        return self.data.get("vehicle_id")

    @property
    def vin(self) -> str:
        """Get the VIN (vehicle identification number) of the vehicle."""
        return self.data.get("vin", "not available")

    @property
    def display_name(self) -> str:
        """Get the name given to the vehicle by its owner."""
        return self.data.get("display_name") or self.vin

    @property
    def state(self) -> str | None:
        """Return online, asleep or offline as last reported."""
        return self.data.get("state")

    @property
    def battery_level(self) -> int | None:
        """Return the battery state of charge in percent."""
        return (self.data.get("charge_state") or {}).get("battery_level")

    @property
    def charge_limit(self) -> int | None:
        """Return the charge limit in percent."""
        return (self.data.get("charge_state") or {}).get("charge_limit_soc")

    @property
    def inside_temp(self) -> float | None:
        return (self.data.get("climate_state") or {}).get("inside_temp")

    @property
    def driver_temp_setting(self) -> float | None:
        return (self.data.get("climate_state") or {}).get("driver_temp_setting")

    @property
    def passenger_temp_setting(self) -> float | None:
        return (self.data.get("climate_state") or {}).get("passenger_temp_setting")

    @property
    def locked(self) -> bool | None:
        """Return True if the vehicle is locked."""
        return (self.data.get("vehicle_state") or {}).get("locked")

    @property
    def location(self) -> tuple[float | None, float | None, int | None]:
        """Get the location of the vehicle."""
        drive_state = self.data.get("drive_state") or {}
        return (drive_state.get("latitude"), drive_state.get("longitude"), drive_state.get("heading"))

    @property
    def updated_at(self) -> datetime.datetime | None:
        """Return time stamp of the latest vehicle state update."""
        timestamp = (self.data.get("vehicle_state") or {}).get("timestamp")
        if timestamp:
            return from_epoch_millis(timestamp)
        return None

    async def get_vehicle_data(self) -> dict:
        """Fetch the full vehicle state and merge it into the vehicle data."""
        _LOGGER.debug("Getting vehicle data for vehicle %s", self.vin)
        self.data = self.data | await get_vehicle_state(self.connection, self.id)
        return self.data

    def __repr__(self) -> str:
        """Return a printable representation of the Tesla vehicle object."""
        return f"Vehicle({self.id!r}, vin={self.vin!r}, name={self.display_name!r})"
