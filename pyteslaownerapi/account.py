"""Accesses a Tesla account and retrieves connected vehicles."""

from __future__ import annotations

import logging

from pyteslaownerapi.connection import Connection
from pyteslaownerapi.utils import flatten_tokens
from pyteslaownerapi.vehicle import TeslaVehicle

_LOGGER = logging.getLogger(__name__)


class TeslaAccount:
    """Lists the vehicles bound to a Tesla account."""

    def __init__(self, connection: Connection) -> None:
        """Initialize the account."""
        self.vehicles: list[TeslaVehicle] = []
        self.connection = connection

    async def list_vehicles(self) -> list[dict]:
        """Return the vehicle summaries of the account as sent by the API."""
        _LOGGER.debug("Retrieving vehicle list")
        vehicle_list = await self.connection.get("/vehicles/")
        return [flatten_tokens(vehicle) for vehicle in vehicle_list or []]

    async def _init_vehicles(self) -> None:
        """Initialize vehicles from API endpoint."""
        _LOGGER.debug("Building vehicle list")
        self.vehicles = []
        for vehicle in await self.list_vehicles():
            _LOGGER.debug("Got vehicle %s", vehicle)
            self.vehicles.append(TeslaVehicle(self.connection, data=vehicle))

    async def get_vehicles(self, *, force_init: bool = False) -> list[TeslaVehicle]:
        """Retrieve available vehicles from API endpoints."""
        if len(self.vehicles) == 0 or force_init:
            await self._init_vehicles()

        return self.vehicles

    async def get_vehicle(self, key: int | str) -> TeslaVehicle | None:
        """Retrieve a vehicle by its API id, vehicle_id or VIN."""
        if len(self.vehicles) == 0:
            await self._init_vehicles()
        key = str(key)
        filtered = [v for v in self.vehicles if key in (str(v.data.get("id")), str(v.vehicle_id), v.vin)]
        if len(filtered) > 0:
            return filtered[0]
        return None
