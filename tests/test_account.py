"""Tests for the account and vehicle models."""

import datetime

import pytest

from pyteslaownerapi.account import TeslaAccount
from pyteslaownerapi.vehicle import TeslaVehicle, get_vehicle_state

VEHICLE = {
    "id": 12345678901,
    "vehicle_id": 987654,
    "vin": "5YJ3E1EA7KF000000",
    "display_name": "Sparky",
    "state": "online",
    "tokens": ["4f993c5b9e2b937b", "7a3153b1bbb48a96"],
}
OTHER_VEHICLE = {"id": 22222222222, "vehicle_id": 111, "vin": "5YJSA1E2XJF000000", "display_name": "", "tokens": []}
DATA_PATH = (
    "/api/1/vehicles/12345678901/data?"
    "vehicle_summary&climate_state&charge_state&drive_state&gui_settings&vehicle_state"
)
STATE = {
    "id": 12345678901,
    "tokens": ["4f993c5b9e2b937b"],
    "charge_state": {"battery_level": 64, "charge_limit_soc": 80},
    "climate_state": {"inside_temp": 17.0, "driver_temp_setting": 21.0, "passenger_temp_setting": 21.5},
    "drive_state": {"latitude": 37.4, "longitude": -122.1, "heading": 90},
    "vehicle_state": {"locked": True, "timestamp": 1508766510148},
}


@pytest.fixture
def account(api, connection) -> TeslaAccount:
    api.add("GET", "/api/1/vehicles/", {"response": [dict(VEHICLE), dict(OTHER_VEHICLE)], "count": 2})
    return TeslaAccount(connection)


class TestAccount:
    @pytest.mark.asyncio
    async def test_list_vehicles_flattens_tokens(self, account) -> None:
        vehicles = await account.list_vehicles()
        assert vehicles[0]["tokens"] == "4f993c5b9e2b937b,7a3153b1bbb48a96"
        assert vehicles[1]["tokens"] == ""
        assert vehicles[0]["vin"] == VEHICLE["vin"]

    @pytest.mark.asyncio
    async def test_get_vehicles_is_cached(self, api, account) -> None:
        vehicles = await account.get_vehicles()
        assert [v.id for v in vehicles] == [12345678901, 22222222222]
        await account.get_vehicles()
        assert len(api.requests) == 1
        await account.get_vehicles(force_init=True)
        assert len(api.requests) == 2

    @pytest.mark.parametrize("key", [12345678901, "12345678901", 987654, "5YJ3E1EA7KF000000"])
    @pytest.mark.asyncio
    async def test_get_vehicle(self, account, key) -> None:
        vehicle = await account.get_vehicle(key)
        assert vehicle is not None
        assert vehicle.display_name == "Sparky"

    @pytest.mark.asyncio
    async def test_get_unknown_vehicle(self, account) -> None:
        assert await account.get_vehicle("nope") is None


class TestVehicle:
    @pytest.mark.asyncio
    async def test_get_vehicle_state(self, api, connection) -> None:
        api.add("GET", DATA_PATH, {"response": STATE})
        state = await get_vehicle_state(connection, VEHICLE)
        assert state["tokens"] == "4f993c5b9e2b937b"
        assert state["charge_state"]["battery_level"] == 64

    @pytest.mark.asyncio
    async def test_get_vehicle_data_merges_state(self, api, connection) -> None:
        api.add("GET", DATA_PATH, {"response": STATE})
        vehicle = TeslaVehicle(connection, data=dict(VEHICLE))
        await vehicle.get_vehicle_data()
        assert vehicle.display_name == "Sparky"
        assert vehicle.battery_level == 64
        assert vehicle.charge_limit == 80
        assert vehicle.inside_temp == 17.0
        assert vehicle.driver_temp_setting == 21.0
        assert vehicle.passenger_temp_setting == 21.5
        assert vehicle.locked is True
        assert vehicle.location == (37.4, -122.1, 90)
        assert vehicle.updated_at == datetime.datetime(2017, 10, 23, 13, 48, 30, 148000, tzinfo=datetime.UTC)

    def test_properties_before_state_is_fetched(self, connection) -> None:
        vehicle = TeslaVehicle(connection, data=dict(OTHER_VEHICLE))
        assert vehicle.display_name == OTHER_VEHICLE["vin"]
        assert vehicle.vehicle_id == 111
        assert vehicle.battery_level is None
        assert vehicle.updated_at is None
        assert vehicle.location == (None, None, None)

    def test_null_state_sections(self, connection) -> None:
        data = dict(VEHICLE, charge_state=None, climate_state=None, drive_state=None, vehicle_state=None)
        vehicle = TeslaVehicle(connection, data=data)
        assert vehicle.battery_level is None
        assert vehicle.charge_limit is None
        assert vehicle.inside_temp is None
        assert vehicle.locked is None
        assert vehicle.location == (None, None, None)
        assert vehicle.updated_at is None

    @pytest.mark.asyncio
    async def test_remote_services_use_api_id(self, api, connection) -> None:
        api.add("POST", "/api/1/vehicles/12345678901/command/wake_up", {"response": {"result": True}})
        vehicle = TeslaVehicle(connection, data=dict(VEHICLE))
        assert await vehicle.remote_services.wake_up() is True

    def test_repr(self, connection) -> None:
        vehicle = TeslaVehicle(connection, data=dict(VEHICLE))
        assert repr(vehicle) == "Vehicle(12345678901, vin='5YJ3E1EA7KF000000', name='Sparky')"
