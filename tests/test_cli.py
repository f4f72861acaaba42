"""Tests for the command line interface."""

import json
from argparse import Namespace

import pytest

from pyteslaownerapi import cli
from pyteslaownerapi.account import TeslaAccount
from pyteslaownerapi.exceptions import TeslaTransportError
from pyteslaownerapi.oauth2 import OAuth2Token


def make_args(tmp_path, **kwargs) -> Namespace:
    defaults = {
        "debug": False,
        "email": "me@example.com",
        "password": "secret",
        "client_id": "client-id",
        "client_secret": "client-secret",
        "auth_base": "https://auth.example.com",
        "api_base": "https://owner-api.example.com/api/1",
        "session_file": tmp_path / ".session",
    }
    return Namespace(**(defaults | kwargs))


@pytest.mark.parametrize(("value", "parsed"), [("72", 72), ("21.5", 21.5), ("20.0", 20)])
def test_number(value, parsed) -> None:
    result = cli.number(value)
    assert result == parsed
    assert type(result) is type(parsed)


@pytest.mark.asyncio
async def test_get_token_uses_session_file(tmp_path) -> None:
    args = make_args(tmp_path)
    args.session_file.write_text(json.dumps({"access_token": "cached"}))
    assert await cli.get_token(args) == {"access_token": "cached"}


@pytest.mark.asyncio
async def test_get_token_requires_client_pair(tmp_path) -> None:
    with pytest.raises(SystemExit):
        await cli.get_token(make_args(tmp_path, client_id=""))


@pytest.mark.asyncio
async def test_run_command_reports_rejection(api, connection) -> None:
    api.add("GET", "/api/1/vehicles/", {"response": [{"id": 1, "vin": "5YJ", "display_name": "Sparky"}]})
    api.add("POST", "/api/1/vehicles/1/command/door_lock", {"response": {"result": False, "reason": "already_locked"}})
    vehicle = await TeslaAccount(connection).get_vehicle(1)
    result = await cli.run_command(vehicle, Namespace(func="lock_doors"))
    assert result == "Rejected: already_locked"


@pytest.mark.asyncio
async def test_run_command_with_options(api, connection) -> None:
    api.add("GET", "/api/1/vehicles/", {"response": [{"id": 1, "vin": "5YJ", "display_name": "Sparky"}]})
    api.add("POST", "/api/1/vehicles/1/command/set_charge_limit", {"response": {"result": True}})
    vehicle = await TeslaAccount(connection).get_vehicle(1)
    assert await cli.run_command(vehicle, Namespace(func="set_charge_limit", percent=90)) is True
    assert api.body() == {"percent": 90}


EXPIRED = {"access_token": "old", "refresh_token": "r1", "created_at": 1508766510, "expires_in": 3888000}


@pytest.mark.asyncio
async def test_get_token_refreshes_expired_token(tmp_path, monkeypatch) -> None:
    calls = []

    async def fake_refresh(token, client_credentials, auth_base=None, async_client=None):
        calls.append((token["refresh_token"], client_credentials.client_id, auth_base))
        return OAuth2Token({"access_token": "new", "refresh_token": "r2", "expires_in": 3888000})

    monkeypatch.setattr(cli, "refresh_token", fake_refresh)
    args = make_args(tmp_path)
    args.session_file.write_text(json.dumps(EXPIRED))

    token = await cli.get_token(args)

    assert token.access_token == "new"
    assert calls == [("r1", "client-id", "https://auth.example.com")]
    assert json.loads(args.session_file.read_text())["access_token"] == "new"


@pytest.mark.asyncio
async def test_get_token_logs_in_when_refresh_fails(tmp_path, monkeypatch) -> None:
    async def failing_refresh(*args, **kwargs):
        raise TeslaTransportError(403)

    async def fake_authenticate(credentials, client_credentials, auth_base=None, async_client=None):
        assert credentials == ("me@example.com", "secret")
        return OAuth2Token({"access_token": "fresh"})

    monkeypatch.setattr(cli, "refresh_token", failing_refresh)
    monkeypatch.setattr(cli, "authenticate", fake_authenticate)
    args = make_args(tmp_path)
    args.session_file.write_text(json.dumps(EXPIRED))

    token = await cli.get_token(args)

    assert token.access_token == "fresh"
    assert json.loads(args.session_file.read_text()) == {"access_token": "fresh"}
