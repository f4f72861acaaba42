#!/usr/bin/python

"""Command line interface for Tesla owner API functions."""

import argparse
import asyncio
import configparser
import json
import logging
import os
import sys
from getpass import getpass
from pathlib import Path

from rich.console import Console

from pyteslaownerapi.account import TeslaAccount
from pyteslaownerapi.connection import Connection
from pyteslaownerapi.const import API_BASE_URL, AUTH_BASE_URL
from pyteslaownerapi.exceptions import (
    TeslaCommandRejectedError,
    TeslaExceptionError,
    TeslaTransportError,
    TeslaValidationError,
    TeslaWrongCredentialsError,
)
from pyteslaownerapi.oauth2 import ClientCredentials, Credentials, OAuth2Token, authenticate, refresh_token
from pyteslaownerapi.remote_services import get_climate_state

vehicle_commands = {
    "state": "Get the full vehicle state",
    "climate_state": "Get the climate state",
    "lock_doors": "Lock the doors",
    "unlock_doors": "Unlock the doors",
    "open_charge_port": "Open the charge port door",
    "close_charge_port": "Close the charge port door",
    "vent_sunroof": "Vent the sunroof",
    "close_sunroof": "Close the sunroof",
    "flash_lights": "Flash the headlights",
    "honk_horn": "Sound the horn",
    "wake_up": "Wake the vehicle up",
    "start_charging": "Start charging",
    "stop_charging": "Stop charging",
    "start_climate": "Start climate control",
    "stop_climate": "Stop climate control",
    "set_temperature": "Set driver and/or passenger temperature",
    "set_charge_limit": "Set the charge limit in percent",
    "enable_valet_mode": "Turn valet mode on",
    "disable_valet_mode": "Turn valet mode off",
    "reset_valet_pin": "Clear the valet pin",
    "remote_start": "Enable keyless driving",
}

console = Console()
printc = console.print

logging.basicConfig()
logging.root.setLevel(logging.WARNING)

_LOGGER = logging.getLogger(__name__)


async def state(vehicle, _args):
    """Get the full vehicle state."""
    return await vehicle.get_vehicle_data()


async def climate_state(vehicle, _args):
    """Get the climate state."""
    return await get_climate_state(vehicle.connection, vehicle.id)


async def set_temperature(vehicle, args):
    """Set cabin temperatures."""
    return await vehicle.remote_services.set_temperature(driver=args.driver, passenger=args.passenger)


async def set_charge_limit(vehicle, args):
    """Set the charge limit."""
    return await vehicle.remote_services.set_charge_limit(args.percent)


async def enable_valet_mode(vehicle, args):
    """Turn valet mode on."""
    return await vehicle.remote_services.enable_valet_mode(args.pin)


async def disable_valet_mode(vehicle, args):
    """Turn valet mode off."""
    return await vehicle.remote_services.disable_valet_mode(args.pin)


async def remote_start(vehicle, args):
    """Enable keyless driving, asking for the account password."""
    password = args.password or getpass("Account password: ")
    return await vehicle.remote_services.remote_start(password)


async def run_command(vehicle, args):
    """Run a vehicle command, reporting a rejection instead of failing."""
    handler = globals().get(args.func)
    try:
        if handler is not None:
            return await handler(vehicle, args)
        return await getattr(vehicle.remote_services, args.func)()
    except TeslaCommandRejectedError as e:
        return f"Rejected: {e.message}"


async def get_token(args):
    """Return a cached token or log in and cache a new one."""
    try:
        with Path.open(args.session_file) as json_file:
            token = json.load(json_file)
    except FileNotFoundError:
        token = {}
    except json.decoder.JSONDecodeError:
        token = {}

    token = OAuth2Token(token)
    if token.access_token and not token.is_expired():
        return token

    if not args.client_id or not args.client_secret:
        sys.exit("client_id and client_secret must be configured")
    client_credentials = ClientCredentials(args.client_id, args.client_secret)

    if token.access_token and token.refresh_token:
        try:
            token = await refresh_token(token, client_credentials, auth_base=args.auth_base)
        except TeslaTransportError as e:
            _LOGGER.warning("Could not refresh access token, logging in again: %s", e.message)
        else:
            _LOGGER.debug("Refreshed access token")
            save_token(args, token)
            return token

    email = args.email or input("Please enter Tesla account email: ")
    password = args.password or getpass()
    token = await authenticate(
        Credentials(email, password),
        client_credentials,
        auth_base=args.auth_base,
    )
    save_token(args, token)
    return token


def save_token(args, token):
    """Write the token to the session file."""
    with Path.open(args.session_file, "w", encoding="utf-8") as json_file:
        json.dump(token, json_file, ensure_ascii=False, indent=2)


async def main(args):
    """Get arguments from parser and run command."""
    if args.debug:
        logging.root.setLevel(logging.DEBUG)

    try:
        token = await get_token(args)
    except TeslaWrongCredentialsError as e:
        sys.exit(e.message)
    except TeslaExceptionError as e:
        sys.exit(f"Could not log in: {e.message}")

    connection = Connection(token, api_base=args.api_base)
    controller = TeslaAccount(connection)

    response = {}
    try:
        if args.command == "token":
            response = token
        elif args.command == "list":
            response = await controller.list_vehicles()
        else:
            if args.id is not None:
                vehicles = [await controller.get_vehicle(args.id)]
            else:
                vehicles = await controller.get_vehicles()
            for vehicle in vehicles:
                if vehicle is None:
                    sys.exit(f"No vehicle matching {args.id}")
                response[vehicle.display_name] = await run_command(vehicle, args)
    except TeslaValidationError as e:
        sys.exit(e.message)
    except TeslaExceptionError as e:
        _LOGGER.exception("Error communicating with API: %s", e.message)
        sys.exit(1)
    else:
        printc(response)
    finally:
        await connection.close()


def add_arg_vehicle(parser):
    """Add vehicle selection to the argument parser."""
    group = parser.add_mutually_exclusive_group(
        required=True,
    )
    group.add_argument("-i", "--id", dest="id", default=None, help="Vehicle id, vehicle_id or VIN")
    group.add_argument("-a", "--all", dest="all", action="store_true")


def number(value):
    """Parse a temperature as int when whole, float otherwise."""
    parsed = float(value)
    return int(parsed) if parsed.is_integer() else parsed


def cli():
    """Get configuration parameters and command line arguments and run main loop."""
    config = configparser.ConfigParser()
    config["tesla"] = {
        "email": "",
        "password": "",
        "client_id": os.environ.get("TESLA_CLIENT_ID", ""),
        "client_secret": os.environ.get("TESLA_CLIENT_SECRET", ""),
        "session_file": ".session",
        "api_base": API_BASE_URL,
        "auth_base": AUTH_BASE_URL,
    }
    config.read([".teslaownerapi.cfg", Path("~/.teslaownerapi.cfg").expanduser()])
    parser = argparse.ArgumentParser(description="Tesla owner API CLI")
    subparsers = parser.add_subparsers(help="command help", dest="command")

    parser.add_argument("-d", "--debug", dest="debug", action="store_true")
    parser.add_argument("-e", "--email", dest="email", default=config.get("tesla", "email"))
    parser.add_argument("-p", "--password", dest="password", default=config.get("tesla", "password"))
    parser.add_argument("--client-id", dest="client_id", default=config.get("tesla", "client_id"))
    parser.add_argument("--client-secret", dest="client_secret", default=config.get("tesla", "client_secret"))
    parser.add_argument("--api-base", dest="api_base", default=config.get("tesla", "api_base"))
    parser.add_argument("--auth-base", dest="auth_base", default=config.get("tesla", "auth_base"))
    parser.add_argument(
        "-s",
        "--sessionfile",
        dest="session_file",
        default=config.get("tesla", "session_file"),
    )

    subparsers.add_parser("list")
    subparsers.add_parser("token")

    for vcmd, vdesc in vehicle_commands.items():
        parser_command = subparsers.add_parser(vcmd, help=vdesc)
        parser_command.set_defaults(func=vcmd)
        add_arg_vehicle(parser_command)
        if vcmd in ("enable_valet_mode", "disable_valet_mode"):
            parser_command.add_argument("-n", "--pin", dest="pin", default=None, help="Four digit pin")
        if vcmd == "set_charge_limit":
            parser_command.add_argument("--percent", dest="percent", type=int, required=True)
        if vcmd == "set_temperature":
            parser_command.add_argument("--driver", dest="driver", type=number, default=None)
            parser_command.add_argument("--passenger", dest="passenger", type=number, default=None)

    args = parser.parse_args()

    if args.command:
        asyncio.run(main(args))
    else:
        parser.print_help(sys.stderr)


if __name__ == "__main__":
    cli()
