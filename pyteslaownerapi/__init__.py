"""Library to integrate with the Tesla owner API.

This library provides a Python interface to the Tesla owner API, with
abilities to read vehicle state data and access to remote commands
to control certain vehicle functions.

NOTE: This work is not officially supported by Tesla and functionality
can stop working at any time without warning.

"""

from .account import TeslaAccount
from .connection import Connection
from .exceptions import (
    TeslaCommandRejectedError,
    TeslaExceptionError,
    TeslaTransportError,
    TeslaValidationError,
    TeslaWrongCredentialsError,
)
from .oauth2 import ClientCredentials, Credentials, OAuth2Token, access_token_of, authenticate, refresh_token
from .remote_services import RemoteServices, execute_command, get_climate_state
from .utils import from_epoch_millis, vehicle_id_of
from .vehicle import TeslaVehicle, get_vehicle_state

__all__ = [
    "ClientCredentials",
    "Connection",
    "Credentials",
    "OAuth2Token",
    "RemoteServices",
    "TeslaAccount",
    "TeslaCommandRejectedError",
    "TeslaExceptionError",
    "TeslaTransportError",
    "TeslaValidationError",
    "TeslaVehicle",
    "TeslaWrongCredentialsError",
    "access_token_of",
    "authenticate",
    "execute_command",
    "from_epoch_millis",
    "get_climate_state",
    "get_vehicle_state",
    "refresh_token",
    "vehicle_id_of",
]
