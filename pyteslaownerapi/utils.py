#  SPDX-License-Identifier: Apache-2.0
"""Helpers shared by the account, vehicle and remote service modules."""

from __future__ import annotations

import datetime
from collections.abc import Mapping

from .const import REDACTED_FIELDS
from .exceptions import TeslaValidationError

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.UTC)


def from_epoch_millis(ms: int | float) -> datetime.datetime:
    """Convert a millisecond epoch time stamp, as found in state payloads, to an aware UTC datetime."""
    return EPOCH + datetime.timedelta(milliseconds=ms)


def vehicle_id_of(vehicle: int | str | Mapping) -> int:
    """Return the API id of a vehicle given either the bare id or a vehicle summary.

    Note that this is the ``id`` field, not ``vehicle_id`` nor the VIN.
    """
    if isinstance(vehicle, Mapping):
        if vehicle.get("id") is None:
            msg = "Vehicle record has no 'id' field"
            raise TeslaValidationError(msg)
        vehicle = vehicle["id"]
    if isinstance(vehicle, bool):
        msg = f"Not a vehicle id: {vehicle!r}"
        raise TeslaValidationError(msg)
    if isinstance(vehicle, int):
        return vehicle
    if isinstance(vehicle, str) and vehicle.isdigit():
        return int(vehicle)
    msg = f"Not a vehicle id: {vehicle!r}"
    raise TeslaValidationError(msg)


def flatten_tokens(data: dict) -> dict:
    """Join the ``tokens`` list of a vehicle record into a comma separated string."""
    tokens = data.get("tokens")
    if isinstance(tokens, list):
        data["tokens"] = ",".join(str(t) for t in tokens)
    return data


def redact(body: dict | None) -> dict | None:
    """Return a copy of a request body that is safe to log."""
    if body is None:
        return None
    return {k: "********" if k in REDACTED_FIELDS else v for k, v in body.items()}
