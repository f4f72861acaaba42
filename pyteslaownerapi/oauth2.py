"""Authentication token handling for the Tesla owner API."""

#  SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import NamedTuple

import httpx

from .const import AUTH_BASE_URL, TIMEOUT, USER_AGENT
from .exceptions import (
    TeslaTransportError,
    TeslaValidationError,
    TeslaWrongCredentialsError,
)

_LOGGER = logging.getLogger(__name__)


class Credentials(NamedTuple):
    """Store credentials for the Tesla owner API."""

    email: str
    password: str


class ClientCredentials(NamedTuple):
    """Store the OAuth client id and secret the owner API expects."""

    client_id: str
    client_secret: str


class OAuth2Token(dict):
    """A simple wrapper around a dict to handle OAuth2 tokens.

    The server response is kept as-is; the properties only read from it.
    """

    def is_expired(self, leeway=60):
        """Return true if the access token has expired, None if the expiry is unknown."""
        expires_at = self.expires_at
        if not expires_at:
            return None
        # small timedelta to consider token as expired before it actually expires
        expiration_threshold = expires_at - leeway
        return expiration_threshold < time.time()

    @property
    def expires_at(self):
        """Return the expiration time stamp of the access token."""
        if self.get("expires_at"):
            return int(self["expires_at"])
        if self.get("created_at") and self.get("expires_in"):
            return int(self["created_at"]) + int(self["expires_in"])
        return None

    @property
    def access_token(self):
        """Return the access token."""
        return self.get("access_token")

    @property
    def refresh_token(self):
        """Return the refresh token."""
        return self.get("refresh_token")


def access_token_of(token: str | Mapping) -> str:
    """Return the bare bearer string from either a raw token or a token record."""
    if isinstance(token, Mapping):
        token = token.get("access_token")
    if not isinstance(token, str) or not token:
        msg = "No access token available"
        raise TeslaValidationError(msg)
    return token


async def _post_token_request(data: dict, auth_base: str, async_client: httpx.AsyncClient | None) -> OAuth2Token:
    client = async_client or httpx.AsyncClient()
    try:
        resp = await client.post(
            f"{auth_base}/oauth/token",
            data=data,
            headers={"User-Agent": USER_AGENT},
            timeout=TIMEOUT,
        )
        if resp.status_code == 401:
            raise TeslaWrongCredentialsError(401)
        resp.raise_for_status()
        return OAuth2Token(resp.json())
    except httpx.HTTPStatusError as exc:
        raise TeslaTransportError(exc.response.status_code) from exc
    except httpx.TransportError as exc:
        raise TeslaTransportError(str(exc) or type(exc).__name__) from exc
    except ValueError as exc:
        raise TeslaTransportError("INVALID_RESPONSE") from exc
    finally:
        if async_client is None:
            await client.aclose()


async def authenticate(
    credentials: Credentials,
    client_credentials: ClientCredentials,
    auth_base: str = AUTH_BASE_URL,
    async_client: httpx.AsyncClient | None = None,
) -> OAuth2Token:
    """Exchange an email and password for an access token.

    :param credentials: tuple of email, password
    :param client_credentials: tuple of client id, client secret
    :param auth_base: base uri of the token endpoint
    :param async_client: httpx.AsyncClient or None
    :return: the token response as returned by the server
    """
    data = {
        "grant_type": "password",
        "client_id": client_credentials.client_id,
        "client_secret": client_credentials.client_secret,
        "email": credentials.email,
        "password": credentials.password,
    }
    _LOGGER.debug("Requesting access token for %s", credentials.email)
    return await _post_token_request(data, auth_base, async_client)


async def refresh_token(
    token: Mapping,
    client_credentials: ClientCredentials,
    auth_base: str = AUTH_BASE_URL,
    async_client: httpx.AsyncClient | None = None,
) -> OAuth2Token:
    """Use the refresh token of a previously issued token to get a new access token."""
    refresh = token.get("refresh_token")
    if not refresh:
        msg = "Token has no refresh_token"
        raise TeslaValidationError(msg)
    data = {
        "grant_type": "refresh_token",
        "client_id": client_credentials.client_id,
        "client_secret": client_credentials.client_secret,
        "refresh_token": refresh,
    }
    _LOGGER.debug("Using the refresh token to get a new access token.")
    return await _post_token_request(data, auth_base, async_client)
