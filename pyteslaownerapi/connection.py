#  SPDX-License-Identifier: Apache-2.0
"""Python Package for controlling the Tesla owner API."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from .const import API_BASE_URL, TIMEOUT, USER_AGENT
from .exceptions import TeslaTransportError
from .oauth2 import OAuth2Token, access_token_of
from .utils import redact

_LOGGER = logging.getLogger(__name__)


class Connection:
    """Carries the token, API base and HTTP client used for every request.

    :param token: access token string, or a token dict with access_token as root param
    :param api_base: base uri of the owner API
    :param async_client: httpx.AsyncClient or None
    """

    def __init__(
        self,
        token: str | Mapping,
        api_base: str = API_BASE_URL,
        async_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the connection to the Tesla owner API."""
        self.token = OAuth2Token(token) if isinstance(token, Mapping) else token
        self.api_base = api_base.rstrip("/")
        self._owns_client = async_client is None
        self.asyncClient = async_client or httpx.AsyncClient()
        self.headers = {"User-Agent": USER_AGENT, "Accept-Encoding": "gzip,deflate"}

    @property
    def access_token(self) -> str:
        """Return the bare bearer string."""
        return access_token_of(self.token)

    async def get(self, path, params=None):
        """Make a GET request to the Tesla owner API."""
        return await self.request("GET", path, params=params)

    async def post(self, path, json=None):
        """Make a POST request to the Tesla owner API."""
        return await self.request("POST", path, json=json)

    async def request(self, method, path, **kwargs):
        """Send one request and return the payload inside the response envelope."""
        url = f"{self.api_base}{path}"
        _LOGGER.debug("Request method - url: %s %s", method, url)
        if kwargs.get("json") is not None:
            _LOGGER.debug("Request body: %s", redact(kwargs["json"]))
        try:
            resp = await self.asyncClient.request(
                method,
                url,
                headers=self.headers | {"Authorization": f"Bearer {self.access_token}"},
                timeout=TIMEOUT,
                **kwargs,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TeslaTransportError(exc.response.status_code) from exc
        except httpx.TransportError as exc:
            raise TeslaTransportError(str(exc) or type(exc).__name__) from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise TeslaTransportError("INVALID_RESPONSE") from exc
        _LOGGER.debug("Response: %s", data)
        if isinstance(data, dict) and "response" in data:
            return data["response"]
        return data

    async def close(self):
        """Close the asyncClient connection if it was created here."""
        if self._owns_client:
            await self.asyncClient.aclose()

    async def __aenter__(self) -> Connection:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
