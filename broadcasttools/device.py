"""Session handling and polling of a single Broadcast Tools device."""

from __future__ import annotations

import asyncio
import logging
from http.cookies import Morsel
from typing import Any

import aiohttp
from yarl import URL

from .const import (
    ALLOWED_SCHEMES,
    ENDPOINT_LOGIN,
    ENDPOINT_LOGOUT,
    ENDPOINT_MONITOR,
    METRIC_NAME,
    PAYLOAD_VALUES_KEY,
)
from .exceptions import (
    AlreadyAuthenticatedError,
    AuthenticationError,
    ConfigurationError,
    DeviceConnectionError,
    MalformedPayloadError,
    NoSessionError,
    NotAuthenticatedError,
    UnexpectedStatusError,
)
from .fields import extract_fields
from .models import Metric

_LOGGER = logging.getLogger(__name__)


def normalize_base_url(host: str) -> str:
    """Return the scheme, host and port of a configured device address."""
    if "://" not in host:
        host = f"http://{host}"
    try:
        url = URL(host)
        valid = url.scheme in ALLOWED_SCHEMES and bool(url.host)
        base = str(url.origin()) if valid else ""
    except ValueError as err:
        raise ConfigurationError(f"Invalid device address {host!r}: {err}") from err
    if not valid:
        raise ConfigurationError(f"Invalid device address {host!r}")
    return base.rstrip("/")


class BroadcastToolsDevice:
    """A Broadcast Tools device reached through its cookie based web API."""

    def __init__(
        self,
        host: str,
        user: str,
        password: str,
        websession: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the device.

        Args:
            host: Base address of the device, e.g. ``http://10.0.0.5:1776``
            user: Login user name
            password: Login password
            websession: Optional aiohttp ClientSession. If not provided, one will be created.
            timeout: Optional per request timeout in seconds
        """
        self.base_url = normalize_base_url(host)
        self._user = user
        self._password = password
        self._external_session = websession
        self._websession = websession
        self._own_session = False
        self._timeout = aiohttp.ClientTimeout(total=timeout) if timeout else None

        self.cookie: Morsel[str] | None = None

    @property
    def authenticated(self) -> bool:
        """Return True while a session cookie is held."""
        return self.cookie is not None

    async def _ensure_session(self) -> None:
        """Ensure a websession exists."""
        if self._websession is None:
            if self._external_session is not None:
                self._websession = self._external_session
            else:
                self._websession = aiohttp.ClientSession(
                    cookie_jar=aiohttp.DummyCookieJar()
                )
                self._own_session = True

    async def close_connection(self) -> None:
        """Close the connection and clean up resources."""
        if self._own_session and self._websession:
            await self._websession.close()
        self._own_session = False
        self._websession = None

    async def __aenter__(self) -> BroadcastToolsDevice:
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.logout()

    def _request(
        self,
        method: str,
        path: str,
        data: dict[str, str] | None = None,
        with_cookie: bool = False,
    ) -> Any:
        """Start a request against the device, optionally sending the session cookie."""
        assert self._websession is not None
        headers: dict[str, str] = {}
        if with_cookie and self.cookie is not None:
            headers["Cookie"] = f"{self.cookie.key}={self.cookie.coded_value}"
        kwargs: dict[str, Any] = {"headers": headers}
        if data is not None:
            kwargs["data"] = data
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        return self._websession.request(method, f"{self.base_url}{path}", **kwargs)

    async def login(self) -> None:
        """Log in and store the session cookie handed out by the device."""
        if self.cookie is not None:
            raise AlreadyAuthenticatedError(f"Already logged in to {self.base_url}")
        await self._ensure_session()

        form = {
            "AccessVal": "",
            "LoginUser": self._user,
            "LoginPass": self._password,
        }
        try:
            async with self._request("POST", ENDPOINT_LOGIN, data=form) as response:
                if response.status != 200:
                    raise AuthenticationError(
                        f"Authentication failed for {self.base_url}: status {response.status}"
                    )
                cookies = list(response.cookies.values())
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise DeviceConnectionError(
                f"Failed to connect to {self.base_url}: {err}"
            ) from err

        if not cookies:
            raise NoSessionError(f"No cookies returned by {self.base_url}")
        self.cookie = cookies[0]
        _LOGGER.debug("Logged in to %s", self.base_url)

    async def logout(self) -> None:
        """Log out, ignoring any failure, and drop the session and connection."""
        try:
            if self.cookie is not None and self._websession is not None:
                async with self._request(
                    "POST", ENDPOINT_LOGOUT, data={"Logout": "1"}, with_cookie=True
                ):
                    pass
                _LOGGER.debug("Logged out from %s", self.base_url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            _LOGGER.warning("Logout from %s failed: %s", self.base_url, err)
        finally:
            self.cookie = None
            await self.close_connection()

    async def poll(self) -> Metric:
        """Fetch the monitor page and convert it into a metric."""
        if self.cookie is None:
            raise NotAuthenticatedError(f"Not logged in to {self.base_url}")
        await self._ensure_session()

        try:
            async with self._request("GET", ENDPOINT_MONITOR, with_cookie=True) as response:
                if response.status != 200:
                    raise UnexpectedStatusError(
                        f"{self.base_url}: expected status 200; got {response.status}",
                        response.status,
                    )
                payload = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise DeviceConnectionError(
                f"Failed to connect to {self.base_url}: {err}"
            ) from err
        except ValueError as err:
            raise MalformedPayloadError(
                f"Failed to decode monitor data from {self.base_url}: {err}"
            ) from err

        _LOGGER.debug("Monitor data from %s: %s", self.base_url, payload)
        if not isinstance(payload, dict) or not isinstance(
            values := payload.get(PAYLOAD_VALUES_KEY), dict
        ):
            raise MalformedPayloadError(
                f"No {PAYLOAD_VALUES_KEY!r} mapping in monitor data from {self.base_url}"
            )

        extraction = extract_fields(values, self.base_url)
        return Metric(
            name=METRIC_NAME,
            fields=extraction.fields,
            device=self.base_url,
            errors=extraction.errors,
        )
