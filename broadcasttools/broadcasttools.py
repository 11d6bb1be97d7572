"""Main Broadcast Tools class for gathering metrics from many devices."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

import aiohttp

from .const import DESCRIPTION, SAMPLE_CONFIG
from .device import BroadcastToolsDevice
from .models import Accumulator, Metric

_LOGGER = logging.getLogger(__name__)


class BroadcastTools:
    """Gathers metrics from one or many Broadcast Tools devices."""

    def __init__(
        self,
        urls: Iterable[str],
        user: str,
        password: str,
        websession: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the plugin.

        Args:
            urls: Base addresses of the devices to poll
            user: Login user name shared by all devices
            password: Login password shared by all devices
            websession: Optional aiohttp ClientSession shared by all devices.
            timeout: Optional per request timeout in seconds. Requests wait forever when unset.
        """
        self.devices = [
            BroadcastToolsDevice(url, user, password, websession, timeout) for url in urls
        ]
        self.initialized = False

    @staticmethod
    def sample_config() -> str:
        """Return the sample configuration of the plugin."""
        return SAMPLE_CONFIG

    @staticmethod
    def description() -> str:
        """Return a short description of the plugin."""
        return DESCRIPTION

    async def __aenter__(self) -> BroadcastTools:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Log in to every device in turn, failing on the first error."""
        for device in self.devices:
            try:
                await device.login()
            except Exception:
                _LOGGER.debug("Login to %s failed, logging out all devices", device.base_url)
                await self.close()
                raise
        self.initialized = True

    async def close(self) -> None:
        """Log out from every device."""
        for device in self.devices:
            await device.logout()
        self.initialized = False

    async def gather_all(self) -> tuple[list[Metric], list[Exception]]:
        """Poll every device concurrently.

        The devices are logged in on the first call. Any login failure is
        raised and aborts the cycle. Poll failures do not affect the other
        devices; they are returned next to the metrics of the devices that
        answered.
        """
        if not self.initialized:
            await self._initialize()

        results = await asyncio.gather(
            *(device.poll() for device in self.devices), return_exceptions=True
        )

        metrics: list[Metric] = []
        errors: list[Exception] = []
        for device, result in zip(self.devices, results):
            if isinstance(result, Exception):
                _LOGGER.debug("Polling %s failed: %s", device.base_url, result)
                errors.append(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                metrics.append(result)
        return metrics, errors

    async def gather(self, acc: Accumulator) -> None:
        """Run one gather cycle and hand the results to the accumulator."""
        metrics, errors = await self.gather_all()
        for metric in metrics:
            acc.add_fields(metric.name, metric.fields, metric.tags)
            for err in metric.errors:
                acc.add_error(err)
        for err in errors:
            acc.add_error(err)
