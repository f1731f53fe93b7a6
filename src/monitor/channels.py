"""Notification channels — HTTP webhook delivery."""

from __future__ import annotations

import abc
import json
from typing import Any

import aiohttp
import structlog

from src.core.config import HttpRequestConfig
from src.monitor.exceptions import DispatchError

logger = structlog.get_logger(__name__)


class NotificationChannel(abc.ABC):
    """Base class for alert delivery channels."""

    @abc.abstractmethod
    async def send(self, payload: Any) -> int:
        """Deliver a rendered payload. Returns the delivery status code."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release resources (HTTP sessions, etc.)."""


class WebhookChannel(NotificationChannel):
    """Sends the payload as a JSON body to the configured HTTP endpoint.

    Method, URL and headers are used exactly as configured. A non-2xx
    response raises :class:`DispatchError`; transport errors propagate
    unchanged.
    """

    def __init__(self, config: HttpRequestConfig) -> None:
        self._config = config
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def send(self, payload: Any) -> int:
        session = self._get_session()
        timeout = aiohttp.ClientTimeout(total=self._config.timeout_secs)
        async with session.request(
            self._config.method,
            self._config.url,
            headers=dict(self._config.headers),
            data=json.dumps(payload),
            timeout=timeout,
        ) as resp:
            if 200 <= resp.status < 300:
                return resp.status
            body = await resp.text()
            logger.warning(
                "webhook_send_failed",
                status=resp.status,
                body=body[:200],
            )
            raise DispatchError(f"HTTP {resp.status}", status=resp.status)

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None
