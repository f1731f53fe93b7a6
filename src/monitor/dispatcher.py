"""Alert dispatcher — renders the payload and fires one request per cycle."""

from __future__ import annotations

from typing import Any

import structlog

from src.core.types import ReadingValue
from src.monitor.activity_log import ActivityLog
from src.monitor.channels import NotificationChannel
from src.monitor.formatters import render_template

logger = structlog.get_logger(__name__)


class AlertDispatcher:
    """Fire-and-forget alert delivery.

    - Nothing is sent for an empty alert set.
    - At most one attempt per call: no retry, no backoff, no queue.
    - Every failure is logged and swallowed so the sampling loop keeps going.
    """

    def __init__(
        self,
        channel: NotificationChannel,
        template: Any,
        activity_log: ActivityLog,
    ) -> None:
        self._channel = channel
        self._template = template
        self._log = activity_log

    async def dispatch(self, alerts: list[str], readings: dict[str, ReadingValue]) -> bool:
        """Send one alert for *alerts*. Returns True if it was delivered."""
        if not alerts:
            return False

        payload = render_template(self._template, readings)
        try:
            status = await self._channel.send(payload)
        except Exception as exc:
            logger.exception(
                "alert_dispatch_error",
                channel=type(self._channel).__name__,
                alerts=alerts,
            )
            reason = str(exc) or type(exc).__name__
            self._log.log(f"Failed to send alert: {reason}", level="error")
            return False

        self._log.log(f"Alert sent for: {', '.join(alerts)} | Status: {status}")
        return True

    async def close(self) -> None:
        try:
            await self._channel.close()
        except Exception:
            logger.exception("channel_close_error", channel=type(self._channel).__name__)
