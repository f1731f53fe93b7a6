"""Activity log — console output plus day-partitioned JSON-lines files."""

from __future__ import annotations

import datetime
import json
import re
from pathlib import Path
from typing import Callable

import structlog

from src.core.config import LogConfig
from src.core.logging import ACTIVITY_LOGGER

logger = structlog.get_logger(ACTIVITY_LOGGER)
error_logger = structlog.get_logger(__name__)

Clock = Callable[[], datetime.datetime]

_DATE_RE = re.compile(r"(\d{4}-\d{2}-\d{2})")


def _utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


def _iso_timestamp(now: datetime.datetime) -> str:
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ActivityLog:
    """Append-only activity log with age-based file pruning.

    Every message goes to the console through structlog. When file logging
    is enabled it is also appended to ``<directory>/<YYYY-MM-DD>.jsonl``
    (UTC date) as ``{"timestamp": ..., "message": ...}``.

    Pruning works on whole files: any file whose name embeds a date older
    than ``persist`` days is deleted.
    """

    def __init__(self, config: LogConfig, clock: Clock | None = None) -> None:
        self._config = config
        self._directory = Path(config.directory)
        self._clock = clock or _utc_now
        self._last_prune_date: datetime.date | None = None

    @property
    def directory(self) -> Path:
        return self._directory

    def current_file(self) -> Path:
        return self._directory / f"{self._clock().date().isoformat()}.jsonl"

    def log(self, message: str, level: str = "info") -> None:
        now = self._clock()
        getattr(logger, level)(message)

        if not self._config.enabled:
            return

        record = {"timestamp": _iso_timestamp(now), "message": message}
        path = self._directory / f"{now.date().isoformat()}.jsonl"
        # Write failures are reported here, never raised to the caller.
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            with open(path, "a", encoding="utf-8") as f:
                f.write(json.dumps(record) + "\n")
        except OSError:
            error_logger.exception("activity_log_write_failed", path=str(path))

    def warning(self, message: str) -> None:
        self.log(message, level="warning")

    def prune_old(self, persist_days: int | None = None) -> list[str]:
        """Delete dated log files older than *persist_days* (config default).

        Files without a parseable date in their name are left untouched.
        Returns the names of deleted files.
        """
        persist = self._config.persist if persist_days is None else persist_days
        now = self._clock()
        self._last_prune_date = now.date()

        if not self._directory.is_dir():
            return []

        deleted: list[str] = []
        for entry in sorted(self._directory.iterdir()):
            if not entry.is_file():
                continue
            match = _DATE_RE.search(entry.name)
            if match is None:
                continue
            try:
                file_date = datetime.datetime.strptime(match.group(1), "%Y-%m-%d")
            except ValueError:
                continue
            file_date = file_date.replace(tzinfo=datetime.UTC)
            age_days = (now - file_date).total_seconds() / 86400
            if age_days > persist:
                try:
                    entry.unlink()
                except OSError:
                    error_logger.exception("activity_log_prune_failed", path=str(entry))
                    continue
                deleted.append(entry.name)
                self.log(f"Deleted old log: {entry.name}")
        return deleted

    def prune_if_new_day(self) -> list[str]:
        """Re-run pruning once after the UTC date rolls over."""
        if self._last_prune_date == self._clock().date():
            return []
        return self.prune_old()
