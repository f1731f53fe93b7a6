"""Constraint evaluation — pairs readings with configured limits."""

from __future__ import annotations

from src.core.config import ConstraintsConfig
from src.core.types import ReadingValue
from src.monitor.activity_log import ActivityLog
from src.monitor.units import is_comparable, parse_size


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


class ConstraintEvaluator:
    """Decides, per resource, whether a reading exceeds its limit.

    Numeric readings compare directly against numeric limits. Size strings
    are scaled through :func:`parse_size` on both sides first. Anything that
    cannot be compared is reported as a warning and never counts as a
    violation.
    """

    def __init__(self, constraints: ConstraintsConfig, activity_log: ActivityLog) -> None:
        self._constraints = constraints
        self._log = activity_log

    def limit_for(self, resource: str) -> float | str | None:
        return self._constraints.get(resource)

    def is_violated(self, resource: str, reading: ReadingValue) -> bool:
        limit = self.limit_for(resource)
        if limit is None:
            return False

        if _is_number(reading) and _is_number(limit):
            return reading > limit

        if isinstance(reading, str) and isinstance(limit, str):
            scaled_reading = parse_size(reading)
            scaled_limit = parse_size(limit)
            if not is_comparable(scaled_reading):
                self._log.warning(
                    f'Parse warning: Resource "{resource}" reading {reading!r} is not a size'
                )
                return False
            if not is_comparable(scaled_limit):
                self._log.warning(
                    f'Parse warning: Resource "{resource}" limit {limit!r} is not a size'
                )
                return False
            return scaled_reading > scaled_limit

        self._log.warning(
            f'Parse warning: Resource "{resource}" reading {reading!r} '
            f"cannot be compared with limit {limit!r}"
        )
        return False

    def evaluate(self, readings: dict[str, ReadingValue]) -> list[str]:
        """Alert set for *readings*, in reading (declaration) order."""
        return [name for name, value in readings.items() if self.is_violated(name, value)]
