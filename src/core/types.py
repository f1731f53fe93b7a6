"""Domain types for resource sampling and alerting."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

# A reading is a plain number (percentages) or a size string such as "2.0G".
ReadingValue = float | int | str


class Resource(StrEnum):
    """Resources with a built-in probe."""

    CPU = "cpu"
    DISK = "disk"
    RAM = "ram"
    NETWORK = "network"


class CycleResult(BaseModel):
    """Outcome of one sampling cycle."""

    readings: dict[str, ReadingValue] = Field(default_factory=dict)
    alerts: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    dispatched: bool = False

    @property
    def violated(self) -> bool:
        return bool(self.alerts)
