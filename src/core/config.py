"""Pydantic settings loaded from YAML configuration."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.core.exceptions import SettingsError

_DEFAULT_CONFIG_PATH = Path("config/settings.yaml")

# Same grammar the unit parser accepts: number + K/M/G with optional trailing B.
_SIZE_LIMIT_RE = re.compile(r"^\s*\d+([.,]\d+)?\s*[KMG]B?\s*$", re.IGNORECASE)


class ConstraintsConfig(BaseModel):
    """Per-resource limits. Size-based limits are strings like ``"1.5G"``."""

    model_config = ConfigDict(frozen=True)

    cpu: float | None = None
    disk: str | None = None
    ram: float | None = None
    network: str | None = None

    @field_validator("disk", "network")
    @classmethod
    def _check_size(cls, v: str | None) -> str | None:
        if v is not None and not _SIZE_LIMIT_RE.match(v):
            raise ValueError(f"size limit must look like '1.5GB' or '512M', got {v!r}")
        return v

    def get(self, resource: str) -> float | str | None:
        """Return the limit configured for *resource*, or None."""
        return self.model_dump().get(resource)


class HttpRequestConfig(BaseModel):
    """Outbound alert request descriptor."""

    model_config = ConfigDict(frozen=True)

    url: str
    method: str = "POST"
    headers: dict[str, str] = Field(default_factory=dict)
    body: dict[str, Any] | list[Any] = Field(default_factory=dict)
    timeout_secs: float = Field(default=10.0, gt=0)

    @field_validator("method")
    @classmethod
    def _upper_method(cls, v: str) -> str:
        return v.upper()


class LogConfig(BaseModel):
    """Activity log and console logging configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    persist: int = Field(default=7, ge=0)
    directory: str = "logs"
    level: str = "INFO"
    format: str = "console"


class Settings(BaseModel):
    """Root settings container."""

    model_config = ConfigDict(frozen=True)

    resources: list[str]
    constraints: ConstraintsConfig
    interval: float = Field(gt=0)
    http_request: HttpRequestConfig
    log: LogConfig = LogConfig()
    probe_timeout_secs: float = Field(default=10.0, gt=0)


def load_settings(path: str | Path | None = None) -> Settings:
    """Load and validate settings from a YAML (or JSON) file.

    Args:
        path: Path to the config file. Defaults to config/settings.yaml.

    Returns:
        Parsed, immutable Settings instance.

    Raises:
        SettingsError: the file is missing or unreadable, is not a mapping,
            or fails schema validation.
    """
    config_path = Path(path) if path else _DEFAULT_CONFIG_PATH

    try:
        with open(config_path) as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise SettingsError(f"cannot read config {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise SettingsError(f"invalid YAML in {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise SettingsError(f"config {config_path} must contain a mapping at top level")

    try:
        return Settings(**raw)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise SettingsError(f"invalid config {config_path}: {problems}") from exc
