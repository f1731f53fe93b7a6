"""Tests for src/core/config.py — YAML/JSON loading, defaults, validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
import yaml
from pydantic import ValidationError

from src.core.config import (
    ConstraintsConfig,
    HttpRequestConfig,
    LogConfig,
    Settings,
    load_settings,
)
from src.core.exceptions import SettingsError


def _config_data(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "resources": ["cpu", "disk", "ram", "network"],
        "constraints": {"cpu": 80, "disk": "1.5G", "ram": 90, "network": "500MB"},
        "interval": 30,
        "http_request": {
            "url": "https://hooks.example.com/alert",
            "method": "post",
            "headers": {"Authorization": "Bearer abc"},
            "body": {"text": "cpu at {cpu}%"},
        },
        "log": {"enabled": True, "persist": 3},
    }
    data.update(overrides)
    return data


class TestDefaults:
    """Optional sections should have sensible defaults."""

    def test_default_log_config(self) -> None:
        cfg = LogConfig()
        assert cfg.enabled is True
        assert cfg.persist == 7
        assert cfg.directory == "logs"
        assert cfg.level == "INFO"
        assert cfg.format == "console"

    def test_default_http_request(self) -> None:
        cfg = HttpRequestConfig(url="https://example.com")
        assert cfg.method == "POST"
        assert cfg.headers == {}
        assert cfg.body == {}
        assert cfg.timeout_secs == 10.0

    def test_constraints_default_to_none(self) -> None:
        cfg = ConstraintsConfig()
        assert cfg.cpu is None
        assert cfg.get("disk") is None

    def test_settings_defaults(self) -> None:
        s = Settings(**_config_data())
        assert s.probe_timeout_secs == 10.0


class TestYamlLoading:
    """Settings should load correctly from YAML and JSON files."""

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump(_config_data()))

        settings = load_settings(config_file)

        assert settings.resources == ["cpu", "disk", "ram", "network"]
        assert settings.constraints.cpu == 80
        assert settings.constraints.disk == "1.5G"
        assert settings.interval == 30
        assert settings.http_request.method == "POST"
        assert settings.http_request.headers == {"Authorization": "Bearer abc"}
        assert settings.log.persist == 3

    def test_load_from_json(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(_config_data()))

        settings = load_settings(config_file)
        assert settings.constraints.network == "500MB"
        assert settings.http_request.body == {"text": "cpu at {cpu}%"}

    def test_log_section_optional(self, tmp_path: Path) -> None:
        data = _config_data()
        del data["log"]
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump(data))

        settings = load_settings(config_file)
        assert settings.log.enabled is True
        assert settings.log.persist == 7

    def test_constraint_lookup_by_name(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump(_config_data()))
        settings = load_settings(config_file)
        assert settings.constraints.get("ram") == 90
        assert settings.constraints.get("gpu") is None


class TestFatalErrors:
    """Load problems surface as a single SettingsError."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SettingsError, match="cannot read"):
            load_settings(tmp_path / "nonexistent.yaml")

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        with pytest.raises(SettingsError, match="mapping"):
            load_settings(config_file)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("resources: [cpu\n  interval: :")
        with pytest.raises(SettingsError, match="invalid YAML"):
            load_settings(config_file)

    def test_missing_required_field(self, tmp_path: Path) -> None:
        data = _config_data()
        del data["http_request"]
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump(data))
        with pytest.raises(SettingsError, match="http_request"):
            load_settings(config_file)

    def test_multiple_problems_reported_together(self, tmp_path: Path) -> None:
        data = _config_data(interval=0)
        data["constraints"]["disk"] = "lots"
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump(data))
        with pytest.raises(SettingsError) as exc_info:
            load_settings(config_file)
        message = str(exc_info.value)
        assert "interval" in message
        assert "constraints.disk" in message

    def test_bad_size_limit_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ConstraintsConfig(network="10 parsecs")

    def test_df_style_size_limit_accepted(self) -> None:
        cfg = ConstraintsConfig(disk="1.5G", network="512mb")
        assert cfg.disk == "1.5G"

    def test_decimal_comma_size_limit_accepted(self) -> None:
        cfg = ConstraintsConfig(disk="1,5G")
        assert cfg.disk == "1,5G"


class TestImmutability:
    def test_settings_are_frozen(self, tmp_path: Path) -> None:
        config_file = tmp_path / "settings.yaml"
        config_file.write_text(yaml.dump(_config_data()))
        settings = load_settings(config_file)
        with pytest.raises(ValidationError):
            settings.interval = 5  # type: ignore[misc]
