"""Tests for config models and the YAML/JSON loader."""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from healthwatch.config.loader import (
    _interpolate_env,
    _interpolate_recursive,
    find_config_file,
    load_config,
)
from healthwatch.config.models import ComponentSpec, MonitorConfig, parse_listen_address

# ─── Model tests ───


class TestComponentSpec:
    def test_valid(self):
        spec = ComponentSpec(name="db", endpoint="http://localhost:9001/health")
        assert spec.name == "db"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            ComponentSpec(name="", endpoint="http://localhost/health")

    def test_non_http_endpoint_rejected(self):
        with pytest.raises(ValidationError):
            ComponentSpec(name="db", endpoint="ftp://localhost/health")

    def test_frozen(self):
        spec = ComponentSpec(name="db", endpoint="http://localhost/health")
        with pytest.raises(ValidationError):
            spec.name = "other"  # type: ignore[misc]


class TestMonitorConfig:
    def test_defaults(self):
        cfg = MonitorConfig()
        assert cfg.components == []
        assert cfg.check_interval_seconds == 30
        assert cfg.log_directory == "logs"
        assert cfg.log_retention_days == 7
        assert cfg.listen_address == ":8080"
        assert cfg.bind == ("0.0.0.0", 8080)

    def test_from_dict(self, sample_config_dict):
        cfg = MonitorConfig(**sample_config_dict)
        assert [c.name for c in cfg.components] == ["db", "cache"]
        assert cfg.check_interval_seconds == 15

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValidationError, match="duplicate component name"):
            MonitorConfig(
                components=[
                    {"name": "db", "endpoint": "http://a/health"},
                    {"name": "db", "endpoint": "http://b/health"},
                ]
            )

    def test_interval_must_be_positive(self):
        with pytest.raises(ValidationError):
            MonitorConfig(check_interval_seconds=0)

    def test_bad_listen_address_rejected(self):
        with pytest.raises(ValidationError):
            MonitorConfig(listen_address="localhost")


class TestParseListenAddress:
    @pytest.mark.parametrize(
        ("address", "expected"),
        [
            (":8080", ("0.0.0.0", 8080)),
            ("127.0.0.1:9000", ("127.0.0.1", 9000)),
            ("[::1]:8443", ("::1", 8443)),
        ],
    )
    def test_valid(self, address, expected):
        assert parse_listen_address(address) == expected

    @pytest.mark.parametrize("address", ["8080", "host:", "host:http", ":0", ":70000"])
    def test_invalid(self, address):
        with pytest.raises(ValueError):
            parse_listen_address(address)


# ─── Interpolation tests ───


class TestInterpolation:
    def test_simple_var(self):
        with patch.dict(os.environ, {"DB_HOST": "db.internal"}):
            assert _interpolate_env("http://${DB_HOST}/health") == "http://db.internal/health"

    def test_default_value(self):
        env = {k: v for k, v in os.environ.items() if k != "HW_MISSING"}
        with patch.dict(os.environ, env, clear=True):
            assert _interpolate_env("${HW_MISSING:-fallback}") == "fallback"

    def test_unset_var_left_untouched(self):
        env = {k: v for k, v in os.environ.items() if k != "HW_MISSING"}
        with patch.dict(os.environ, env, clear=True):
            assert _interpolate_env("${HW_MISSING}") == "${HW_MISSING}"

    def test_recursive(self):
        with patch.dict(os.environ, {"PORT": "9001"}):
            data = {"components": [{"endpoint": "http://db:${PORT}/health"}], "n": 3}
            assert _interpolate_recursive(data) == {
                "components": [{"endpoint": "http://db:9001/health"}],
                "n": 3,
            }


# ─── Loader tests ───


class TestLoadConfig:
    def test_load_yaml(self, config_file: Path):
        cfg = load_config(config_file)
        assert len(cfg.components) == 2
        assert cfg.log_retention_days == 3

    def test_load_json(self, tmp_path: Path, sample_config_dict):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(sample_config_dict))
        cfg = load_config(path)
        assert cfg.components[1].endpoint == "http://cache.internal:9002/health"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_content(self, tmp_path: Path):
        path = tmp_path / "healthwatch.yaml"
        path.write_text("components:\n  - name: ''\n    endpoint: http://x/health\n")
        with pytest.raises(ValueError, match="Invalid configuration"):
            load_config(path)

    def test_unparseable(self, tmp_path: Path):
        path = tmp_path / "healthwatch.yaml"
        path.write_text("components: [unclosed\n")
        with pytest.raises(ValueError, match="Could not parse"):
            load_config(path)

    def test_top_level_not_mapping(self, tmp_path: Path):
        path = tmp_path / "healthwatch.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError):
            load_config(path)

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "healthwatch.yaml"
        path.write_text("")
        assert load_config(path).components == []


class TestFindConfigFile:
    def test_finds_in_parent(self, config_file: Path):
        child = config_file.parent / "a" / "b"
        child.mkdir(parents=True)
        assert find_config_file(child) == config_file

    def test_prefers_yaml_over_json(self, tmp_path: Path):
        (tmp_path / "config.json").write_text("{}")
        (tmp_path / "healthwatch.yaml").write_text("{}")
        assert find_config_file(tmp_path) == tmp_path / "healthwatch.yaml"

    def test_falls_back_to_json(self, tmp_path: Path):
        (tmp_path / "config.json").write_text("{}")
        assert find_config_file(tmp_path) == tmp_path / "config.json"
