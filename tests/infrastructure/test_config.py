"""Tests for configuration module."""

import json
import os
import pytest
from unittest.mock import patch

from stratus.infrastructure.config import (
    AWSConfig,
    DemoConfig,
    GCPConfig,
    LoggingConfig,
    StratusConfig,
    TelemetryConfig,
    load_config,
)


class TestDefaultConfig:
    def test_defaults(self):
        config = load_config(path="/nonexistent/stratus.json")
        assert config.gcp.project_id == ""
        assert config.gcp.timeout_seconds == 30.0
        assert config.aws.region == "us-east-1"
        assert config.demo.enabled is False
        assert config.telemetry.endpoint == ""
        assert config.logging.level == "WARNING"
        assert config.logging.json is False

    def test_all_sections_present(self):
        config = load_config(path="/nonexistent/stratus.json")
        assert isinstance(config.gcp, GCPConfig)
        assert isinstance(config.aws, AWSConfig)
        assert isinstance(config.demo, DemoConfig)
        assert isinstance(config.telemetry, TelemetryConfig)
        assert isinstance(config.logging, LoggingConfig)


class TestFileConfig:
    def test_load_from_file(self, tmp_path):
        config_file = tmp_path / "stratus.json"
        config_file.write_text(json.dumps({
            "gcp": {"project_id": "my-project", "access_token": "tok", "timeout_seconds": 10},
            "aws": {"region": "eu-west-1"},
            "demo": {"enabled": True},
            "logging": {"level": "DEBUG", "json": True},
        }))

        config = load_config(path=str(config_file))
        assert config.gcp.project_id == "my-project"
        assert config.gcp.timeout_seconds == 10.0
        assert isinstance(config.gcp.timeout_seconds, float)
        assert config.aws.region == "eu-west-1"
        assert config.demo.enabled is True
        assert config.logging.level == "DEBUG"
        assert config.logging.json is True

    def test_partial_config(self, tmp_path):
        config_file = tmp_path / "stratus.json"
        config_file.write_text(json.dumps({"aws": {"region": "ap-south-1"}}))

        config = load_config(path=str(config_file))
        assert config.aws.region == "ap-south-1"
        assert config.aws.timeout_seconds == 30.0  # default preserved
        assert config.gcp.project_id == ""  # default preserved

    def test_null_and_non_positive_timeouts_use_default(self, tmp_path, caplog):
        config_file = tmp_path / "stratus.json"
        config_file.write_text(json.dumps({
            "gcp": {"project_id": None, "timeout_seconds": None},
            "aws": {"timeout_seconds": 0},
        }))

        config = load_config(path=str(config_file))

        assert config.gcp.timeout_seconds == 30.0
        assert config.gcp.project_id == ""
        assert config.aws.timeout_seconds == 30.0
        assert "Ignoring invalid value 0 for AWSConfig.timeout_seconds" in caplog.text

    def test_invalid_json_returns_defaults(self, tmp_path):
        config_file = tmp_path / "stratus.json"
        config_file.write_text("not valid json{{{")

        config = load_config(path=str(config_file))
        assert config == StratusConfig()

    def test_non_object_returns_defaults(self, tmp_path):
        config_file = tmp_path / "stratus.json"
        config_file.write_text("[1, 2, 3]")

        assert load_config(path=str(config_file)) == StratusConfig()

    def test_unknown_keys_ignored(self, tmp_path):
        config_file = tmp_path / "stratus.json"
        config_file.write_text(json.dumps({
            "aws": {"region": "us-west-2", "unknown_key": "ignored"},
            "azure": {"subscription": "x"},
        }))

        config = load_config(path=str(config_file))
        assert config.aws.region == "us-west-2"


class TestEnvOverride:
    def test_env_overrides_file(self, tmp_path):
        config_file = tmp_path / "stratus.json"
        config_file.write_text(json.dumps({"aws": {"region": "us-west-2"}}))

        with patch.dict(os.environ, {"STRATUS_AWS_REGION": "eu-central-1"}):
            config = load_config(path=str(config_file))

        assert config.aws.region == "eu-central-1"

    def test_field_names_with_underscores(self):
        with patch.dict(os.environ, {
            "STRATUS_AWS_ACCESS_KEY_ID": "AKIA",
            "STRATUS_AWS_SECRET_ACCESS_KEY": "secret",
            "STRATUS_GCP_PROJECT_ID": "proj",
        }):
            config = load_config(path="/nonexistent/stratus.json")

        assert config.aws.access_key_id == "AKIA"
        assert config.aws.secret_access_key == "secret"
        assert config.gcp.project_id == "proj"

    def test_env_bool_conversion(self):
        with patch.dict(os.environ, {"STRATUS_DEMO_ENABLED": "true"}):
            config = load_config(path="/nonexistent/stratus.json")
        assert config.demo.enabled is True

    def test_env_float_conversion(self):
        with patch.dict(os.environ, {"STRATUS_GCP_TIMEOUT_SECONDS": "2.5"}):
            config = load_config(path="/nonexistent/stratus.json")
        assert config.gcp.timeout_seconds == 2.5

    def test_invalid_number_ignored(self):
        with patch.dict(os.environ, {"STRATUS_AWS_TIMEOUT_SECONDS": "soon"}):
            config = load_config(path="/nonexistent/stratus.json")
        assert config.aws.timeout_seconds == 30.0

    def test_negative_timeout_ignored(self, tmp_path):
        config_file = tmp_path / "stratus.json"
        config_file.write_text(json.dumps({"gcp": {"timeout_seconds": None}}))

        with patch.dict(os.environ, {"STRATUS_AWS_TIMEOUT_SECONDS": "-1"}):
            config = load_config(path=str(config_file))

        assert config.gcp.timeout_seconds == 30.0
        assert config.aws.timeout_seconds == 30.0

    def test_custom_prefix(self):
        with patch.dict(os.environ, {"MYAPP_AWS_REGION": "sa-east-1"}):
            config = load_config(path="/nonexistent/stratus.json", env_prefix="MYAPP")

        assert config.aws.region == "sa-east-1"


class TestConfigImmutability:
    def test_frozen(self):
        config = load_config(path="/nonexistent/stratus.json")
        with pytest.raises(AttributeError):
            config.demo = DemoConfig(enabled=True)


class TestSecretMasking:
    def test_repr_hides_secrets(self):
        gcp = GCPConfig(project_id="p", access_token="ya29.secret")
        aws = AWSConfig(access_key_id="AKIA", secret_access_key="shh")
        assert "ya29.secret" not in repr(gcp)
        assert "shh" not in repr(aws)
        assert "AKIA" in repr(aws)
