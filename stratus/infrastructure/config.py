"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to provider credentials, timeouts, demo mode,
  telemetry and logging settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- Environment keys are STRATUS_<SECTION>_<FIELD>; the section name is split
  off at the first underscore, so field names may themselves contain
  underscores (STRATUS_AWS_ACCESS_KEY_ID -> aws.access_key_id)
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "stratus.json"


@dataclass(frozen=True)
class GCPConfig:
    """Compute Engine access."""
    project_id: str = ""
    access_token: str = ""
    timeout_seconds: float = 30.0

    def __repr__(self) -> str:
        return (
            f"GCPConfig(project_id={self.project_id!r}, access_token=***, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )


@dataclass(frozen=True)
class AWSConfig:
    """EC2 access."""
    access_key_id: str = ""
    secret_access_key: str = ""
    session_token: str = ""
    region: str = "us-east-1"
    timeout_seconds: float = 30.0

    def __repr__(self) -> str:
        return (
            f"AWSConfig(access_key_id={self.access_key_id!r}, "
            f"secret_access_key=***, region={self.region!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )


@dataclass(frozen=True)
class DemoConfig:
    """Offline mode: adapters read static example data instead of provider APIs."""
    enabled: bool = False


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False
    service_name: str = "stratus"


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"
    json: bool = False


@dataclass(frozen=True)
class StratusConfig:
    """Root configuration for the Stratus inventory layer."""
    gcp: GCPConfig = field(default_factory=GCPConfig)
    aws: AWSConfig = field(default_factory=AWSConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _env_override(data: dict, prefix: str = "STRATUS") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern STRATUS_SECTION_KEY.
    For example: STRATUS_AWS_REGION=eu-west-1, STRATUS_DEMO_ENABLED=true
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if len(parts) != 2:
            continue
        section, field_name = parts
        if not isinstance(data.get(section), dict):
            data[section] = {}
        data[section][field_name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s must contain a JSON object", path)
        return {}
    return data


def _coerce(value: str, type_name: str):
    if type_name == "int":
        return int(value)
    if type_name == "float":
        return float(value)
    if type_name == "bool":
        return value.strip().lower() in ("true", "1", "yes", "on")
    return value


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    if not isinstance(data, dict):
        return cls()
    valid_fields = {f.name: f for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Strings come from the environment; numbers may arrive as JSON ints.
    # Nulls and non-positive timeouts fall back to the default.
    for name, value in list(filtered.items()):
        type_name = valid_fields[name].type
        try:
            if value is None:
                raise ValueError("null")
            if isinstance(value, str):
                value = _coerce(value, type_name)
            elif type_name == "float" and isinstance(value, int) and not isinstance(value, bool):
                value = float(value)
            if name.endswith("_seconds") and not value > 0:
                raise ValueError("not positive")
        except (TypeError, ValueError):
            logger.warning(
                "Ignoring invalid value %r for %s.%s", filtered[name], cls.__name__, name
            )
            del filtered[name]
            continue
        filtered[name] = value

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "STRATUS",
) -> StratusConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (STRATUS_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to stratus.json in CWD.
        env_prefix: Environment variable prefix. Defaults to STRATUS.
    """
    config_path = Path(path) if path else Path(DEFAULT_CONFIG_FILE)
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return StratusConfig(
        gcp=_build_sub_config(GCPConfig, data.get("gcp", {})),
        aws=_build_sub_config(AWSConfig, data.get("aws", {})),
        demo=_build_sub_config(DemoConfig, data.get("demo", {})),
        telemetry=_build_sub_config(TelemetryConfig, data.get("telemetry", {})),
        logging=_build_sub_config(LoggingConfig, data.get("logging", {})),
    )
