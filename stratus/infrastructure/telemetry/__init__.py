"""
Stratus Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for observability
- Metrics and traces for provider loads and lifecycle actions
"""

from stratus.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
    create_exporter,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
    "create_exporter",
]
