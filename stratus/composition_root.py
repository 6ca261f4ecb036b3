"""
Composition Root

Architectural Intent:
- Dependency injection composition root for the Stratus inventory layer
- Single place where credentials, clients, adapters and services are wired
- No adapter instantiation should occur outside this module (except tests)

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Demo mode swaps the provider clients for in-memory ones; adapters and
  everything above them are wired identically in both modes
- Telemetry is always constructed; it stays disabled without an endpoint
"""

from dataclasses import dataclass
from typing import Optional, Union

from stratus.application.services.aggregation_service import AggregationService
from stratus.application.services.lifecycle_dispatcher import LifecycleDispatcher
from stratus.domain.ports.compute_api_port import EC2Port, GCPComputePort
from stratus.infrastructure.adapters.aws_adapter import AWSAdapter
from stratus.infrastructure.adapters.gcp_adapter import GCPAdapter
from stratus.infrastructure.clients.boto3_ec2_client import Boto3EC2Client
from stratus.infrastructure.clients.demo_clients import DemoEC2Client, DemoGCPComputeClient
from stratus.infrastructure.clients.gcp_rest_client import GCPRestComputeClient
from stratus.infrastructure.config import StratusConfig, load_config
from stratus.infrastructure.credentials import AWSCredentials, GCPCredentials
from stratus.infrastructure.event_bus import EventBus
from stratus.infrastructure.logging import configure_logging
from stratus.infrastructure.telemetry.otel_exporter import OTELExporter, create_exporter


@dataclass
class StratusContainer:
    """DI container holding all wired dependencies."""

    config: StratusConfig
    gcp_adapter: GCPAdapter
    aws_adapter: AWSAdapter
    event_bus: EventBus
    telemetry: OTELExporter
    aggregation_service: AggregationService
    dispatcher: LifecycleDispatcher


def create_container(config: Optional[StratusConfig] = None) -> StratusContainer:
    """Create and wire all dependencies."""
    config = config or load_config()
    configure_logging(config.logging.level, json_format=config.logging.json)

    demo = config.demo.enabled
    gcp_credentials = GCPCredentials.from_config(config.gcp)
    aws_credentials = AWSCredentials.from_config(config.aws)

    gcp_client: Union[GCPComputePort, DemoGCPComputeClient]
    ec2_client: Union[EC2Port, DemoEC2Client]
    if demo:
        gcp_client = DemoGCPComputeClient()
        ec2_client = DemoEC2Client()
    else:
        gcp_client = GCPRestComputeClient(
            gcp_credentials, timeout_seconds=config.gcp.timeout_seconds
        )
        ec2_client = Boto3EC2Client(
            aws_credentials, timeout_seconds=config.aws.timeout_seconds
        )

    gcp_adapter = GCPAdapter(
        gcp_client,
        gcp_credentials,
        demo_mode=demo,
        timeout_seconds=config.gcp.timeout_seconds,
    )
    aws_adapter = AWSAdapter(
        ec2_client,
        aws_credentials,
        demo_mode=demo,
        timeout_seconds=config.aws.timeout_seconds,
    )

    event_bus = EventBus()
    telemetry = create_exporter(
        endpoint=config.telemetry.endpoint,
        service_name=config.telemetry.service_name,
        insecure=config.telemetry.insecure,
    )

    aggregation_service = AggregationService([gcp_adapter, aws_adapter], telemetry=telemetry)
    dispatcher = LifecycleDispatcher(aggregation_service, event_bus=event_bus, telemetry=telemetry)

    return StratusContainer(
        config=config,
        gcp_adapter=gcp_adapter,
        aws_adapter=aws_adapter,
        event_bus=event_bus,
        telemetry=telemetry,
        aggregation_service=aggregation_service,
        dispatcher=dispatcher,
    )
