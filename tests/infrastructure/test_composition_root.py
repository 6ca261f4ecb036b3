"""Tests for composition root DI container."""

from stratus.composition_root import StratusContainer, create_container
from stratus.infrastructure.clients.boto3_ec2_client import Boto3EC2Client
from stratus.infrastructure.clients.demo_clients import DemoEC2Client, DemoGCPComputeClient
from stratus.infrastructure.clients.gcp_rest_client import GCPRestComputeClient
from stratus.infrastructure.config import (
    AWSConfig,
    DemoConfig,
    GCPConfig,
    StratusConfig,
)
from stratus.infrastructure.credentials import AWSCredentials, GCPCredentials


class TestCompositionRoot:
    def test_create_container(self):
        container = create_container(StratusConfig())

        assert isinstance(container, StratusContainer)
        assert container.gcp_adapter is not None
        assert container.aws_adapter is not None
        assert container.event_bus is not None
        assert container.telemetry.initialized is False

    def test_real_clients_by_default(self):
        config = StratusConfig(
            gcp=GCPConfig(project_id="p", access_token="t", timeout_seconds=12.0),
            aws=AWSConfig(access_key_id="AKIA", secret_access_key="s", region="eu-west-1"),
        )
        container = create_container(config)

        assert isinstance(container.gcp_adapter.client, GCPRestComputeClient)
        assert isinstance(container.aws_adapter.client, Boto3EC2Client)
        assert container.gcp_adapter.timeout_seconds == 12.0
        assert container.gcp_adapter.client.timeout_seconds == 12.0
        assert container.aws_adapter.client.credentials.region == "eu-west-1"
        assert container.gcp_adapter.is_available()

    def test_demo_mode_uses_demo_clients(self):
        container = create_container(StratusConfig(demo=DemoConfig(enabled=True)))

        assert isinstance(container.gcp_adapter.client, DemoGCPComputeClient)
        assert isinstance(container.aws_adapter.client, DemoEC2Client)
        assert container.gcp_adapter.is_available()
        assert container.aws_adapter.is_available()

    def test_credentials_built_from_config(self):
        container = create_container(StratusConfig(gcp=GCPConfig(project_id="p")))
        assert isinstance(container.gcp_adapter.credentials, GCPCredentials)
        assert isinstance(container.aws_adapter.credentials, AWSCredentials)
        assert not container.gcp_adapter.is_available()

    def test_services_share_adapters(self):
        container = create_container(StratusConfig())
        service = container.aggregation_service

        assert service.providers == (container.gcp_adapter.provider, container.aws_adapter.provider)
        assert service.adapter_for("gcp") is container.gcp_adapter
        assert service.adapter_for("aws") is container.aws_adapter
        assert container.dispatcher.aggregation_service is service
        assert container.dispatcher.event_bus is container.event_bus
        assert service.telemetry is container.telemetry
