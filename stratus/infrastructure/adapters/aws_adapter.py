"""
AWS Cloud Provider Adapter

Architectural Intent:
- Implements CloudProviderPort for AWS EC2
- Talks to EC2 only through EC2Port, so the boto3 client and the demo client
  share this exact transformation path

Design Decisions:
- DescribeInstances reservations are flattened in order
- Field mapping:
    id            <- InstanceId
    name          <- "Name" tag (falls back to InstanceId)
    region        <- Placement.AvailabilityZone
    instance_type <- InstanceType
    internal_ip   <- PrivateIpAddress
    external_ip   <- PublicIpAddress
    created_at    <- LaunchTime (boto3 datetimes rendered as ISO 8601)
- Restart maps to RebootInstances; delete to TerminateInstances
"""

import datetime
import logging
from typing import Any

from stratus.domain.errors import MalformedResponseError
from stratus.domain.ports.compute_api_port import EC2Port
from stratus.domain.ports.credentials_port import CredentialsPort
from stratus.domain.services.resource_path import aws_availability_zone, aws_name_tag
from stratus.domain.services.status_normalizer import normalize_status
from stratus.domain.value_objects.enums import CloudProvider, LifecycleAction
from stratus.domain.value_objects.unified_instance import (
    AWSInstanceData,
    UnifiedInstance,
)
from stratus.infrastructure.adapters.base import (
    DEFAULT_TIMEOUT_SECONDS,
    BaseProviderAdapter,
)

logger = logging.getLogger(__name__)

_ACTION_METHODS = {
    LifecycleAction.START: "start_instances",
    LifecycleAction.STOP: "stop_instances",
    LifecycleAction.RESTART: "reboot_instances",
    LifecycleAction.DELETE: "terminate_instances",
}


def flatten_reservations(response: Any) -> list[Any]:
    """Pull every instance record out of a DescribeInstances response."""
    if not isinstance(response, dict):
        raise MalformedResponseError("DescribeInstances response is not an object")
    reservations = response.get("Reservations")
    if not isinstance(reservations, list):
        raise MalformedResponseError("DescribeInstances response has no 'Reservations' list")

    records: list[Any] = []
    for reservation in reservations:
        if not isinstance(reservation, dict):
            raise MalformedResponseError("reservation is not an object")
        records.extend(reservation.get("Instances") or [])
    return records


def _launch_time(value: Any) -> str:
    if isinstance(value, datetime.datetime):
        return value.isoformat()
    return str(value) if value else ""


class AWSAdapter(BaseProviderAdapter):
    """EC2 inventory and lifecycle."""

    provider = CloudProvider.AWS

    def __init__(
        self,
        client: EC2Port,
        credentials: CredentialsPort,
        demo_mode: bool = False,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(credentials, demo_mode, timeout_seconds)
        self.client = client

    async def _fetch_records(self) -> list[Any]:
        response = await self.client.describe_instances()
        records = flatten_reservations(response)
        logger.debug("EC2 DescribeInstances returned %d record(s)", len(records))
        return records

    def _transform(self, record: Any) -> UnifiedInstance:
        instance_id = record["InstanceId"]
        state = record.get("State") or {}

        return UnifiedInstance(
            id=instance_id,
            name=aws_name_tag(record) or instance_id,
            provider=CloudProvider.AWS,
            region=aws_availability_zone(record),
            instance_type=record.get("InstanceType") or "",
            status=normalize_status(CloudProvider.AWS, state.get("Name")),
            provider_data=AWSInstanceData(record),
            internal_ip=record.get("PrivateIpAddress") or "",
            external_ip=record.get("PublicIpAddress") or "",
            created_at=_launch_time(record.get("LaunchTime")),
        )

    async def _invoke_action(
        self, action: LifecycleAction, instance: UnifiedInstance
    ) -> None:
        data = instance.provider_data
        instance_id = (
            data.instance_id if isinstance(data, AWSInstanceData) else ""
        ) or instance.id
        await getattr(self.client, _ACTION_METHODS[action])([instance_id])
