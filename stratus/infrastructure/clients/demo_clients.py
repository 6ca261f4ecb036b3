"""
Demo Compute Clients

Architectural Intent:
- Implement GCPComputePort and EC2Port without any network access, for demo
  environments and tests
- Responses are shaped exactly like the real Compute Engine aggregatedList
  and EC2 DescribeInstances payloads, so the adapters run the same
  transformation code for demo and real data
- Lifecycle calls mutate an in-memory registry that plays the role of the
  provider backend

Design Decisions:
- Every client owns a deep copy of the example data; responses are deep
  copies again so callers can never alter the registry
- Actions are idempotent: stopping a stopped instance succeeds and leaves it
  stopped; unknown instances raise InstanceNotFoundError like the real APIs
- An optional latency simulates network round trips
"""

import asyncio
import copy
import datetime
import logging
import uuid
from typing import Any, Optional

from stratus.domain.errors import InstanceNotFoundError

logger = logging.getLogger(__name__)

DEMO_GCP_PROJECT = "my-project"


# ---------------------------------------------------------------------------
# Example data builders
# ---------------------------------------------------------------------------

def _gcp_instance(
    instance_id: str,
    name: str,
    zone: str,
    machine_type: str,
    status: str,
    internal_ip: str,
    external_ip: Optional[str],
    created: str,
    labels: dict[str, str],
    description: str,
) -> dict[str, Any]:
    zone_path = f"projects/{DEMO_GCP_PROJECT}/zones/{zone}"
    region = zone.rsplit("-", 1)[0]
    access_configs = []
    if external_ip:
        access_configs.append(
            {
                "type": "ONE_TO_ONE_NAT",
                "name": "External NAT",
                "natIP": external_ip,
                "networkTier": "PREMIUM",
                "kind": "compute#accessConfig",
            }
        )
    return {
        "kind": "compute#instance",
        "id": instance_id,
        "name": name,
        "description": description,
        "zone": zone_path,
        "machineType": f"{zone_path}/machineTypes/{machine_type}",
        "status": status,
        "creationTimestamp": created,
        "networkInterfaces": [
            {
                "name": "nic0",
                "network": f"projects/{DEMO_GCP_PROJECT}/global/networks/default",
                "subnetwork": f"projects/{DEMO_GCP_PROJECT}/regions/{region}/subnetworks/default",
                "networkIP": internal_ip,
                "accessConfigs": access_configs,
                "kind": "compute#networkInterface",
                "stackType": "IPV4_ONLY",
            }
        ],
        "disks": [
            {
                "boot": True,
                "autoDelete": True,
                "deviceName": "persistent-disk-0",
                "source": f"{zone_path}/disks/{name}",
                "type": "PERSISTENT",
                "mode": "READ_WRITE",
                "kind": "compute#attachedDisk",
            }
        ],
        "labels": labels,
        "selfLink": f"{zone_path}/instances/{name}",
        "cpuPlatform": "Intel Broadwell",
        "scheduling": {
            "automaticRestart": True,
            "onHostMaintenance": "MIGRATE",
            "preemptible": False,
        },
        "deletionProtection": False,
    }


def _aws_instance(
    instance_id: str,
    image_id: str,
    state: tuple[int, str],
    instance_type: str,
    availability_zone: str,
    private_ip: str,
    public_ip: Optional[str],
    launch_time: str,
    tags: dict[str, str],
    subnet_id: str,
    vpc_id: str,
) -> dict[str, Any]:
    record: dict[str, Any] = {
        "InstanceId": instance_id,
        "ImageId": image_id,
        "State": {"Code": state[0], "Name": state[1]},
        "PrivateDnsName": f"ip-{private_ip.replace('.', '-')}.ec2.internal",
        "StateTransitionReason": "",
        "InstanceType": instance_type,
        "Placement": {
            "AvailabilityZone": availability_zone,
            "GroupName": "",
            "Tenancy": "default",
        },
        "Hypervisor": "xen",
        "Architecture": "x86_64",
        "RootDeviceType": "ebs",
        "RootDeviceName": "/dev/sda1",
        "VirtualizationType": "hvm",
        "Tags": [{"Key": k, "Value": v} for k, v in tags.items()],
        "LaunchTime": launch_time,
        "PrivateIpAddress": private_ip,
        "SubnetId": subnet_id,
        "VpcId": vpc_id,
    }
    if public_ip:
        record["PublicIpAddress"] = public_ip
    return record


def demo_gcp_instances() -> list[dict[str, Any]]:
    """Example Compute Engine instances."""
    return [
        _gcp_instance(
            "1234567890123456789", "web-server-1", "us-central1-a", "e2-medium",
            "RUNNING", "10.128.0.2", "34.72.45.123", "2024-01-15T10:30:00.000-08:00",
            {"environment": "production", "team": "backend", "application": "web-server"},
            "Web server for production environment",
        ),
        _gcp_instance(
            "9876543210987654321", "database-server", "us-central1-b", "n1-standard-4",
            "RUNNING", "10.128.0.3", None, "2024-01-20T14:20:00.000-08:00",
            {"environment": "production", "team": "data", "application": "postgresql"},
            "PostgreSQL database server",
        ),
        _gcp_instance(
            "5555444433332222111", "worker-node-1", "us-west1-a", "e2-standard-2",
            "STOPPED", "10.138.0.2", None, "2024-02-01T09:15:00.000-08:00",
            {"environment": "staging", "team": "ml"},
            "Worker node for ML batch processing",
        ),
        _gcp_instance(
            "7777888899990000111", "api-gateway", "europe-west1-b", "e2-small",
            "RUNNING", "10.132.0.2", "35.195.123.45", "2024-01-25T11:45:00.000-08:00",
            {"environment": "production", "team": "api"},
            "API Gateway for microservices",
        ),
    ]


def demo_aws_instances() -> list[dict[str, Any]]:
    """Example EC2 instances."""
    return [
        _aws_instance(
            "i-1234567890abcdef0", "ami-0abcdef1234567890", (16, "running"), "t3.medium",
            "us-east-1a", "172.31.32.10", "54.123.45.67", "2024-01-15T10:30:00.000Z",
            {"Name": "web-server-aws", "Environment": "production", "Project": "demo"},
            "subnet-12345678", "vpc-12345678",
        ),
        _aws_instance(
            "i-0987654321fedcba0", "ami-0fedcba0987654321", (80, "stopped"), "t3.small",
            "us-east-1b", "172.31.45.20", None, "2024-01-10T08:15:00.000Z",
            {"Name": "database-server-aws", "Environment": "development", "Project": "demo"},
            "subnet-87654321", "vpc-87654321",
        ),
    ]


def _now() -> str:
    return datetime.datetime.now(datetime.UTC).isoformat()


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------

class DemoGCPComputeClient:
    """In-memory Compute Engine backend."""

    def __init__(
        self,
        instances: Optional[list[dict[str, Any]]] = None,
        latency_seconds: float = 0.0,
    ) -> None:
        source = demo_gcp_instances() if instances is None else instances
        self._instances: list[dict[str, Any]] = copy.deepcopy(source)
        self.latency_seconds = latency_seconds

    async def _simulate_latency(self) -> None:
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)

    def _find(self, zone: str, name: str) -> dict[str, Any]:
        for instance in self._instances:
            if instance.get("name") == name and instance.get("zone", "").endswith(f"/zones/{zone}"):
                return instance
        raise InstanceNotFoundError(
            "gcp", f"The resource 'zones/{zone}/instances/{name}' was not found", 404
        )

    def _operation(self, operation_type: str, zone: str, name: str) -> dict[str, Any]:
        now = _now()
        return {
            "kind": "compute#operation",
            "id": str(uuid.uuid4().int >> 64),
            "name": f"operation-{operation_type}-{uuid.uuid4().hex[:8]}",
            "zone": f"projects/{DEMO_GCP_PROJECT}/zones/{zone}",
            "operationType": operation_type,
            "targetLink": f"projects/{DEMO_GCP_PROJECT}/zones/{zone}/instances/{name}",
            "status": "DONE",
            "progress": 100,
            "insertTime": now,
            "startTime": now,
            "endTime": now,
        }

    async def aggregated_list_instances(self) -> dict[str, Any]:
        await self._simulate_latency()
        items: dict[str, dict[str, Any]] = {}
        for instance in self._instances:
            scope = "zones/" + instance["zone"].rsplit("/", 1)[-1]
            items.setdefault(scope, {"instances": []})["instances"].append(
                copy.deepcopy(instance)
            )
        logger.debug("Demo GCP aggregated list: %d instance(s)", len(self._instances))
        return {"kind": "compute#instanceAggregatedList", "items": items}

    async def start_instance(self, zone: str, name: str) -> dict[str, Any]:
        await self._simulate_latency()
        instance = self._find(zone, name)
        instance["status"] = "RUNNING"
        instance["lastStartTimestamp"] = _now()
        return self._operation("start", zone, name)

    async def stop_instance(self, zone: str, name: str) -> dict[str, Any]:
        await self._simulate_latency()
        instance = self._find(zone, name)
        if instance["status"] != "TERMINATED":
            instance["status"] = "STOPPED"
            instance["lastStopTimestamp"] = _now()
        return self._operation("stop", zone, name)

    async def reset_instance(self, zone: str, name: str) -> dict[str, Any]:
        await self._simulate_latency()
        instance = self._find(zone, name)
        instance["status"] = "RUNNING"
        instance["lastStartTimestamp"] = _now()
        return self._operation("reset", zone, name)

    async def delete_instance(self, zone: str, name: str) -> dict[str, Any]:
        await self._simulate_latency()
        instance = self._find(zone, name)
        self._instances.remove(instance)
        return self._operation("delete", zone, name)


class DemoEC2Client:
    """In-memory EC2 backend."""

    _STATES = {
        "running": (16, "running"),
        "stopped": (80, "stopped"),
        "terminated": (48, "terminated"),
    }

    def __init__(
        self,
        instances: Optional[list[dict[str, Any]]] = None,
        latency_seconds: float = 0.0,
    ) -> None:
        source = demo_aws_instances() if instances is None else instances
        self._instances: list[dict[str, Any]] = copy.deepcopy(source)
        self.latency_seconds = latency_seconds

    async def _simulate_latency(self) -> None:
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)

    def _find_all(self, instance_ids: list[str]) -> list[dict[str, Any]]:
        by_id = {i["InstanceId"]: i for i in self._instances}
        missing = [iid for iid in instance_ids if iid not in by_id]
        if missing:
            raise InstanceNotFoundError(
                "aws",
                f"InvalidInstanceID.NotFound: The instance IDs '{', '.join(missing)}' do not exist",
                400,
            )
        return [by_id[iid] for iid in instance_ids]

    def _transition(
        self, instance_ids: list[str], target: str, allowed_from: Optional[set[str]] = None
    ) -> list[dict[str, Any]]:
        changes = []
        for instance in self._find_all(instance_ids):
            previous = dict(instance["State"])
            if allowed_from is None or previous["Name"] in allowed_from:
                code, name = self._STATES[target]
                instance["State"] = {"Code": code, "Name": name}
            changes.append(
                {
                    "InstanceId": instance["InstanceId"],
                    "CurrentState": dict(instance["State"]),
                    "PreviousState": previous,
                }
            )
        return changes

    def _metadata(self) -> dict[str, Any]:
        return {"RequestId": str(uuid.uuid4()), "HTTPStatusCode": 200, "HTTPHeaders": {}}

    async def describe_instances(self) -> dict[str, Any]:
        await self._simulate_latency()
        return {
            "Reservations": [
                {
                    "ReservationId": "r-" + instance["InstanceId"][2:],
                    "OwnerId": "123456789012",
                    "Instances": [copy.deepcopy(instance)],
                }
                for instance in self._instances
            ],
            "ResponseMetadata": self._metadata(),
        }

    async def start_instances(self, instance_ids: list[str]) -> dict[str, Any]:
        await self._simulate_latency()
        changes = self._transition(instance_ids, "running", {"stopped", "running"})
        return {"StartingInstances": changes, "ResponseMetadata": self._metadata()}

    async def stop_instances(self, instance_ids: list[str]) -> dict[str, Any]:
        await self._simulate_latency()
        changes = self._transition(instance_ids, "stopped", {"running", "stopped"})
        return {"StoppingInstances": changes, "ResponseMetadata": self._metadata()}

    async def reboot_instances(self, instance_ids: list[str]) -> dict[str, Any]:
        await self._simulate_latency()
        self._find_all(instance_ids)
        return {"ResponseMetadata": self._metadata()}

    async def terminate_instances(self, instance_ids: list[str]) -> dict[str, Any]:
        await self._simulate_latency()
        changes = self._transition(instance_ids, "terminated")
        return {"TerminatingInstances": changes, "ResponseMetadata": self._metadata()}
