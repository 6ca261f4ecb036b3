"""
Provider Compute API Ports

Architectural Intent:
- Narrow contracts over each provider's compute REST API
- Implementations return provider-native JSON (dicts) untouched; mapping into
  the unified model is the adapter's job
- Real clients and demo clients implement the same port, so the adapter's
  transformation path is identical for real and demo data

Error contract:
- InstanceNotFoundError when the target instance does not exist
- ProviderAPIError for every other API / transport failure
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GCPComputePort(Protocol):
    """Compute Engine v1 instances API."""

    async def aggregated_list_instances(self) -> dict[str, Any]:
        """Return an InstanceAggregatedList: {"items": {"zones/<z>": {"instances": [...]}}}."""
        ...

    async def start_instance(self, zone: str, name: str) -> dict[str, Any]: ...

    async def stop_instance(self, zone: str, name: str) -> dict[str, Any]: ...

    async def reset_instance(self, zone: str, name: str) -> dict[str, Any]: ...

    async def delete_instance(self, zone: str, name: str) -> dict[str, Any]: ...


@runtime_checkable
class EC2Port(Protocol):
    """EC2 instance API."""

    async def describe_instances(self) -> dict[str, Any]:
        """Return a DescribeInstances response: {"Reservations": [{"Instances": [...]}]}."""
        ...

    async def start_instances(self, instance_ids: list[str]) -> dict[str, Any]: ...

    async def stop_instances(self, instance_ids: list[str]) -> dict[str, Any]: ...

    async def reboot_instances(self, instance_ids: list[str]) -> dict[str, Any]: ...

    async def terminate_instances(self, instance_ids: list[str]) -> dict[str, Any]: ...
