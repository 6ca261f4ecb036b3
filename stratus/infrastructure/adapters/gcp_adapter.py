"""
GCP Cloud Provider Adapter

Architectural Intent:
- Implements CloudProviderPort for Google Cloud Platform Compute Engine
- Talks to Compute Engine only through GCPComputePort, so the REST client and
  the demo client share this exact transformation path

Design Decisions:
- Inventory comes from the aggregated instances list (every zone at once);
  the per-zone "items" buckets are flattened in response order
- Zone scopes that carry only a "warning" (no instances) are ignored
- Field mapping:
    id            <- id
    name          <- name (falls back to id)
    region        <- zone name (last segment of the zone URL)
    instance_type <- machine type name
    internal_ip   <- networkInterfaces[0].networkIP
    external_ip   <- networkInterfaces[0].accessConfigs[0].natIP
    created_at    <- creationTimestamp
- Restart maps to instances.reset; delete to HTTP DELETE
"""

import logging
from typing import Any

from stratus.domain.errors import MalformedResponseError
from stratus.domain.ports.compute_api_port import GCPComputePort
from stratus.domain.ports.credentials_port import CredentialsPort
from stratus.domain.services.resource_path import (
    extract_machine_type_name,
    extract_zone_name,
)
from stratus.domain.services.status_normalizer import normalize_status
from stratus.domain.value_objects.enums import CloudProvider, LifecycleAction
from stratus.domain.value_objects.unified_instance import (
    GCPInstanceData,
    UnifiedInstance,
)
from stratus.infrastructure.adapters.base import (
    DEFAULT_TIMEOUT_SECONDS,
    BaseProviderAdapter,
)

logger = logging.getLogger(__name__)

_ACTION_METHODS = {
    LifecycleAction.START: "start_instance",
    LifecycleAction.STOP: "stop_instance",
    LifecycleAction.RESTART: "reset_instance",
    LifecycleAction.DELETE: "delete_instance",
}


def _first(items: Any) -> dict[str, Any]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def flatten_aggregated_list(response: Any) -> list[Any]:
    """Pull every instance record out of an InstanceAggregatedList."""
    if not isinstance(response, dict):
        raise MalformedResponseError("aggregated list response is not an object")
    items = response.get("items")
    if not isinstance(items, dict):
        raise MalformedResponseError("aggregated list response has no 'items' map")

    records: list[Any] = []
    for scope, scoped in items.items():
        if not isinstance(scoped, dict):
            raise MalformedResponseError(f"scope {scope!r} is not an object")
        instances = scoped.get("instances") or []
        if not isinstance(instances, list):
            raise MalformedResponseError(f"scope {scope!r} instances is not a list")
        records.extend(instances)
    return records


class GCPAdapter(BaseProviderAdapter):
    """Compute Engine inventory and lifecycle."""

    provider = CloudProvider.GCP

    def __init__(
        self,
        client: GCPComputePort,
        credentials: CredentialsPort,
        demo_mode: bool = False,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        super().__init__(credentials, demo_mode, timeout_seconds)
        self.client = client

    async def _fetch_records(self) -> list[Any]:
        response = await self.client.aggregated_list_instances()
        records = flatten_aggregated_list(response)
        logger.debug("GCP aggregated list returned %d record(s)", len(records))
        return records

    def _transform(self, record: Any) -> UnifiedInstance:
        if not isinstance(record, dict):
            raise TypeError(f"expected instance object, got {type(record).__name__}")
        instance_id = str(record.get("id") or "")
        nic = _first(record.get("networkInterfaces"))
        access_config = _first(nic.get("accessConfigs"))

        return UnifiedInstance(
            id=instance_id,
            name=record.get("name") or instance_id,
            provider=CloudProvider.GCP,
            region=extract_zone_name(record.get("zone")),
            instance_type=extract_machine_type_name(record.get("machineType")),
            status=normalize_status(CloudProvider.GCP, record.get("status")),
            provider_data=GCPInstanceData(record),
            internal_ip=nic.get("networkIP") or "",
            external_ip=access_config.get("natIP") or "",
            created_at=record.get("creationTimestamp") or "",
        )

    async def _invoke_action(
        self, action: LifecycleAction, instance: UnifiedInstance
    ) -> None:
        data = instance.provider_data
        zone = data.zone_name if isinstance(data, GCPInstanceData) else ""
        name = (data.instance_name if isinstance(data, GCPInstanceData) else "") or instance.name
        if not zone:
            raise MalformedResponseError(f"instance {instance.id} has no zone")

        operation = await getattr(self.client, _ACTION_METHODS[action])(zone, name)
        logger.debug(
            "GCP %s operation for %s/%s: %s",
            action.value,
            zone,
            name,
            (operation or {}).get("name"),
        )
