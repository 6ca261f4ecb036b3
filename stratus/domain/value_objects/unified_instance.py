"""
Unified Instance Value Object

Architectural Intent:
- Provider-agnostic record of one compute instance, built by a provider
  adapter and owned by the aggregation service once published
- Keeps the raw provider record in a tagged variant so callers that need
  provider-specific fields pattern-match on the provider discriminant
- Display helpers are derived properties, never stored state

Design Decisions:
- Frozen dataclasses; the raw record is a private deep copy so later changes
  in a client's registry can never leak into a published instance
- Global identity is the (provider, id) pair exposed as `key`
"""

from __future__ import annotations
import copy
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from stratus.domain.errors import UnsupportedProviderError
from stratus.domain.services.resource_path import extract_zone_name
from stratus.domain.services.status_normalizer import status_color
from stratus.domain.value_objects.enums import CloudProvider, InstanceStatus


@dataclass(frozen=True)
class GCPInstanceData:
    """Raw Compute Engine instance resource."""

    record: dict[str, Any]
    provider: CloudProvider = field(default=CloudProvider.GCP, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "record", copy.deepcopy(dict(self.record)))

    @property
    def instance_name(self) -> str:
        return self.record.get("name") or ""

    @property
    def zone_name(self) -> str:
        return extract_zone_name(self.record.get("zone") or "")


@dataclass(frozen=True)
class AWSInstanceData:
    """Raw EC2 instance description (one element of Reservations[].Instances)."""

    record: dict[str, Any]
    provider: CloudProvider = field(default=CloudProvider.AWS, init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "record", copy.deepcopy(dict(self.record)))

    @property
    def instance_id(self) -> str:
        return self.record.get("InstanceId") or ""


ProviderData = Union[GCPInstanceData, AWSInstanceData]


@dataclass(frozen=True)
class UnifiedInstance:
    """
    Value Object representing one compute instance across any provider.
    """

    id: str
    name: str
    provider: CloudProvider
    region: str
    instance_type: str
    status: InstanceStatus
    provider_data: ProviderData
    internal_ip: str = ""
    external_ip: str = ""
    created_at: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("UnifiedInstance id cannot be empty")
        if self.provider_data.provider != self.provider:
            raise ValueError(
                f"provider_data belongs to {self.provider_data.provider.value}, "
                f"not {self.provider.value}"
            )

    @property
    def key(self) -> tuple[CloudProvider, str]:
        return (self.provider, self.id)

    @property
    def status_color(self) -> str:
        return status_color(self.status)

    @property
    def display_region(self) -> str:
        return self.region or "unknown"

    @property
    def display_instance_type(self) -> str:
        return self.instance_type or "unknown"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "provider": self.provider.value,
            "region": self.region,
            "instance_type": self.instance_type,
            "status": self.status.value,
            "internal_ip": self.internal_ip,
            "external_ip": self.external_ip,
            "created_at": self.created_at,
            "status_color": self.status_color,
            "display_region": self.display_region,
            "display_instance_type": self.display_instance_type,
            "provider_data": copy.deepcopy(self.provider_data.record),
        }

    def __str__(self) -> str:
        return f"{self.provider.value}:{self.id} ({self.name}, {self.status.value})"


def provider_data_for(provider: CloudProvider, record: Mapping[str, Any]) -> ProviderData:
    """Wrap a raw record in the variant matching its provider."""
    try:
        provider = CloudProvider(provider)
    except ValueError:
        raise UnsupportedProviderError(f"No provider data variant for {provider!r}") from None
    if provider is CloudProvider.GCP:
        return GCPInstanceData(dict(record))
    if provider is CloudProvider.AWS:
        return AWSInstanceData(dict(record))
    raise UnsupportedProviderError(f"No provider data variant for {provider!r}")
