"""
Provider and Aggregated State Value Objects

Architectural Intent:
- ProviderState is the snapshot one adapter publishes after every change
- AggregatedState is the merged, read-only view the presentation layer reads
- LoadResult / ActionResult carry adapter failures as data so no exception
  ever crosses an adapter boundary

Design Decisions:
- All snapshots are frozen and hold tuples / read-only mappings; a state
  change is always a full replacement, never an interior mutation
- The aggregated `outcome` separates "nothing configured" and "everything
  failed" from a successful empty inventory
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from stratus.domain.value_objects.enums import CloudProvider, LifecycleAction
from stratus.domain.value_objects.unified_instance import UnifiedInstance

NO_PROVIDERS_AVAILABLE = "No cloud providers available"


class LoadOutcome(str, Enum):
    OK = "ok"
    PARTIAL_FAILURE = "partial_failure"
    TOTAL_FAILURE = "total_failure"
    NO_PROVIDERS = "no_providers"


@dataclass(frozen=True)
class ProviderState:
    """Snapshot of one adapter's inventory."""

    provider: CloudProvider
    instances: tuple[UnifiedInstance, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    available: bool = True

    @property
    def has_error(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a single adapter load."""

    provider: CloudProvider
    instances: tuple[UnifiedInstance, ...] = ()
    error: Optional[str] = None
    available: bool = True

    @property
    def ok(self) -> bool:
        return self.error is None

    @staticmethod
    def unavailable(provider: CloudProvider) -> "LoadResult":
        return LoadResult(provider=provider, available=False)

    @staticmethod
    def failure(provider: CloudProvider, message: str) -> "LoadResult":
        return LoadResult(provider=provider, error=message)


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a lifecycle action against one instance."""

    provider: CloudProvider
    action: LifecycleAction
    instance_id: str
    success: bool
    message: str = ""


@dataclass(frozen=True)
class AggregatedState:
    """
    Merged view across all adapters.

    `instances` is the concatenation of every adapter's instances in
    registration order with (provider, id) duplicates removed.
    """

    instances: tuple[UnifiedInstance, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    errors: Mapping[CloudProvider, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    available_providers: tuple[CloudProvider, ...] = ()
    revision: int = 0

    @property
    def outcome(self) -> LoadOutcome:
        if not self.available_providers:
            return LoadOutcome.NO_PROVIDERS
        failed = [p for p in self.available_providers if p in self.errors]
        if not failed:
            return LoadOutcome.OK
        if len(failed) == len(self.available_providers):
            return LoadOutcome.TOTAL_FAILURE
        return LoadOutcome.PARTIAL_FAILURE

    @property
    def is_empty(self) -> bool:
        return not self.instances

    def instances_for(self, provider: CloudProvider) -> tuple[UnifiedInstance, ...]:
        return tuple(i for i in self.instances if i.provider == provider)

    def find(self, provider: CloudProvider, instance_id: str) -> Optional[UnifiedInstance]:
        for instance in self.instances:
            if instance.provider == provider and instance.id == instance_id:
                return instance
        return None
