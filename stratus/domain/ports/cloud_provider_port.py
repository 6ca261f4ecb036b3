"""
Cloud Provider Port

Architectural Intent:
- Port interface every provider adapter implements
- Covers inventory loading, lifecycle actions and state publication
- Implemented by the GCP and AWS adapters

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- Both coroutines return result objects; implementations must never raise
- Listeners are plain callables invoked synchronously, in order, on every
  state change of the adapter
"""

from typing import Callable, Protocol, runtime_checkable

from stratus.domain.value_objects.enums import CloudProvider, LifecycleAction
from stratus.domain.value_objects.provider_state import (
    ActionResult,
    LoadResult,
    ProviderState,
)
from stratus.domain.value_objects.unified_instance import UnifiedInstance

StateListener = Callable[[ProviderState], None]


@runtime_checkable
class CloudProviderPort(Protocol):
    """Port for one cloud provider's compute inventory and lifecycle."""

    provider: CloudProvider

    @property
    def state(self) -> ProviderState:
        """The adapter's last published state."""
        ...

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener; returns a callable that unregisters it."""
        ...

    async def load_instances(self) -> LoadResult:
        """Fetch and normalise the provider's instances."""
        ...

    async def perform_action(
        self, action: LifecycleAction, instance: UnifiedInstance
    ) -> ActionResult:
        """Run a lifecycle action against one of this provider's instances."""
        ...
