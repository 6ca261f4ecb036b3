"""
Aggregation Service

Architectural Intent:
- Owns the merged, provider-agnostic inventory the presentation layer reads
- Fans a load out to every registered adapter concurrently and republishes
  the merged view each time any adapter's state changes
- One adapter's failure never hides another adapter's data

Design Decisions:
- Adapters are registered in order, one per provider; that order is the
  order of the merged instance list
- _merge contains no await, so within the event loop it is atomic and a
  listener can never observe a half-merged snapshot
- Publication is incremental: the first provider to answer shows up
  immediately; wait=True only controls when the caller's coroutine returns
- Instances are de-duplicated on (provider, id), first occurrence wins
"""

import asyncio
import logging
import time
from types import MappingProxyType
from typing import Any, Callable, Optional, Sequence, Union

from stratus.domain.ports.cloud_provider_port import CloudProviderPort
from stratus.domain.value_objects.enums import CloudProvider
from stratus.domain.value_objects.provider_state import (
    NO_PROVIDERS_AVAILABLE,
    AggregatedState,
    LoadResult,
    ProviderState,
)
from stratus.domain.value_objects.unified_instance import UnifiedInstance

logger = logging.getLogger(__name__)

AggregatedListener = Callable[[AggregatedState], None]


class AggregationService:
    def __init__(
        self,
        adapters: Sequence[CloudProviderPort],
        telemetry: Optional[Any] = None,
    ):
        self._adapters: dict[CloudProvider, CloudProviderPort] = {}
        for adapter in adapters:
            if adapter.provider in self._adapters:
                raise ValueError(
                    f"Adapter for provider {adapter.provider.value} registered twice"
                )
            self._adapters[adapter.provider] = adapter

        self.telemetry = telemetry
        self._listeners: list[AggregatedListener] = []
        self._tasks: set[asyncio.Task] = set()
        self._state = AggregatedState(available_providers=tuple(self._adapters))

        for adapter in self._adapters.values():
            adapter.subscribe(self._on_adapter_state)

    @property
    def state(self) -> AggregatedState:
        return self._state

    @property
    def providers(self) -> tuple[CloudProvider, ...]:
        return tuple(self._adapters)

    def adapter_for(
        self, provider: Union[CloudProvider, str]
    ) -> Optional[CloudProviderPort]:
        try:
            return self._adapters.get(CloudProvider(provider))
        except ValueError:
            return None

    def get_current_instances(self) -> tuple[UnifiedInstance, ...]:
        return self._state.instances

    def subscribe(self, listener: AggregatedListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _on_adapter_state(self, state: ProviderState) -> None:
        self._merge()

    def _merge(self) -> AggregatedState:
        states = [adapter.state for adapter in self._adapters.values()]

        seen: set[tuple[CloudProvider, str]] = set()
        instances: list[UnifiedInstance] = []
        for provider_state in states:
            for instance in provider_state.instances:
                if instance.key in seen:
                    logger.warning(
                        "Dropping duplicate instance %s:%s",
                        instance.provider.value,
                        instance.id,
                    )
                    continue
                seen.add(instance.key)
                instances.append(instance)

        available = tuple(s.provider for s in states if s.available)
        errors = {s.provider: s.error for s in states if s.available and s.error}
        if not available:
            error: Optional[str] = NO_PROVIDERS_AVAILABLE
        elif errors:
            error = "; ".join(f"{p.value}: {message}" for p, message in errors.items())
        else:
            error = None

        self._state = AggregatedState(
            instances=tuple(instances),
            loading=any(s.loading for s in states),
            error=error,
            errors=MappingProxyType(errors),
            available_providers=available,
            revision=self._state.revision + 1,
        )
        self._notify()
        return self._state

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("Aggregated state listener %r failed", listener)

    async def _load_one(self, adapter: CloudProviderPort) -> LoadResult:
        started = time.monotonic()
        try:
            result = await adapter.load_instances()
        except Exception as e:
            logger.exception("Adapter for %s raised while loading", adapter.provider.value)
            result = LoadResult.failure(
                adapter.provider, f"unexpected error: {type(e).__name__}: {e}"
            )
        if self.telemetry is not None and result.available:
            self.telemetry.record_provider_load(
                provider=adapter.provider.value,
                duration_ms=(time.monotonic() - started) * 1000.0,
                instance_count=len(adapter.state.instances),
                success=result.ok,
            )
        return result

    async def load_all_instances(self, wait: bool = True) -> AggregatedState:
        """
        Load every provider concurrently.

        With wait=False the loads continue in the background and the current
        snapshot is returned at once; listeners still see every update.
        """
        if not self._adapters:
            logger.warning(NO_PROVIDERS_AVAILABLE)
            return self._merge()

        tasks = [
            asyncio.create_task(self._load_one(adapter))
            for adapter in self._adapters.values()
        ]
        for task in tasks:
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

        if not wait:
            return self._state

        await asyncio.gather(*tasks)
        state = self._state
        if state.error:
            logger.warning("Inventory loaded with errors: %s", state.error)
        else:
            logger.info(
                "Inventory loaded: %d instance(s) from %d provider(s)",
                len(state.instances),
                len(state.available_providers),
            )
        return state
