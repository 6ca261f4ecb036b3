"""
Lifecycle Dispatcher

Architectural Intent:
- Single entry point for start / stop / restart / delete requests coming
  from the presentation layer
- Routes each request to the adapter registered for the instance's provider
  and reports a plain boolean back to the caller

Design Decisions:
- Never raises: unknown providers, adapter failures and unexpected errors all
  become False, with the detail in the logs and in a failure event
- The aggregated list is never edited optimistically; after a successful
  action the whole inventory is reloaded so the list reflects provider truth
"""

import logging
from typing import Any, Optional, Union

from stratus.domain.events.lifecycle_events import (
    LifecycleActionFailedEvent,
    LifecycleActionSucceededEvent,
)
from stratus.domain.ports.event_bus_port import EventBusPort
from stratus.domain.value_objects.enums import LifecycleAction
from stratus.domain.value_objects.unified_instance import UnifiedInstance
from stratus.application.services.aggregation_service import AggregationService

logger = logging.getLogger(__name__)

# Every action changes provider-side state, so each one triggers a reload
MUTATING_ACTIONS = frozenset(LifecycleAction)


class LifecycleDispatcher:
    def __init__(
        self,
        aggregation_service: AggregationService,
        event_bus: Optional[EventBusPort] = None,
        telemetry: Optional[Any] = None,
    ):
        self.aggregation_service = aggregation_service
        self.event_bus = event_bus
        self.telemetry = telemetry

    async def dispatch(
        self, action: Union[LifecycleAction, str], instance: UnifiedInstance
    ) -> bool:
        try:
            action = LifecycleAction(action)
        except ValueError:
            logger.error("Unsupported lifecycle action %r", action)
            return False

        adapter = self.aggregation_service.adapter_for(instance.provider)
        if adapter is None:
            reason = f"no adapter registered for provider {instance.provider.value}"
            logger.error("Cannot %s %s: %s", action.value, instance.id, reason)
            await self._finish(action, instance, False, reason)
            return False

        try:
            result = await adapter.perform_action(action, instance)
        except Exception as e:
            logger.exception("Failed to %s instance %s", action.value, instance.id)
            await self._finish(action, instance, False, f"{type(e).__name__}: {e}")
            return False

        if not result.success:
            logger.error(
                "Failed to %s instance %s: %s", action.value, instance.id, result.message
            )
        await self._finish(action, instance, result.success, result.message)

        if result.success and action in MUTATING_ACTIONS:
            try:
                await self.aggregation_service.load_all_instances()
            except Exception:
                logger.exception(
                    "Reload after %s of %s failed", action.value, instance.id
                )
        return result.success

    async def _finish(
        self,
        action: LifecycleAction,
        instance: UnifiedInstance,
        success: bool,
        reason: str,
    ) -> None:
        if self.telemetry is not None:
            self.telemetry.record_lifecycle_action(
                provider=instance.provider.value,
                action=action.value,
                success=success,
            )
        if self.event_bus is None:
            return

        aggregate_id = f"{instance.provider.value}:{instance.id}"
        if success:
            event = LifecycleActionSucceededEvent(
                aggregate_id=aggregate_id,
                provider=instance.provider.value,
                action=action.value,
                instance_name=instance.name,
            )
        else:
            event = LifecycleActionFailedEvent(
                aggregate_id=aggregate_id,
                provider=instance.provider.value,
                action=action.value,
                instance_name=instance.name,
                reason=reason,
            )
        await self.event_bus.publish([event])

    async def start_instance(self, instance: UnifiedInstance) -> bool:
        return await self.dispatch(LifecycleAction.START, instance)

    async def stop_instance(self, instance: UnifiedInstance) -> bool:
        return await self.dispatch(LifecycleAction.STOP, instance)

    async def restart_instance(self, instance: UnifiedInstance) -> bool:
        return await self.dispatch(LifecycleAction.RESTART, instance)

    async def delete_instance(self, instance: UnifiedInstance) -> bool:
        return await self.dispatch(LifecycleAction.DELETE, instance)
