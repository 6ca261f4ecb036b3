"""
Provider Adapter Base

Architectural Intent:
- Shared machinery behind every CloudProviderPort implementation: state
  publication, credential gating, timeouts and conversion of failures into
  LoadResult / ActionResult values
- Concrete adapters supply three hooks: _fetch_records (raw provider
  records), _transform (one record -> UnifiedInstance) and _invoke_action
  (one lifecycle call)

Design Decisions:
- Every provider call runs under asyncio.wait_for with the adapter's timeout
- No exception escapes load_instances or perform_action; cancellation is the
  only thing re-raised
- A failed load keeps the previously published instances and sets `error`
- `loading` is driven by an in-flight counter so overlapping loads keep it
  true until the last one settles; the last load to finish wins
- A record that cannot be transformed is skipped; the rest are published and
  the error names how many were dropped
"""

import asyncio
import logging
from dataclasses import replace
from typing import Any, Callable, Iterable, Optional

from stratus.domain.errors import (
    InstanceNotFoundError,
    MalformedResponseError,
    ProviderAPIError,
    StratusError,
)
from stratus.domain.ports.cloud_provider_port import StateListener
from stratus.domain.ports.credentials_port import CredentialsPort
from stratus.domain.value_objects.enums import CloudProvider, LifecycleAction
from stratus.domain.value_objects.provider_state import (
    ActionResult,
    LoadResult,
    ProviderState,
)
from stratus.domain.value_objects.unified_instance import UnifiedInstance

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class BaseProviderAdapter:
    """Template for provider adapters. Subclasses set `provider`."""

    provider: CloudProvider

    def __init__(
        self,
        credentials: CredentialsPort,
        demo_mode: bool = False,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if timeout_seconds is None or timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {timeout_seconds!r}")
        self.credentials = credentials
        self.demo_mode = demo_mode
        self.timeout_seconds = timeout_seconds
        self._state = ProviderState(provider=self.provider)
        self._listeners: list[StateListener] = []
        self._in_flight = 0

    # ------------------------------------------------------------------
    # State publication
    # ------------------------------------------------------------------

    @property
    def state(self) -> ProviderState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception(
                    "State listener %r failed for provider %s",
                    listener,
                    self.provider.value,
                )

    def is_available(self) -> bool:
        return self.demo_mode or self.credentials.is_authenticated()

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    async def _fetch_records(self) -> list[Any]:
        raise NotImplementedError

    def _transform(self, record: Any) -> UnifiedInstance:
        raise NotImplementedError

    async def _invoke_action(
        self, action: LifecycleAction, instance: UnifiedInstance
    ) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _transform_all(
        self, records: Iterable[Any]
    ) -> tuple[tuple[UnifiedInstance, ...], int]:
        instances: list[UnifiedInstance] = []
        skipped = 0
        for record in records:
            try:
                instances.append(self._transform(record))
            except Exception as e:
                skipped += 1
                logger.warning(
                    "Skipping %s record that could not be transformed: %s",
                    self.provider.value,
                    e,
                )
        return tuple(instances), skipped

    async def _load(self) -> tuple[LoadResult, bool]:
        """Run one fetch. The flag says whether the instances replace the old ones."""
        try:
            records = await asyncio.wait_for(
                self._fetch_records(), timeout=self.timeout_seconds
            )
            instances, skipped = self._transform_all(records)
        except asyncio.TimeoutError:
            message = f"request timed out after {self.timeout_seconds:g}s"
        except ProviderAPIError as e:
            message = e.message
        except MalformedResponseError as e:
            message = f"malformed response: {e}"
        except Exception as e:
            logger.exception("Unexpected error loading %s instances", self.provider.value)
            message = f"unexpected error: {type(e).__name__}: {e}"
        else:
            error: Optional[str] = None
            if skipped:
                error = f"{skipped} record(s) could not be transformed"
            return LoadResult(self.provider, instances, error), True

        logger.warning("Failed to load %s instances: %s", self.provider.value, message)
        return LoadResult.failure(self.provider, message), False

    async def load_instances(self) -> LoadResult:
        if not self.is_available():
            logger.info("%s credentials not configured, skipping", self.provider.value)
            self._publish(
                instances=(),
                loading=self._in_flight > 0,
                error=None,
                available=False,
            )
            return LoadResult.unavailable(self.provider)

        self._in_flight += 1
        self._publish(loading=True, available=True)
        settled = False
        try:
            result, replace_instances = await self._load()
            settled = True
        finally:
            self._in_flight -= 1
            if not settled:
                self._publish(loading=self._in_flight > 0)

        changes: dict[str, Any] = {
            "loading": self._in_flight > 0,
            "error": result.error,
        }
        if replace_instances:
            changes["instances"] = result.instances
        self._publish(**changes)

        logger.info(
            "Loaded %d %s instance(s)%s",
            len(self._state.instances),
            self.provider.value,
            f" (error: {result.error})" if result.error else "",
        )
        return result

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def perform_action(
        self, action: LifecycleAction, instance: UnifiedInstance
    ) -> ActionResult:
        action = LifecycleAction(action)

        def result(success: bool, message: str = "") -> ActionResult:
            return ActionResult(self.provider, action, instance.id, success, message)

        if instance.provider != self.provider:
            return result(
                False,
                f"instance {instance.id} belongs to {instance.provider.value}, "
                f"not {self.provider.value}",
            )
        if not self.is_available():
            return result(False, f"{self.provider.value} credentials not configured")

        logger.info(
            "%s %s instance %s (%s)",
            action.value,
            self.provider.value,
            instance.name,
            instance.id,
        )
        try:
            await asyncio.wait_for(
                self._invoke_action(action, instance), timeout=self.timeout_seconds
            )
        except InstanceNotFoundError as e:
            if action is LifecycleAction.DELETE:
                logger.info("Instance %s already gone, delete is a no-op", instance.id)
                return result(True, "instance already deleted")
            return result(False, e.message)
        except asyncio.TimeoutError:
            return result(False, f"request timed out after {self.timeout_seconds:g}s")
        except ProviderAPIError as e:
            logger.warning("Failed to %s %s: %s", action.value, instance.id, e)
            return result(False, e.message)
        except StratusError as e:
            logger.warning("Failed to %s %s: %s", action.value, instance.id, e)
            return result(False, str(e))
        except Exception as e:
            logger.exception("Unexpected error during %s of %s", action.value, instance.id)
            return result(False, f"unexpected error: {type(e).__name__}: {e}")
        return result(True)
