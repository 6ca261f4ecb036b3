"""
Lifecycle Events

Published by the LifecycleDispatcher after every dispatched action. The
aggregate id is the instance's global key rendered as "<provider>:<id>".
"""

from dataclasses import dataclass
from typing import Any

from stratus.domain.events.event_base import DomainEvent


@dataclass(frozen=True)
class LifecycleActionSucceededEvent(DomainEvent):
    provider: str = ""
    action: str = ""
    instance_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            provider=self.provider,
            action=self.action,
            instance_name=self.instance_name,
        )
        return data


@dataclass(frozen=True)
class LifecycleActionFailedEvent(DomainEvent):
    provider: str = ""
    action: str = ""
    instance_name: str = ""
    reason: str = ""

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update(
            provider=self.provider,
            action=self.action,
            instance_name=self.instance_name,
            reason=self.reason,
        )
        return data
