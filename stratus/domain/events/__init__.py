"""
Domain Events Package

Architectural Intent:
- Events are the mechanism for telling other components that a lifecycle
  action happened without coupling the dispatcher to them
"""

from stratus.domain.events.event_base import DomainEvent
from stratus.domain.events.lifecycle_events import (
    LifecycleActionSucceededEvent,
    LifecycleActionFailedEvent,
)

__all__ = [
    "DomainEvent",
    "LifecycleActionSucceededEvent",
    "LifecycleActionFailedEvent",
]
