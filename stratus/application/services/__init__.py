"""
Application Services Package

Architectural Intent:
- Merges per-provider inventories into one view
- Routes lifecycle requests to the owning provider adapter
"""

from stratus.application.services.aggregation_service import AggregationService
from stratus.application.services.lifecycle_dispatcher import LifecycleDispatcher

__all__ = ["AggregationService", "LifecycleDispatcher"]
