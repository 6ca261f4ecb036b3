"""
Status Normalizer

Architectural Intent:
- Translate each provider's status vocabulary into the canonical
  InstanceStatus enum
- Table-driven so adding a provider or a status is a data change
- Unknown values degrade to STOPPED and are logged, never raised, so gaps in
  a table are discoverable without breaking consumers
"""

import logging
from typing import Optional, Union

from stratus.domain.value_objects.enums import CloudProvider, InstanceStatus

logger = logging.getLogger(__name__)

FALLBACK_STATUS = InstanceStatus.STOPPED

# Keys are stored upper-case; lookups are case-insensitive.
_STATUS_TABLES: dict[CloudProvider, dict[str, InstanceStatus]] = {
    CloudProvider.GCP: {
        "RUNNING": InstanceStatus.RUNNING,
        "STOPPED": InstanceStatus.STOPPED,
        "SUSPENDING": InstanceStatus.STOPPED,
        "SUSPENDED": InstanceStatus.STOPPED,
        "PROVISIONING": InstanceStatus.PENDING,
        "STAGING": InstanceStatus.PENDING,
        "REPAIRING": InstanceStatus.PENDING,
        "STOPPING": InstanceStatus.STOPPING,
        "TERMINATED": InstanceStatus.TERMINATED,
    },
    CloudProvider.AWS: {
        "RUNNING": InstanceStatus.RUNNING,
        "STOPPED": InstanceStatus.STOPPED,
        "PENDING": InstanceStatus.PENDING,
        "STOPPING": InstanceStatus.STOPPING,
        "SHUTTING-DOWN": InstanceStatus.STOPPING,
        "TERMINATED": InstanceStatus.TERMINATED,
    },
}

_STATUS_COLORS: dict[InstanceStatus, str] = {
    InstanceStatus.RUNNING: "#34a853",
    InstanceStatus.STOPPED: "#ea4335",
    InstanceStatus.PENDING: "#fbbc04",
    InstanceStatus.STOPPING: "#ff9800",
    InstanceStatus.TERMINATED: "#9e9e9e",
}


def known_statuses(provider: CloudProvider) -> tuple[str, ...]:
    """Native status strings the table for `provider` recognises."""
    return tuple(_STATUS_TABLES.get(provider, {}))


def normalize_status(
    provider: Union[CloudProvider, str], raw_status: Optional[str]
) -> InstanceStatus:
    """Map a provider-native status string onto the canonical enum."""
    try:
        provider = CloudProvider(provider)
    except ValueError:
        logger.warning(
            "unknown status encountered: no status table for provider %r "
            "(status=%r)",
            provider,
            raw_status,
        )
        return FALLBACK_STATUS

    key = (raw_status or "").strip().upper()
    status = _STATUS_TABLES.get(provider, {}).get(key)
    if status is None:
        logger.warning(
            "unknown status encountered: provider=%s status=%r, using %s",
            provider.value,
            raw_status,
            FALLBACK_STATUS.value,
        )
        return FALLBACK_STATUS
    return status


def status_color(status: InstanceStatus) -> str:
    """Stable display colour token for a canonical status."""
    return _STATUS_COLORS[InstanceStatus(status)]
