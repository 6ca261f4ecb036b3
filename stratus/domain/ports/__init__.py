"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from stratus.domain.ports.cloud_provider_port import CloudProviderPort, StateListener
from stratus.domain.ports.credentials_port import CredentialsPort
from stratus.domain.ports.compute_api_port import GCPComputePort, EC2Port
from stratus.domain.ports.event_bus_port import EventBusPort

__all__ = [
    "CloudProviderPort",
    "StateListener",
    "CredentialsPort",
    "GCPComputePort",
    "EC2Port",
    "EventBusPort",
]
