"""
Shared enumerations for the unified compute model.

String-valued so they serialise directly into JSON payloads and compare
equal to the plain strings presentation layers use.
"""

from enum import Enum


class CloudProvider(str, Enum):
    GCP = "gcp"
    AWS = "aws"


class InstanceStatus(str, Enum):
    """The five canonical lifecycle states shared by every provider."""

    RUNNING = "running"
    STOPPED = "stopped"
    PENDING = "pending"
    STOPPING = "stopping"
    TERMINATED = "terminated"


class LifecycleAction(str, Enum):
    START = "start"
    STOP = "stop"
    RESTART = "restart"
    DELETE = "delete"
