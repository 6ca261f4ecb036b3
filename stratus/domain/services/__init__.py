"""
Domain Services Package

Architectural Intent:
- Stateless, side-effect-free functions shared by every provider adapter
"""

from stratus.domain.services.status_normalizer import (
    normalize_status,
    status_color,
    known_statuses,
)
from stratus.domain.services.resource_path import (
    last_path_segment,
    path_segment_after,
    extract_zone_name,
    extract_machine_type_name,
    extract_network_name,
    zone_to_region,
    aws_availability_zone,
    aws_region,
    aws_name_tag,
)

__all__ = [
    "normalize_status",
    "status_color",
    "known_statuses",
    "last_path_segment",
    "path_segment_after",
    "extract_zone_name",
    "extract_machine_type_name",
    "extract_network_name",
    "zone_to_region",
    "aws_availability_zone",
    "aws_region",
    "aws_name_tag",
]
