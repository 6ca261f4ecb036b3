"""
Resource Path Parser

Architectural Intent:
- Pure helpers that pull structured fields out of provider identifiers
- Two families: URL-style GCP resource paths
  (".../projects/p/zones/us-central1-a/machineTypes/e2-medium") and flat
  AWS records where the field is already a named attribute
- Never raise on malformed input; return the original value (or "") instead
"""

from typing import Any, Mapping, Optional


def _segments(path: str) -> list[str]:
    return [s for s in path.split("/") if s]


def last_path_segment(path: Optional[str]) -> str:
    """Return the final non-empty path segment, or the input unchanged."""
    path = path or ""
    segments = _segments(path)
    return segments[-1] if segments else path


def path_segment_after(path: Optional[str], keyword: str) -> str:
    """
    Return the segment that follows `keyword` in a slash-separated path.

    >>> path_segment_after("projects/p/zones/us-central1-a/", "zones")
    'us-central1-a'

    When the keyword is absent, or is the last segment, the input is
    returned unchanged.
    """
    path = path or ""
    segments = _segments(path)
    for index, segment in enumerate(segments[:-1]):
        if segment == keyword:
            return segments[index + 1]
    return path


def extract_zone_name(zone: Optional[str]) -> str:
    """Zone URL (or bare zone name) -> zone name."""
    zone = zone or ""
    if "/" not in zone:
        return zone
    return path_segment_after(zone, "zones")


def extract_machine_type_name(machine_type: Optional[str]) -> str:
    """Machine type URL -> machine type name (e.g. 'e2-medium')."""
    machine_type = machine_type or ""
    if "/" not in machine_type:
        return machine_type
    return path_segment_after(machine_type, "machineTypes")


def extract_network_name(network: Optional[str]) -> str:
    network = network or ""
    if "/" not in network:
        return network
    return path_segment_after(network, "networks")


def zone_to_region(zone: Optional[str]) -> str:
    """
    Strip the zone suffix from a zone name.

    GCP zones look like 'us-central1-a'; AWS availability zones look like
    'us-east-1a'. Anything that matches neither shape is returned unchanged.
    """
    zone = extract_zone_name(zone)
    head, sep, tail = zone.rpartition("-")
    if sep and len(tail) == 1 and tail.isalpha():
        return head
    if len(zone) > 1 and zone[-1].isalpha() and zone[-2].isdigit():
        return zone[:-1]
    return zone


def aws_availability_zone(record: Optional[Mapping[str, Any]]) -> str:
    placement = (record or {}).get("Placement") or {}
    return placement.get("AvailabilityZone") or ""


def aws_region(record: Optional[Mapping[str, Any]]) -> str:
    return zone_to_region(aws_availability_zone(record))


def aws_name_tag(record: Optional[Mapping[str, Any]]) -> str:
    """Value of the EC2 'Name' tag, or '' when untagged."""
    for tag in (record or {}).get("Tags") or []:
        if tag.get("Key") == "Name":
            return tag.get("Value") or ""
    return ""
