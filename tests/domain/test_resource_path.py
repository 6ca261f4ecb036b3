"""Tests for resource path parsing helpers."""

import datetime

from stratus.domain.services.resource_path import (
    aws_availability_zone,
    aws_name_tag,
    aws_region,
    extract_machine_type_name,
    extract_network_name,
    extract_zone_name,
    last_path_segment,
    path_segment_after,
    zone_to_region,
)

ZONE_URL = "https://www.googleapis.com/compute/v1/projects/my-project/zones/us-central1-a"
MACHINE_TYPE_URL = "projects/my-project/zones/us-central1-a/machineTypes/e2-medium"


class TestPathSegments:
    def test_segment_after_keyword(self):
        assert path_segment_after(MACHINE_TYPE_URL, "zones") == "us-central1-a"
        assert path_segment_after(MACHINE_TYPE_URL, "machineTypes") == "e2-medium"

    def test_trailing_slash(self):
        assert path_segment_after("projects/p/zones/us-west1-a/", "zones") == "us-west1-a"

    def test_missing_keyword_returns_input(self):
        assert path_segment_after("projects/p/regions/us-west1", "zones") == (
            "projects/p/regions/us-west1"
        )

    def test_keyword_is_last_segment_returns_input(self):
        assert path_segment_after("projects/p/zones", "zones") == "projects/p/zones"
        assert path_segment_after("projects/p/zones/", "zones") == "projects/p/zones/"

    def test_none_is_empty(self):
        assert path_segment_after(None, "zones") == ""
        assert last_path_segment(None) == ""

    def test_last_segment(self):
        assert last_path_segment("a/b/c/") == "c"
        assert last_path_segment("plain") == "plain"
        assert last_path_segment("") == ""


class TestGCPExtractors:
    def test_zone_from_url(self):
        assert extract_zone_name(ZONE_URL) == "us-central1-a"

    def test_bare_zone(self):
        assert extract_zone_name("europe-west1-b") == "europe-west1-b"

    def test_machine_type(self):
        assert extract_machine_type_name(MACHINE_TYPE_URL) == "e2-medium"
        assert extract_machine_type_name("n1-standard-4") == "n1-standard-4"
        assert extract_machine_type_name(None) == ""

    def test_network(self):
        assert extract_network_name("projects/p/global/networks/default") == "default"
        assert extract_network_name("") == ""


class TestZoneToRegion:
    def test_gcp_zone(self):
        assert zone_to_region("us-central1-a") == "us-central1"
        assert zone_to_region(ZONE_URL) == "us-central1"

    def test_aws_zone(self):
        assert zone_to_region("us-east-1a") == "us-east-1"

    def test_unrecognised_shape_unchanged(self):
        assert zone_to_region("global") == "global"
        assert zone_to_region("") == ""


class TestAWSFields:
    def test_availability_zone_and_region(self, aws_records):
        record = aws_records[0]
        assert aws_availability_zone(record) == "us-east-1a"
        assert aws_region(record) == "us-east-1"

    def test_missing_placement(self):
        assert aws_availability_zone({}) == ""
        assert aws_availability_zone(None) == ""
        assert aws_region({"Placement": None}) == ""

    def test_name_tag(self):
        record = {
            "Tags": [
                {"Key": "Environment", "Value": "prod"},
                {"Key": "Name", "Value": "web"},
            ],
            "LaunchTime": datetime.datetime(2024, 1, 1),
        }
        assert aws_name_tag(record) == "web"

    def test_untagged(self):
        assert aws_name_tag({"InstanceId": "i-1"}) == ""
        assert aws_name_tag({"Tags": [{"Key": "Team", "Value": "x"}]}) == ""
