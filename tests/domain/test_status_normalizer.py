"""Tests for provider status normalization."""

import logging

import pytest

from stratus.domain.services.status_normalizer import (
    known_statuses,
    normalize_status,
    status_color,
)
from stratus.domain.value_objects.enums import CloudProvider, InstanceStatus


class TestGCPStatuses:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("RUNNING", InstanceStatus.RUNNING),
            ("STOPPED", InstanceStatus.STOPPED),
            ("SUSPENDING", InstanceStatus.STOPPED),
            ("SUSPENDED", InstanceStatus.STOPPED),
            ("PROVISIONING", InstanceStatus.PENDING),
            ("STAGING", InstanceStatus.PENDING),
            ("REPAIRING", InstanceStatus.PENDING),
            ("STOPPING", InstanceStatus.STOPPING),
            ("TERMINATED", InstanceStatus.TERMINATED),
        ],
    )
    def test_table(self, raw, expected):
        assert normalize_status(CloudProvider.GCP, raw) is expected

    def test_case_insensitive(self):
        assert normalize_status(CloudProvider.GCP, "running") is InstanceStatus.RUNNING
        assert normalize_status(CloudProvider.GCP, " Staging ") is InstanceStatus.PENDING


class TestAWSStatuses:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("running", InstanceStatus.RUNNING),
            ("stopped", InstanceStatus.STOPPED),
            ("pending", InstanceStatus.PENDING),
            ("stopping", InstanceStatus.STOPPING),
            ("shutting-down", InstanceStatus.STOPPING),
            ("terminated", InstanceStatus.TERMINATED),
        ],
    )
    def test_table(self, raw, expected):
        assert normalize_status(CloudProvider.AWS, raw) is expected

    def test_accepts_provider_string(self):
        assert normalize_status("aws", "RUNNING") is InstanceStatus.RUNNING


class TestUnknownStatuses:
    @pytest.mark.parametrize("raw", ["HIBERNATING", "", None, "rebooting"])
    def test_unknown_falls_back_to_stopped(self, raw, caplog):
        with caplog.at_level(logging.WARNING, logger="stratus"):
            status = normalize_status(CloudProvider.AWS, raw)
        assert status is InstanceStatus.STOPPED
        assert "unknown status encountered" in caplog.text

    def test_unknown_provider_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING, logger="stratus"):
            status = normalize_status("azure", "Running")
        assert status is InstanceStatus.STOPPED
        assert "unknown status encountered" in caplog.text

    def test_known_status_not_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="stratus"):
            normalize_status(CloudProvider.GCP, "RUNNING")
        assert caplog.records == []

    @pytest.mark.parametrize("provider", list(CloudProvider))
    def test_output_always_canonical(self, provider):
        for raw in list(known_statuses(provider)) + ["garbage", "", None]:
            assert normalize_status(provider, raw) in set(InstanceStatus)


class TestStatusColor:
    def test_colors(self):
        assert status_color(InstanceStatus.RUNNING) == "#34a853"
        assert status_color(InstanceStatus.STOPPED) == "#ea4335"
        assert status_color(InstanceStatus.PENDING) == "#fbbc04"
        assert status_color(InstanceStatus.STOPPING) == "#ff9800"
        assert status_color(InstanceStatus.TERMINATED) == "#9e9e9e"

    def test_accepts_plain_string(self):
        assert status_color("running") == "#34a853"

    def test_every_status_has_a_color(self):
        assert len({status_color(s) for s in InstanceStatus}) == len(InstanceStatus)
