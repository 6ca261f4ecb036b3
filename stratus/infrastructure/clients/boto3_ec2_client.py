"""
AWS EC2 Client

Architectural Intent:
- Implements EC2Port over the boto3 "ec2" client
- Returns boto3 response dicts untouched; mapping into UnifiedInstance
  belongs to the AWS adapter
- Translates botocore failures into the domain error taxonomy

Design Decisions:
- boto3 is synchronous, so every call runs in a worker thread via
  asyncio.to_thread to keep the event loop free for other providers
- describe_instances walks the paginator and concatenates Reservations in
  page order
- An existing botocore client can be injected (botocore Stubber in tests)
"""

import asyncio
import logging
from typing import Any, Callable, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from stratus.domain.errors import InstanceNotFoundError, ProviderAPIError
from stratus.infrastructure.credentials import AWSCredentials

logger = logging.getLogger(__name__)

_PROVIDER = "aws"
_NOT_FOUND_CODES = frozenset({"InvalidInstanceID.NotFound"})


class Boto3EC2Client:
    """EC2 client backed by boto3."""

    def __init__(
        self,
        credentials: AWSCredentials,
        timeout_seconds: float = 30.0,
        ec2_client: Optional[Any] = None,
    ) -> None:
        self.credentials = credentials
        self.timeout_seconds = timeout_seconds
        self._ec2 = ec2_client

    @property
    def ec2(self) -> Any:
        if self._ec2 is None:
            session = boto3.Session(
                aws_access_key_id=self.credentials.access_key_id,
                aws_secret_access_key=self.credentials.secret_access_key,
                aws_session_token=self.credentials.session_token or None,
                region_name=self.credentials.region,
            )
            self._ec2 = session.client(
                "ec2",
                config=BotoConfig(
                    connect_timeout=self.timeout_seconds,
                    read_timeout=self.timeout_seconds,
                    retries={"max_attempts": 2, "mode": "standard"},
                ),
            )
            logger.debug("Created boto3 EC2 client (region=%s)", self.credentials.region)
        return self._ec2

    async def _call(self, operation: str, fn: Callable[[], dict[str, Any]]) -> dict[str, Any]:
        logger.debug("AWS EC2 %s (region=%s)", operation, self.credentials.region)
        try:
            return await asyncio.to_thread(fn)
        except ClientError as e:
            error = e.response.get("Error", {})
            code = error.get("Code", "")
            message = f"{code}: {error.get('Message', str(e))}"
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            if code in _NOT_FOUND_CODES:
                raise InstanceNotFoundError(_PROVIDER, message, status) from e
            raise ProviderAPIError(_PROVIDER, message, status) from e
        except BotoCoreError as e:
            raise ProviderAPIError(_PROVIDER, f"{type(e).__name__}: {e}") from e

    def _describe_all(self) -> dict[str, Any]:
        paginator = self.ec2.get_paginator("describe_instances")
        reservations: list[dict[str, Any]] = []
        for page in paginator.paginate():
            reservations.extend(page.get("Reservations", []))
        return {"Reservations": reservations}

    async def describe_instances(self) -> dict[str, Any]:
        return await self._call("describe_instances", self._describe_all)

    async def start_instances(self, instance_ids: list[str]) -> dict[str, Any]:
        return await self._call(
            "start_instances", lambda: self.ec2.start_instances(InstanceIds=instance_ids)
        )

    async def stop_instances(self, instance_ids: list[str]) -> dict[str, Any]:
        return await self._call(
            "stop_instances", lambda: self.ec2.stop_instances(InstanceIds=instance_ids)
        )

    async def reboot_instances(self, instance_ids: list[str]) -> dict[str, Any]:
        return await self._call(
            "reboot_instances", lambda: self.ec2.reboot_instances(InstanceIds=instance_ids)
        )

    async def terminate_instances(self, instance_ids: list[str]) -> dict[str, Any]:
        return await self._call(
            "terminate_instances",
            lambda: self.ec2.terminate_instances(InstanceIds=instance_ids),
        )
