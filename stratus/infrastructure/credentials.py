"""
Static Credential Providers

Architectural Intent:
- Implements CredentialsPort for each provider from loaded configuration
- Credential acquisition (OAuth consent, key storage) happens outside the
  library; these objects only carry what a client needs to connect

Design Decisions:
- Frozen dataclasses; secrets are excluded from repr so they never reach logs
"""

from dataclasses import dataclass, field

from stratus.infrastructure.config import AWSConfig, GCPConfig


@dataclass(frozen=True)
class GCPCredentials:
    project_id: str = ""
    access_token: str = field(default="", repr=False)

    def is_authenticated(self) -> bool:
        return bool(self.project_id and self.access_token)

    @classmethod
    def from_config(cls, config: GCPConfig) -> "GCPCredentials":
        return cls(project_id=config.project_id, access_token=config.access_token)


@dataclass(frozen=True)
class AWSCredentials:
    access_key_id: str = ""
    secret_access_key: str = field(default="", repr=False)
    region: str = "us-east-1"
    session_token: str = field(default="", repr=False)

    def is_authenticated(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)

    @classmethod
    def from_config(cls, config: AWSConfig) -> "AWSCredentials":
        return cls(
            access_key_id=config.access_key_id,
            secret_access_key=config.secret_access_key,
            region=config.region,
            session_token=config.session_token,
        )
