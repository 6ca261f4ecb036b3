"""
Credentials Port

Architectural Intent:
- The only thing the core asks of a credential provider is whether it can
  authenticate; the concrete credential shape is adapter-specific
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialsPort(Protocol):
    def is_authenticated(self) -> bool: ...
