from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...errors import LdapCheckError


@dataclass(frozen=True)
class AuthResult:
    """Outcome of one credential check."""
    success: bool
    username: str
    dn: str = ""
    reason: str = ""
    detail: str = ""
    error: Optional[LdapCheckError] = None

    @classmethod
    def ok(cls, username: str, dn: str) -> "AuthResult":
        return cls(success=True, username=username, dn=dn, detail=f"user '{username}' authenticated successfully")

    @classmethod
    def failure(cls, username: str, error: LdapCheckError) -> "AuthResult":
        return cls(success=False, username=username, reason=error.reason, detail=error.detail, error=error)
