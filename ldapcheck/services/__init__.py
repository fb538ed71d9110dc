"""Service layer: the credential check protocol."""

from .auth.backend import AuthResult
from .auth.ldap import authenticate, check_cardinality, run_protocol

__all__ = ["AuthResult", "authenticate", "check_cardinality", "run_protocol"]
