"""LDAP directory transport package.

Public API:
    - ConnectionTarget
    - DirectoryEntry
    - DirectoryClient / DirectoryConnection (interfaces)
    - Ldap3Client (ldap3 implementation)
    - escape_ldap_filter_value
"""

from .models import ConnectionTarget, DirectoryEntry
from .client import DirectoryClient, DirectoryConnection, Ldap3Client, Ldap3Connection
from .utils import escape_ldap_filter_value, uid_filter

__all__ = [
    "ConnectionTarget",
    "DirectoryEntry",
    "DirectoryClient",
    "DirectoryConnection",
    "Ldap3Client",
    "Ldap3Connection",
    "escape_ldap_filter_value",
    "uid_filter",
]
