from __future__ import annotations

import logging
from typing import Optional

from ...credentials import Credentials
from ...directory import ConnectionTarget, DirectoryClient, DirectoryEntry, Ldap3Client, uid_filter
from ...errors import BindError, InternalError, LdapCheckError, ResultError
from .backend import AuthResult

logger = logging.getLogger(__name__)


def check_cardinality(entries: list[DirectoryEntry], search_filter: str, count: Optional[int] = None) -> DirectoryEntry:
    """Return the single matching entry or raise.

    `count` defaults to len(entries); it is a separate argument so a
    collaborator reporting its own count is checked the same way.
    """
    n = len(entries) if count is None else count
    if n < 0:
        raise InternalError(f"directory reported a negative entry count ({n}) for {search_filter}")
    if n == 0:
        raise ResultError(ResultError.NOT_FOUND, n, f"no user found for {search_filter}")
    if n > 1:
        raise ResultError(ResultError.AMBIGUOUS, n, f"ambiguous user: {n} entries match {search_filter}")
    if len(entries) != 1:
        raise InternalError(f"directory reported {n} entry but returned {len(entries)} for {search_filter}")
    return entries[0]


def run_protocol(
    credentials: Credentials,
    target: ConnectionTarget,
    search_base: str,
    client: DirectoryClient,
) -> str:
    """Connect, bind, search, check cardinality and bind as the found entry.

    Returns the DN the user authenticated as. Raises the first
    LdapCheckError encountered; later phases never run.
    """
    username = credentials.username

    logger.debug("connecting to %s (timeout %ss)", target.uri, target.timeout_s)
    conn = client.connect(target)
    try:
        try:
            if credentials.has_service_bind:
                logger.debug("service bind as %s", credentials.bind_dn)
                conn.bind(credentials.bind_dn, credentials.bind_password)
            else:
                logger.debug("anonymous bind")
                conn.bind()
        except BindError as e:
            raise BindError(BindError.INITIAL, "initial bind failed", e.server_message) from e

        flt = uid_filter(username)
        logger.debug("searching %s with %s", search_base, flt)
        entries = conn.search(search_base, flt)
        logger.debug("search returned %d entries", len(entries))

        entry = check_cardinality(entries, flt)

        logger.debug("final bind as %s", entry.dn)
        try:
            conn.bind(entry.dn, credentials.password)
        except BindError as e:
            raise BindError(
                BindError.AUTHENTICATION,
                f"authentication failed for user '{username}'",
                e.server_message,
            ) from e
        return entry.dn
    finally:
        conn.close()


def authenticate(
    credentials: Credentials,
    target: ConnectionTarget,
    search_base: str,
    client: Optional[DirectoryClient] = None,
) -> AuthResult:
    """Run the credential check and fold any failure into an AuthResult."""
    client = client or Ldap3Client()
    try:
        dn = run_protocol(credentials, target, search_base, client)
    except LdapCheckError as e:
        logger.info("check failed for %s [%s]: %s", credentials.username, e.reason, e.detail)
        return AuthResult.failure(credentials.username, e)
    logger.info("user %s authenticated as %s", credentials.username, dn)
    return AuthResult.ok(credentials.username, dn)
