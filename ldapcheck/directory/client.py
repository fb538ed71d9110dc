from __future__ import annotations

import logging
import ssl
from typing import Optional, Protocol

from ldap3 import Server, Connection, NONE, SIMPLE, SUBTREE, SYNC, Tls
from ldap3.core.exceptions import LDAPException

from ..errors import BindError, DirectoryConnectionError, SearchError
from .models import ConnectionTarget, DirectoryEntry

logger = logging.getLogger(__name__)


class DirectoryConnection(Protocol):
    """One open connection to a directory server."""

    def bind(self, dn: Optional[str] = None, password: Optional[str] = None) -> None:
        ...

    def search(self, base: str, search_filter: str) -> list[DirectoryEntry]:
        ...

    def close(self) -> None:
        ...


class DirectoryClient(Protocol):
    def connect(self, target: ConnectionTarget) -> DirectoryConnection:
        ...


def _result_message(result: dict | None) -> str:
    res = result or {}
    desc = str(res.get("description") or "").strip()
    msg = str(res.get("message") or "").strip()
    if desc and msg:
        return f"{desc} ({msg})"
    return desc or msg or "no result from server"


class Ldap3Connection:
    """DirectoryConnection backed by a single ldap3 Connection.

    Binds are issued on the same socket: the first bind is either anonymous
    or a DN bind, every later bind is a `rebind`. `unbind()` is only sent by
    `close()`.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def bind(self, dn: Optional[str] = None, password: Optional[str] = None) -> None:
        conn = self.connection
        try:
            if dn is None:
                ok = bool(conn.bind())
            else:
                ok = bool(conn.rebind(user=dn, password=password, authentication=SIMPLE))
        except LDAPException as e:
            raise BindError(BindError.INITIAL, "bind failed", str(e)) from e
        if not ok:
            raise BindError(BindError.INITIAL, "bind failed", _result_message(conn.result))

    def search(self, base: str, search_filter: str) -> list[DirectoryEntry]:
        conn = self.connection
        try:
            conn.search(
                search_base=base,
                search_filter=search_filter,
                search_scope=SUBTREE,
                attributes=["uid"],
            )
        except LDAPException as e:
            raise SearchError(f"search failed: {e}") from e

        code = (conn.result or {}).get("result")
        if code != 0:
            raise SearchError(f"search failed: {_result_message(conn.result)}")

        entries: list[DirectoryEntry] = []
        for r in conn.response or []:
            if r.get("type") != "searchResEntry":
                continue
            entries.append(DirectoryEntry(dn=str(r.get("dn") or ""), attributes=dict(r.get("attributes") or {})))
        return entries

    def close(self) -> None:
        try:
            self.connection.unbind()
        except LDAPException as e:
            logger.debug("unbind on close failed: %s", e)


class Ldap3Client:
    """DirectoryClient that opens real LDAP connections with ldap3."""

    def __init__(self, client_strategy: str = SYNC) -> None:
        self.client_strategy = client_strategy

    def connect(self, target: ConnectionTarget) -> Ldap3Connection:
        try:
            server = Server(
                target.uri,
                get_info=NONE,
                tls=Tls(validate=ssl.CERT_NONE),
                connect_timeout=float(target.timeout_s),
            )
            conn = Connection(
                server,
                auto_bind=False,
                raise_exceptions=False,
                client_strategy=self.client_strategy,
            )
            conn.open()
        except LDAPException as e:
            raise DirectoryConnectionError(f"cannot connect to {target.uri}: {e}") from e
        return Ldap3Connection(conn)
