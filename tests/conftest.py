from __future__ import annotations

import logging
from typing import Optional

import pytest

from ldapcheck.directory import ConnectionTarget, DirectoryEntry
from ldapcheck.env_settings import get_env
from ldapcheck.errors import BindError, DirectoryConnectionError, SearchError


class FakeConnection:
    def __init__(self, directory: "FakeDirectory") -> None:
        self.directory = directory

    def bind(self, dn: Optional[str] = None, password: Optional[str] = None) -> None:
        self.directory.calls.append(("bind", dn, password))
        expected = self.directory.passwords.get(dn) if dn is not None else None
        if dn is None and self.directory.allow_anonymous:
            return
        if dn is None or expected is None or expected != password:
            raise BindError(BindError.INITIAL, "bind failed", "invalidCredentials")

    def search(self, base: str, search_filter: str) -> list[DirectoryEntry]:
        self.directory.calls.append(("search", base, search_filter))
        if self.directory.search_error:
            raise SearchError(f"search failed: {self.directory.search_error}")
        return [DirectoryEntry(dn=dn) for dn in self.directory.results]

    def close(self) -> None:
        self.directory.calls.append(("close",))


class FakeDirectory:
    """Scripted DirectoryClient that records every call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.passwords: dict[str, str] = {}
        self.results: list[str] = []
        self.allow_anonymous = True
        self.refuse_connect = False
        self.search_error = ""

    def connect(self, target: ConnectionTarget) -> FakeConnection:
        self.calls.append(("connect", target.uri, target.timeout_s))
        if self.refuse_connect:
            raise DirectoryConnectionError(f"cannot connect to {target.uri}: connection refused")
        return FakeConnection(self)

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


@pytest.fixture
def directory() -> FakeDirectory:
    d = FakeDirectory()
    d.passwords["uid=alice,dc=x"] = "secret"
    d.passwords["cn=admin,dc=x"] = "adminpw"
    d.results = ["uid=alice,dc=x"]
    return d


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("LDAPCHECK_URI", "LDAPCHECK_BASE", "LDAPCHECK_LOG_LEVEL", "LDAPCHECK_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    get_env.cache_clear()
    yield
    get_env.cache_clear()


@pytest.fixture(autouse=True)
def _drop_console_handler():
    yield
    from ldapcheck import log_config

    root = logging.getLogger()
    for handler in (log_config._console_handler, log_config._file_handler):
        if handler is not None and handler in root.handlers:
            root.removeHandler(handler)
