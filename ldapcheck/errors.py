from __future__ import annotations


class LdapCheckError(Exception):
    """Base class for every terminal failure of a credential check."""

    reason = "error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ConfigError(LdapCheckError):
    reason = "config"

    def __init__(self, field: str, detail: str) -> None:
        super().__init__(detail)
        self.field = field


class PasswordSourceError(LdapCheckError):
    reason = "io"

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(detail)
        self.path = path


class DirectoryConnectionError(LdapCheckError):
    reason = "connection"


class BindError(LdapCheckError):
    reason = "bind"

    INITIAL = "initial"
    AUTHENTICATION = "authentication"

    def __init__(self, phase: str, detail: str, server_message: str = "") -> None:
        super().__init__(f"{detail}: {server_message}" if server_message else detail)
        self.phase = phase
        self.server_message = server_message


class SearchError(LdapCheckError):
    reason = "search"


class ResultError(LdapCheckError):
    reason = "result"

    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"

    def __init__(self, kind: str, count: int, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind
        self.count = count


class InternalError(LdapCheckError):
    """An invariant the directory collaborator should guarantee was broken."""

    reason = "internal"
