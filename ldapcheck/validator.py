from __future__ import annotations

from .credentials import Credentials
from .directory.models import ConnectionTarget
from .errors import ConfigError


def validate_inputs(credentials: Credentials, uri: str, search_base: str) -> ConnectionTarget:
    """Check required fields and bind DN/password pairing.

    Pure, no I/O. Raises ConfigError for the first violation found and
    returns the ConnectionTarget to use otherwise.
    """
    uri = (uri or "").strip()
    if not uri:
        raise ConfigError("uri", "missing directory server URI (-H)")
    if not (search_base or "").strip():
        raise ConfigError("search_base", "missing search base (-b)")
    if not credentials.username:
        raise ConfigError("username", "missing username (-u)")
    if not credentials.password:
        raise ConfigError("password", "missing password (-p or -y)")

    has_dn = credentials.bind_dn is not None
    has_pw = credentials.bind_password is not None
    if has_dn and not has_pw:
        raise ConfigError("bind_password", "bind DN (-D) given without bind password (-w)")
    if has_pw and not has_dn:
        raise ConfigError("bind_dn", "bind password (-w) given without bind DN (-D)")

    return ConnectionTarget(uri=uri)
