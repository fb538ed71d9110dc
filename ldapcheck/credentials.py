from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import IO, Optional

from .errors import PasswordSourceError

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str
    bind_dn: Optional[str] = None
    bind_password: Optional[str] = None

    @property
    def has_service_bind(self) -> bool:
        return self.bind_dn is not None


def _strip_eol(line: str) -> Optional[str]:
    if not line:
        return None
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _read_two_lines(handle: IO[str]) -> tuple[Optional[str], Optional[str]]:
    first = _strip_eol(handle.readline())
    second = _strip_eol(handle.readline())
    # consume the rest of the source
    handle.read()
    return first, second


def read_password_source(source: str, stdin: Optional[IO[str]] = None) -> tuple[Optional[str], Optional[str]]:
    """Read (password, bind_password) from a password file or standard input.

    Line 1 is the user password, optional line 2 the service bind password.
    A missing line comes back as None. `source == "-"` reads `stdin`, which
    is closed afterwards like a file would be.
    """
    try:
        if source == STDIN_SOURCE:
            logger.debug("reading passwords from standard input")
            handle = stdin if stdin is not None else sys.stdin
            with handle as f:
                return _read_two_lines(f)

        with open(source, "r", encoding="utf-8", newline="\n") as f:
            return _read_two_lines(f)
    except OSError as e:
        raise PasswordSourceError(source, f"cannot read password file '{source}': {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise PasswordSourceError(source, f"cannot read password file '{source}': not valid UTF-8 ({e.reason})") from e


def resolve_credentials(
    username: Optional[str],
    password: Optional[str] = None,
    bind_dn: Optional[str] = None,
    bind_password: Optional[str] = None,
    password_source: Optional[str] = None,
    stdin: Optional[IO[str]] = None,
) -> Credentials:
    """Merge direct inputs with an optional password source.

    A password source replaces both the direct password and the direct
    bind password, even when it only holds one line.
    """
    if password_source is not None:
        password, bind_password = read_password_source(password_source, stdin=stdin)

    return Credentials(
        username=username or "",
        password=password or "",
        bind_dn=bind_dn or None,
        bind_password=bind_password,
    )
