from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_CONNECT_TIMEOUT_S = 2


@dataclass(frozen=True)
class ConnectionTarget:
    uri: str
    timeout_s: int = DEFAULT_CONNECT_TIMEOUT_S


@dataclass
class DirectoryEntry:
    dn: str
    attributes: dict[str, Any] = field(default_factory=dict)
