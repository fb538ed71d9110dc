from __future__ import annotations


def escape_ldap_filter_value(value: str) -> str:
    """RFC 4515 escaping for LDAP filter values."""
    out: list[str] = []
    for ch in value:
        if ch == "\\":
            out.append("\\5c")
        elif ch == "*":
            out.append("\\2a")
        elif ch == "(":
            out.append("\\28")
        elif ch == ")":
            out.append("\\29")
        elif ch == "\x00":
            out.append("\\00")
        else:
            out.append(ch)
    return "".join(out)


def uid_filter(username: str) -> str:
    """Build the `(uid=...)` equality filter for an untrusted username."""
    return f"(uid={escape_ldap_filter_value(username)})"
