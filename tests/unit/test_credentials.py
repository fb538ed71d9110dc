import io
from pathlib import Path

import pytest

from ldapcheck.credentials import Credentials, read_password_source, resolve_credentials
from ldapcheck.errors import PasswordSourceError


def test_direct_values_are_used_without_password_source() -> None:
    creds = resolve_credentials("alice", "secret", "cn=admin,dc=x", "adminpw")
    assert creds == Credentials("alice", "secret", "cn=admin,dc=x", "adminpw")


def test_direct_values_without_bind_credentials() -> None:
    creds = resolve_credentials("alice", "secret")
    assert creds.bind_dn is None
    assert creds.bind_password is None
    assert not creds.has_service_bind


def test_two_line_file_sets_both_passwords(tmp_path: Path) -> None:
    pw = tmp_path / "pw"
    pw.write_text("filesecret\nfileadmin\n", encoding="utf-8")
    creds = resolve_credentials("alice", "ignored", "cn=admin,dc=x", "ignored-too", password_source=str(pw))
    assert creds.password == "filesecret"
    assert creds.bind_password == "fileadmin"
    assert creds.bind_dn == "cn=admin,dc=x"


def test_one_line_file_leaves_bind_password_unresolved(tmp_path: Path) -> None:
    pw = tmp_path / "pw"
    pw.write_text("filesecret\n", encoding="utf-8")
    creds = resolve_credentials("alice", "ignored", bind_password="direct", password_source=str(pw))
    assert creds.password == "filesecret"
    assert creds.bind_password is None


def test_crlf_terminators_are_stripped(tmp_path: Path) -> None:
    pw = tmp_path / "pw"
    pw.write_bytes(b"p@ss word\r\nadmin\r\nthird line\r\n")
    assert read_password_source(str(pw)) == ("p@ss word", "admin")


def test_last_line_without_terminator(tmp_path: Path) -> None:
    pw = tmp_path / "pw"
    pw.write_text("only", encoding="utf-8")
    assert read_password_source(str(pw)) == ("only", None)


def test_empty_file_gives_empty_password(tmp_path: Path) -> None:
    pw = tmp_path / "pw"
    pw.write_text("", encoding="utf-8")
    creds = resolve_credentials("alice", "direct", password_source=str(pw))
    assert creds.password == ""


def test_dash_reads_standard_input() -> None:
    creds = resolve_credentials("alice", password_source="-", stdin=io.StringIO("fromstdin\nbindpw\n"))
    assert creds.password == "fromstdin"
    assert creds.bind_password == "bindpw"


def test_missing_file_raises_io_error(tmp_path: Path) -> None:
    missing = tmp_path / "nope"
    with pytest.raises(PasswordSourceError) as exc:
        resolve_credentials("alice", password_source=str(missing))
    assert exc.value.path == str(missing)
    assert exc.value.reason == "io"
    assert str(missing) in exc.value.detail


def test_password_ending_in_carriage_return_keeps_it(tmp_path: Path) -> None:
    pw = tmp_path / "pw"
    pw.write_bytes(b"secret\r\r\nadmin\n")
    assert read_password_source(str(pw)) == ("secret\r", "admin")


def test_non_utf8_file_raises_io_error(tmp_path: Path) -> None:
    pw = tmp_path / "pw"
    pw.write_bytes(b"s\xe9cret\n")
    with pytest.raises(PasswordSourceError) as exc:
        resolve_credentials("alice", password_source=str(pw))
    assert "UTF-8" in exc.value.detail


def test_standard_input_is_consumed_and_closed() -> None:
    src = io.StringIO("a\nb\nc\n")
    creds = resolve_credentials("alice", password_source="-", stdin=src)
    assert (creds.password, creds.bind_password) == ("a", "b")
    assert src.closed
