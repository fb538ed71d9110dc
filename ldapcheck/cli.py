"""Command line entry point for ldapcheck."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO, Optional, Sequence

from . import __version__
from .credentials import resolve_credentials
from .directory import DirectoryClient
from .env_settings import get_env
from .errors import LdapCheckError
from .log_config import setup_logging
from .services import authenticate
from .validator import validate_inputs

logger = logging.getLogger(__name__)

MANUAL = """\
NAME
    ldapcheck - check a username and password against an LDAP directory

SYNOPSIS
    ldapcheck -H URI -b BASE -u USER (-p PASSWORD | -y FILE) [-D DN -w PASSWORD]

DESCRIPTION
    Connects to the directory at URI (2 second connect timeout), binds as
    the service DN given with -D/-w or anonymously, searches BASE for
    (uid=USER) and, when exactly one entry matches, binds again as that
    entry with the user's password on the same connection.

OPTIONS
    -H URI        directory server URI, e.g. ldap://ldap.example.org
    -b BASE       search base DN
    -u USER       username, matched against the uid attribute
    -p PASSWORD   user password
    -D DN         service bind DN used for the search (needs -w)
    -w PASSWORD   service bind password (needs -D)
    -y FILE       read passwords from FILE, or from standard input when FILE
                  is "-"; overrides -p and -w
    -v            debug logging on stderr
    -h, --help    short usage
    --man         this manual

PASSWORD FILE
    Plain text. Line 1 is the user password, optional line 2 the service
    bind password. Line terminators are stripped.

EXIT STATUS
    0 when the user entry was found and the password was accepted,
    1 on any failure (configuration, connection, bind, search, no or
    several matching entries).

ENVIRONMENT
    LDAPCHECK_URI        default for -H
    LDAPCHECK_BASE       default for -b
    LDAPCHECK_LOG_LEVEL  log level (default WARNING)
    LDAPCHECK_LOG_FILE   also write logs to this file
"""


class _ManAction(argparse.Action):
    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        sys.stdout.write(MANUAL)
        parser.exit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ldapcheck",
        description="Check a username/password pair against an LDAP directory.",
    )
    parser.add_argument("-H", dest="uri", metavar="URI", default=None, help="directory server URI")
    parser.add_argument("-b", dest="search_base", metavar="BASE", default=None, help="search base DN")
    parser.add_argument("-u", dest="username", metavar="USER", default=None, help="username")
    parser.add_argument("-p", dest="password", metavar="PASSWORD", default=None, help="user password")
    parser.add_argument("-D", dest="bind_dn", metavar="DN", default=None, help="service bind DN (requires -w)")
    parser.add_argument("-w", dest="bind_password", metavar="PASSWORD", default=None, help="service bind password (requires -D)")
    parser.add_argument(
        "-y",
        dest="password_source",
        metavar="FILE",
        default=None,
        help='read password (line 1) and bind password (line 2) from FILE, "-" for stdin',
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--man", action=_ManAction, help="show the full manual and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    client: Optional[DirectoryClient] = None,
    stdin: Optional[IO[str]] = None,
) -> int:
    args = build_parser().parse_args(argv)
    env = get_env()

    setup_logging(level="DEBUG" if args.verbose else env.log_level, log_file=env.log_file)

    uri = args.uri if args.uri is not None else env.uri
    search_base = args.search_base if args.search_base is not None else env.search_base

    try:
        credentials = resolve_credentials(
            username=args.username,
            password=args.password,
            bind_dn=args.bind_dn,
            bind_password=args.bind_password,
            password_source=args.password_source,
            stdin=stdin,
        )
        target = validate_inputs(credentials, uri, search_base)
    except LdapCheckError as e:
        logger.debug("input rejected [%s]", e.reason)
        print(f"ldapcheck: {e.detail}", file=sys.stderr)
        return 1

    result = authenticate(credentials, target, search_base, client=client)
    if not result.success:
        print(f"ldapcheck: {result.detail}", file=sys.stderr)
        return 1

    print(result.detail)
    return 0


def run() -> None:
    sys.exit(main())
