"""ldapcheck: verify a username/password pair against an LDAP directory."""

__version__ = "0.1.0"
