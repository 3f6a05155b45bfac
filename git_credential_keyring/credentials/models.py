"""Credential record exchanged with git.

Example:
    >>> from git_credential_keyring.credentials.models import Credential
    >>> cred = Credential(protocol="https", host="example.com")
    >>> cred.username
    ''
"""

from dataclasses import dataclass


@dataclass
class Credential:
    """A protocol/host/username/password tuple.

    Every field is optional; an empty string means the value is unknown or
    not yet resolved. Operations may fill in fields in place (``get`` sets
    ``username`` when git did not send one).

    Attributes:
        protocol: URL scheme, e.g. 'https'
        host: Host name, possibly with a port
        username: Account name
        password: Secret for the account
    """

    protocol: str = ""
    host: str = ""
    username: str = ""
    password: str = ""
