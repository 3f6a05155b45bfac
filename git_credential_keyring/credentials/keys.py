"""Store key composition.

A credential is stored under two keys:

- the full key, ``protocol://username@host/``, which maps to the password
- the discovery key, ``protocol://host/``, which maps to the username so
  that a request without a username can still be answered

Each segment is emitted only when its field is non-empty. Segments always
appear in the order protocol, username, host and are never normalized.

Example:
    >>> cred = Credential(protocol="https", host="example.com", username="alice")
    >>> compose_full_key(cred)
    'https://alice@example.com/'
    >>> compose_discovery_key(cred)
    'https://example.com/'
"""

from git_credential_keyring.credentials.models import Credential


def _compose(protocol: str, username: str, host: str) -> str:
    key = ""
    if protocol:
        key += f"{protocol}://"
    if username:
        key += f"{username}@"
    if host:
        key += f"{host}/"
    return key


def compose_full_key(credential: Credential) -> str:
    """Build the key under which the password is stored.

    Args:
        credential: Credential to derive the key from

    Returns:
        The full key, empty when every field involved is empty
    """
    return _compose(credential.protocol, credential.username, credential.host)


def compose_discovery_key(credential: Credential) -> str:
    """Build the key under which the username is stored.

    Args:
        credential: Credential to derive the key from

    Returns:
        The username-discovery key (protocol and host only)
    """
    return _compose(credential.protocol, "", credential.host)
