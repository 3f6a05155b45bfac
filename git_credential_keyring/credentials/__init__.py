"""Credential records, store keys and the get/store/erase workflows."""

from git_credential_keyring.credentials.keys import compose_discovery_key, compose_full_key
from git_credential_keyring.credentials.models import Credential
from git_credential_keyring.credentials.operations import CredentialHelper
from git_credential_keyring.credentials.protocol import read_credential, write_credential

__all__ = [
    "Credential",
    "CredentialHelper",
    "compose_discovery_key",
    "compose_full_key",
    "read_credential",
    "write_credential",
]
