"""Reader and writer for git's credential helper protocol.

Git talks to helpers with newline-separated ``key=value`` lines. Only the
attributes this helper understands are kept; everything else is skipped.
See gitcredentials(7).
"""

from typing import TextIO

from git_credential_keyring.credentials.models import Credential

# Attributes accepted on input, in protocol order
INPUT_FIELDS: tuple[str, ...] = ("protocol", "host", "username", "password")

# Attributes emitted in a ``get`` response, in this order
OUTPUT_FIELDS: tuple[str, ...] = ("username", "password")


def read_credential(stream: TextIO) -> Credential:
    """Decode a credential from a protocol stream.

    Reads until EOF. A line is split at its first ``=``; lines without one and
    lines naming an unknown attribute are ignored. When an attribute repeats,
    the last value wins.

    Args:
        stream: Text stream positioned at the start of the request

    Returns:
        Decoded credential, with absent attributes left empty
    """
    credential = Credential()
    for raw_line in stream:
        line = raw_line.rstrip("\r\n")
        name, sep, value = line.partition("=")
        if not sep or name not in INPUT_FIELDS:
            continue
        setattr(credential, name, value)
    return credential


def write_credential(credential: Credential, stream: TextIO) -> None:
    """Encode the response to a ``get`` request.

    Only non-empty username and password are written.

    Args:
        credential: Credential to encode
        stream: Text stream to write to
    """
    for name in OUTPUT_FIELDS:
        value = getattr(credential, name)
        if value:
            stream.write(f"{name}={value}\n")
    stream.flush()
