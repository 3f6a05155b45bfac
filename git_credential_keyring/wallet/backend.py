"""Store adapter protocol for the secure credential store.

A wallet is a named store split into folders of key/value string pairs.
Adapters report every failure as an outcome (``None``, ``False`` or a
``FAILED`` read) instead of raising, so the credential workflows can abort
with a diagnostic and let the helper exit cleanly.
"""

from contextlib import AbstractContextManager
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class ReadStatus(str, Enum):
    """Outcome of reading a single value."""

    FOUND = "found"
    ABSENT = "absent"
    FAILED = "failed"


@dataclass(frozen=True)
class ReadResult:
    """Result of ``Wallet.read_value``.

    Attributes:
        status: Whether the value was found, absent, or the read failed
        value: The stored value; empty unless status is FOUND
    """

    status: ReadStatus
    value: str = ""

    @classmethod
    def found(cls, value: str) -> "ReadResult":
        return cls(ReadStatus.FOUND, value)

    @classmethod
    def absent(cls) -> "ReadResult":
        return cls(ReadStatus.ABSENT)

    @classmethod
    def failed(cls) -> "ReadResult":
        return cls(ReadStatus.FAILED)

    @property
    def ok(self) -> bool:
        """True when a non-empty value was read."""
        return self.status is ReadStatus.FOUND and bool(self.value)


class Wallet(Protocol):
    """An open wallet handle.

    Handles are only valid inside the ``open_wallet`` block that produced
    them.
    """

    def has_folder(self, folder: str) -> bool:
        """Check whether a folder exists in this wallet."""
        ...

    def create_folder(self, folder: str) -> bool:
        """Create a folder.

        Returns:
            True on success
        """
        ...

    def set_folder(self, folder: str) -> bool:
        """Select the folder subsequent reads and writes apply to.

        Returns:
            True if the folder exists and was selected
        """
        ...

    def read_value(self, key: str) -> ReadResult:
        """Read the value stored under ``key`` in the selected folder."""
        ...

    def write_value(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key`` in the selected folder.

        Returns:
            True on success
        """
        ...

    def remove_entry(self, key: str) -> bool:
        """Delete ``key`` from the selected folder.

        Returns:
            True on success
        """
        ...


class WalletBackend(Protocol):
    """Protocol defining the interface for secure store backends.

    All backends must implement these methods to be usable by
    ``CredentialHelper``.
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'keyring')."""
        ...

    def folder_exists(self, wallet: str, folder: str) -> bool:
        """Check whether ``folder`` exists in ``wallet`` without keeping it open."""
        ...

    def key_exists(self, wallet: str, folder: str, key: str) -> bool:
        """Check whether ``key`` exists in ``folder`` without keeping it open."""
        ...

    def open_wallet(self, wallet: str) -> AbstractContextManager["Wallet | None"]:
        """Open a wallet for the duration of a ``with`` block.

        Yields:
            An open handle, or None if the wallet could not be opened.
            The handle is released when the block exits.
        """
        ...
