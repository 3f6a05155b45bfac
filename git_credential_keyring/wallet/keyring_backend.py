"""OS-level keyring backend using system credential stores.

Platform Support:
- Linux: KWallet, Secret Service API (GNOME Keyring, KeePassXC)
- macOS: Keychain
- Windows: Windows Credential Locker

A wallet folder maps to the keyring service ``<wallet>/<folder>``; store keys
map to keyring usernames and values to keyring passwords. With the KWallet
keyring backend the service name becomes the KWallet folder.
"""

from collections.abc import Iterator
from contextlib import contextmanager

import keyring
from keyring.backend import KeyringBackend
from keyring.backends import fail
from keyring.errors import KeyringError, PasswordDeleteError

from git_credential_keyring.utils.logging_config import get_logger
from git_credential_keyring.wallet.backend import ReadResult, ReadStatus

log = get_logger(__name__)

# Entry written into every folder created by this helper
FOLDER_MARKER = ".folder"


class KeyringWallet:
    """Open handle on a keyring-backed wallet.

    Every method reports failures as a return value; keyring errors never
    escape. Once closed, the handle refuses all operations.
    """

    def __init__(self, backend: KeyringBackend, wallet: str) -> None:
        self._backend: KeyringBackend | None = backend
        self.wallet = wallet
        self.folder: str | None = None

    def service_name(self, folder: str) -> str:
        """Keyring service name for a folder of this wallet."""
        return f"{self.wallet}/{folder}"

    @property
    def closed(self) -> bool:
        return self._backend is None

    def close(self) -> None:
        """Release the keyring backend."""
        self._backend = None
        self.folder = None

    def has_folder(self, folder: str) -> bool:
        return self._get(self.service_name(folder), FOLDER_MARKER).status is ReadStatus.FOUND

    def create_folder(self, folder: str) -> bool:
        if self._set(self.service_name(folder), FOLDER_MARKER, folder):
            log.debug("folder_created", wallet=self.wallet, folder=folder)
            return True
        return False

    def set_folder(self, folder: str) -> bool:
        if not self.has_folder(folder):
            return False
        self.folder = folder
        return True

    def read_value(self, key: str) -> ReadResult:
        if self.folder is None:
            log.debug("no_folder_selected", wallet=self.wallet, key=key)
            return ReadResult.failed()
        return self._get(self.service_name(self.folder), key)

    def write_value(self, key: str, value: str) -> bool:
        if self.folder is None:
            log.debug("no_folder_selected", wallet=self.wallet, key=key)
            return False
        return self._set(self.service_name(self.folder), key, value)

    def remove_entry(self, key: str) -> bool:
        if self.folder is None:
            log.debug("no_folder_selected", wallet=self.wallet, key=key)
            return False
        if self._backend is None:
            log.debug("wallet_closed", wallet=self.wallet)
            return False

        service = self.service_name(self.folder)
        try:
            self._backend.delete_password(service, key)
            return True
        except PasswordDeleteError as e:
            log.debug("keyring_entry_not_deleted", service=service, key=key, error=str(e))
            return False
        except KeyringError as e:
            log.warning("keyring_delete_failed", service=service, key=key, error=str(e))
            return False

    def _get(self, service: str, key: str) -> ReadResult:
        if self._backend is None:
            log.debug("wallet_closed", wallet=self.wallet)
            return ReadResult.failed()

        try:
            value = self._backend.get_password(service, key)
        except KeyringError as e:
            log.warning("keyring_read_failed", service=service, key=key, error=str(e))
            return ReadResult.failed()

        if value is None:
            return ReadResult.absent()
        return ReadResult.found(value)

    def _set(self, service: str, key: str, value: str) -> bool:
        if self._backend is None:
            log.debug("wallet_closed", wallet=self.wallet)
            return False

        try:
            self._backend.set_password(service, key, value)
            return True
        except KeyringError as e:
            log.warning("keyring_write_failed", service=service, key=key, error=str(e))
            return False


class KeyringWalletBackend:
    """Wallet backend on top of the ``keyring`` library.

    Example:
        >>> backend = KeyringWalletBackend()
        >>> with backend.open_wallet("kdewallet") as wallet:
        ...     if wallet is not None and wallet.set_folder("git-credentials"):
        ...         wallet.read_value("https://example.com/")
    """

    def __init__(self, keyring_backend: str | None = None) -> None:
        """Initialize backend.

        Args:
            keyring_backend: Dotted path of the keyring backend class to use
                (e.g. 'keyring.backends.kwallet.DBusKeyring'). None selects
                keyring's default for the platform.
        """
        self.keyring_backend = keyring_backend

    @property
    def name(self) -> str:
        """Get backend identifier.

        Returns:
            Backend name constant "keyring"
        """
        return "keyring"

    def load_keyring(self) -> KeyringBackend | None:
        """Load the configured keyring backend.

        Returns None when the backend cannot be loaded or when keyring found
        no usable store (headless systems fall back to keyring's fail backend).
        """
        try:
            if self.keyring_backend:
                backend = keyring.core.load_keyring(self.keyring_backend)
            else:
                backend = keyring.get_keyring()
        except Exception as e:
            log.debug("keyring_load_failed", keyring_backend=self.keyring_backend, error=str(e))
            return None

        if isinstance(backend, fail.Keyring):
            log.debug("keyring_unavailable", keyring_backend=self.keyring_backend)
            return None
        return backend

    def folder_exists(self, wallet: str, folder: str) -> bool:
        with self.open_wallet(wallet) as handle:
            return handle is not None and handle.has_folder(folder)

    def key_exists(self, wallet: str, folder: str, key: str) -> bool:
        with self.open_wallet(wallet) as handle:
            if handle is None or not handle.set_folder(folder):
                return False
            return handle.read_value(key).status is ReadStatus.FOUND

    @contextmanager
    def open_wallet(self, wallet: str) -> Iterator[KeyringWallet | None]:
        backend = self.load_keyring()
        if backend is None:
            yield None
            return

        handle = KeyringWallet(backend, wallet)
        try:
            yield handle
        finally:
            handle.close()
