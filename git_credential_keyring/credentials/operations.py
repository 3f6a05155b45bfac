"""The get, store and erase workflows behind the helper commands.

A credential is kept as two entries in the wallet folder:

- discovery key (``protocol://host/``) -> username
- full key (``protocol://username@host/``) -> password

so that git can ask for a host without naming a user and still get both
fields back.

None of these workflows raise on store failures. Each failure aborts the
current workflow with a logged diagnostic; git only ever sees a missing
answer.
"""

from git_credential_keyring.config.settings import WalletSettings
from git_credential_keyring.credentials.keys import compose_discovery_key, compose_full_key
from git_credential_keyring.credentials.models import Credential
from git_credential_keyring.utils.logging_config import get_logger
from git_credential_keyring.wallet.backend import ReadResult, ReadStatus, WalletBackend

log = get_logger(__name__)


class CredentialHelper:
    """Runs credential workflows against a wallet backend.

    Example:
        >>> helper = CredentialHelper(KeyringWalletBackend())
        >>> settings = WalletSettings(wallet="kdewallet", folder="git-credentials")
        >>> cred = helper.get(Credential(protocol="https", host="example.com"), settings)
        >>> cred.username, cred.password
        ('alice', 'secret')
    """

    def __init__(self, backend: WalletBackend) -> None:
        self.backend = backend

    def get(self, credential: Credential, settings: WalletSettings) -> Credential:
        """Look up username and password for a credential.

        When the request carries no username, it is resolved through the
        discovery key first. The password is filled in on a best-effort
        basis: an absent entry and a failed read both leave it empty.

        Args:
            credential: Request decoded from git; updated in place
            settings: Wallet and folder to search

        Returns:
            The completed credential, or an empty Credential when the folder
            does not exist or no username could be resolved
        """
        if not self.backend.folder_exists(settings.wallet, settings.folder):
            log.info("no_such_folder", wallet=settings.wallet, folder=settings.folder)
            return Credential()

        if not credential.username:
            username = self._resolve_username(credential, settings)
            if not username:
                return Credential()
            credential.username = username

        key = compose_full_key(credential)
        result = self._read(key, settings)
        if result.status is ReadStatus.ABSENT:
            log.info("password_not_found", key=key)
        elif result.status is ReadStatus.FAILED:
            log.warning("password_read_failed", key=key)
        credential.password = result.value

        return credential

    def store(self, credential: Credential, settings: WalletSettings) -> None:
        """Save a credential, creating the folder when needed.

        Both entries are written independently: if the discovery entry cannot
        be written, the password is still stored.

        Args:
            credential: Credential git asks to remember
            settings: Wallet and folder to write to
        """
        with self.backend.open_wallet(settings.wallet) as wallet:
            if wallet is None:
                log.warning("wallet_open_failed", wallet=settings.wallet)
                return

            if not wallet.has_folder(settings.folder):
                if not wallet.create_folder(settings.folder):
                    log.warning("folder_create_failed", wallet=settings.wallet, folder=settings.folder)
                    return

            if not wallet.set_folder(settings.folder):
                log.warning("folder_open_failed", wallet=settings.wallet, folder=settings.folder)
                return

            if not credential.username:
                log.info("no_username_specified")
                return

            if not credential.password:
                log.info("no_password_specified")
                return

            discovery_key = compose_discovery_key(credential)
            if not wallet.write_value(discovery_key, credential.username):
                log.warning("username_write_failed", key=discovery_key)

            full_key = compose_full_key(credential)
            if not wallet.write_value(full_key, credential.password):
                log.warning("password_write_failed", key=full_key)

    def erase(self, credential: Credential, settings: WalletSettings) -> None:
        """Remove a stored credential.

        Both entries are removed independently: a failure deleting the
        password entry does not prevent removing the discovery entry.

        Args:
            credential: Credential git asks to forget
            settings: Wallet and folder to delete from
        """
        if not self.backend.folder_exists(settings.wallet, settings.folder):
            log.info("no_such_folder", wallet=settings.wallet, folder=settings.folder)
            return

        if not credential.username:
            username = self._resolve_username(credential, settings)
            if not username:
                return
            credential.username = username

        full_key = compose_full_key(credential)
        if not self.backend.key_exists(settings.wallet, settings.folder, full_key):
            log.info("credentials_not_found", key=full_key)
            return

        with self.backend.open_wallet(settings.wallet) as wallet:
            if wallet is None:
                log.warning("wallet_open_failed", wallet=settings.wallet)
                return

            if not wallet.set_folder(settings.folder):
                log.warning("folder_open_failed", wallet=settings.wallet, folder=settings.folder)
                return

            if not wallet.remove_entry(full_key):
                log.warning("password_delete_failed", key=full_key)

            discovery_key = compose_discovery_key(credential)
            if not wallet.remove_entry(discovery_key):
                log.warning("username_delete_failed", key=discovery_key)

    def _resolve_username(self, credential: Credential, settings: WalletSettings) -> str:
        """Find the username stored for the credential's protocol and host.

        Returns:
            The username, or an empty string when none could be read
        """
        key = compose_discovery_key(credential)
        result = self._read(key, settings)
        if not result.ok:
            log.info("no_username_found", key=key, status=result.status.value)
            return ""
        return result.value

    def _read(self, key: str, settings: WalletSettings) -> ReadResult:
        """Read one value, opening the wallet only for this read."""
        if not self.backend.key_exists(settings.wallet, settings.folder, key):
            return ReadResult.absent()

        with self.backend.open_wallet(settings.wallet) as wallet:
            if wallet is None:
                log.warning("wallet_open_failed", wallet=settings.wallet)
                return ReadResult.failed()

            if not wallet.set_folder(settings.folder):
                log.warning("folder_open_failed", wallet=settings.wallet, folder=settings.folder)
                return ReadResult.failed()

            result = wallet.read_value(key)
            if result.status is ReadStatus.FAILED:
                log.warning("value_read_failed", key=key)
            return result
