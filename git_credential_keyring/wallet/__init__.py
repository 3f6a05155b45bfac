"""Secure store adapters."""

from git_credential_keyring.wallet.backend import ReadResult, ReadStatus, Wallet, WalletBackend
from git_credential_keyring.wallet.keyring_backend import KeyringWallet, KeyringWalletBackend

__all__ = [
    "KeyringWallet",
    "KeyringWalletBackend",
    "ReadResult",
    "ReadStatus",
    "Wallet",
    "WalletBackend",
]
