"""Configuration for the credential helper."""

from git_credential_keyring.config.settings import DEFAULT_CONFIG_PATH, HelperSettings, WalletSettings

__all__ = ["DEFAULT_CONFIG_PATH", "HelperSettings", "WalletSettings"]
