"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator
from contextlib import contextmanager

import pytest
import structlog

from git_credential_keyring.config.settings import WalletSettings
from git_credential_keyring.credentials.models import Credential
from git_credential_keyring.credentials.operations import CredentialHelper
from git_credential_keyring.wallet.backend import ReadResult

MUTATING_CALLS = ("create_folder", "write_value", "remove_entry")


class FakeWallet:
    """Open handle on a FakeWalletBackend."""

    def __init__(self, backend: "FakeWalletBackend") -> None:
        self.backend = backend
        self.folder: str | None = None

    def has_folder(self, folder: str) -> bool:
        self.backend.record("has_folder", folder)
        return folder in self.backend.folders

    def create_folder(self, folder: str) -> bool:
        self.backend.record("create_folder", folder)
        if self.backend.should_fail("create_folder", folder):
            return False
        self.backend.folders.setdefault(folder, {})
        return True

    def set_folder(self, folder: str) -> bool:
        self.backend.record("set_folder", folder)
        if self.backend.should_fail("set_folder", folder) or folder not in self.backend.folders:
            return False
        self.folder = folder
        return True

    def read_value(self, key: str) -> ReadResult:
        self.backend.record("read_value", key)
        if self.folder is None or self.backend.should_fail("read_value", key):
            return ReadResult.failed()
        entries = self.backend.folders[self.folder]
        if key not in entries:
            return ReadResult.absent()
        return ReadResult.found(entries[key])

    def write_value(self, key: str, value: str) -> bool:
        self.backend.record("write_value", key, value)
        if self.folder is None or self.backend.should_fail("write_value", key):
            return False
        self.backend.folders[self.folder][key] = value
        return True

    def remove_entry(self, key: str) -> bool:
        self.backend.record("remove_entry", key)
        if self.folder is None or self.backend.should_fail("remove_entry", key):
            return False
        return self.backend.folders[self.folder].pop(key, None) is not None


class FakeWalletBackend:
    """In-memory wallet backend that records every call.

    Folders are shared by all wallet names. Use ``fail_on`` to make an
    operation fail, optionally only for one key or folder.
    """

    def __init__(self) -> None:
        self.folders: dict[str, dict[str, str]] = {}
        self.calls: list[tuple[str, ...]] = []
        self.failing: set[tuple[str, str | None]] = set()
        self.can_open = True
        self.open_count = 0
        self.close_count = 0

    @property
    def name(self) -> str:
        return "fake"

    def record(self, *call: str) -> None:
        self.calls.append(call)

    def fail_on(self, operation: str, target: str | None = None) -> None:
        self.failing.add((operation, target))

    def should_fail(self, operation: str, target: str) -> bool:
        return (operation, None) in self.failing or (operation, target) in self.failing

    def calls_to(self, operation: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == operation]

    @property
    def mutating_calls(self) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] in MUTATING_CALLS]

    def folder_exists(self, wallet: str, folder: str) -> bool:
        self.record("folder_exists", wallet, folder)
        return folder in self.folders

    def key_exists(self, wallet: str, folder: str, key: str) -> bool:
        self.record("key_exists", wallet, folder, key)
        return key in self.folders.get(folder, {})

    @contextmanager
    def open_wallet(self, wallet: str) -> Iterator[FakeWallet | None]:
        self.record("open_wallet", wallet)
        if not self.can_open:
            yield None
            return
        self.open_count += 1
        try:
            yield FakeWallet(self)
        finally:
            self.close_count += 1


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by a test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_backend() -> FakeWalletBackend:
    """Empty in-memory wallet backend."""
    return FakeWalletBackend()


@pytest.fixture
def wallet_settings() -> WalletSettings:
    """Wallet and folder used throughout the tests."""
    return WalletSettings(wallet="kdewallet", folder="git-credentials")


@pytest.fixture
def populated_backend(fake_backend: FakeWalletBackend, wallet_settings: WalletSettings) -> FakeWalletBackend:
    """Backend holding alice's credential for https://example.com."""
    fake_backend.folders[wallet_settings.folder] = {
        "https://example.com/": "alice",
        "https://alice@example.com/": "secret",
    }
    return fake_backend


@pytest.fixture
def helper(fake_backend: FakeWalletBackend) -> CredentialHelper:
    """CredentialHelper wired to the fake backend."""
    return CredentialHelper(fake_backend)


@pytest.fixture
def request_credential() -> Credential:
    """A request as git sends it for https://example.com, without username."""
    return Credential(protocol="https", host="example.com")
