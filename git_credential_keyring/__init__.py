"""git-credential-keyring: a git credential helper backed by the system keyring."""

__version__ = "0.1.0"
