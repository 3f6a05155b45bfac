"""Allow running the helper with ``python -m git_credential_keyring``."""

from git_credential_keyring.main import main

if __name__ == "__main__":
    main()
