"""Custom exception hierarchy for git-credential-keyring.

Exception Hierarchy:
    GitCredentialError (base)
    └── ConfigurationError

Store failures never surface as exceptions: the wallet adapter reports them
as outcomes so that a credential operation can abort with a diagnostic
instead of crashing the helper that git is waiting on.

Example Usage:
    >>> from git_credential_keyring.exceptions import ConfigurationError
    >>> try:
    ...     settings = HelperSettings.from_yaml(path)
    ... except ConfigurationError as e:
    ...     click.echo(f"Error: {e.message}", err=True)
"""


class GitCredentialError(Exception):
    """Base exception for all git-credential-keyring errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(GitCredentialError):
    """Configuration-related errors.

    Raised when the configuration file is invalid or missing, or when the
    resulting settings fail validation.

    Examples:
        - Configuration file not found
        - Invalid YAML syntax
        - Empty wallet or folder name
        - Unknown log level
    """

    pass
