"""
Configuration system using Pydantic for type-safe settings management.

Settings come from, in increasing order of precedence: defaults, environment
variables (``GIT_CREDENTIAL_KEYRING_*``), a YAML configuration file, and
command-line options.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from git_credential_keyring.exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "git-credential-keyring" / "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class WalletSettings(BaseModel):
    """Identifies the secure store credentials live in."""

    model_config = ConfigDict(frozen=True)

    wallet: str = Field(..., min_length=1, description="Name of the store")
    folder: str = Field(..., min_length=1, description="Folder within the store")


class HelperSettings(BaseSettings):
    """Credential helper settings."""

    model_config = SettingsConfigDict(
        env_prefix="GIT_CREDENTIAL_KEYRING_",
        case_sensitive=False,
    )

    wallet: str = Field(default="kdewallet", min_length=1, description="Name of the store")
    folder: str = Field(default="git-credentials", min_length=1, description="Folder within the store")
    keyring_backend: str | None = Field(
        default=None,
        description="Dotted keyring backend class, e.g. keyring.backends.kwallet.DBusKeyring",
    )
    log_level: str = Field(default="WARNING", description="Minimum level of diagnostics written to stderr")
    json_logs: bool = Field(default=False, description="Render diagnostics as JSON")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level and reject unknown names."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got: {v}")
        return level

    @property
    def wallet_settings(self) -> WalletSettings:
        """Get the store location as an immutable WalletSettings."""
        return WalletSettings(wallet=self.wallet, folder=self.folder)

    @classmethod
    def load(cls, config_path: str | Path | None = None, **overrides: Any) -> HelperSettings:
        """Load settings for one helper invocation.

        Args:
            config_path: Explicit YAML file. When None, the default file is
                used if it exists.
            **overrides: Values that win over the file and the environment.
                None values are ignored.

        Returns:
            HelperSettings instance

        Raises:
            ConfigurationError: If the file or the resulting settings are invalid
        """
        overrides = {k: v for k, v in overrides.items() if v is not None}

        if config_path is not None:
            return cls.from_yaml(config_path, **overrides)
        if DEFAULT_CONFIG_PATH.exists():
            return cls.from_yaml(DEFAULT_CONFIG_PATH, **overrides)

        try:
            return cls(**overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str | Path, **overrides: Any) -> HelperSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} syntax for environment variable substitution.

        Args:
            config_path: Path to YAML configuration file
            **overrides: Values that win over the file

        Returns:
            HelperSettings instance

        Raises:
            ConfigurationError: If config file is invalid or contains invalid values
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(config_file) as f:
                yaml_content = f.read()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        # An empty file is an empty configuration
        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**{**config_dict, **overrides})
        except ValidationError as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports two syntaxes:
        - ${VAR_NAME} - Required environment variable (raises if not set)
        - ${VAR_NAME:-default} - Optional with default value

        YAML comment lines are left unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
