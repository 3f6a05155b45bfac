"""CLI entry point for the git credential helper.

Git runs the helper as ``git-credential-keyring <operation>`` and talks to it
over stdin/stdout. Configure it with::

    $ git config --global credential.helper keyring
"""

import sys

import click

from git_credential_keyring.config.settings import LOG_LEVELS, HelperSettings
from git_credential_keyring.credentials.operations import CredentialHelper
from git_credential_keyring.credentials.protocol import read_credential, write_credential
from git_credential_keyring.exceptions import ConfigurationError
from git_credential_keyring.utils.logging_config import configure_logging, get_logger
from git_credential_keyring.wallet.keyring_backend import KeyringWalletBackend

log = get_logger(__name__)

OPERATIONS = ("get", "store", "erase")


@click.command()
@click.argument("operation")
@click.option("--wallet", help="Name of the store holding the credentials")
@click.option("--folder", help="Folder within the store")
@click.option(
    "--keyring-backend",
    help="Dotted keyring backend class (e.g. keyring.backends.kwallet.DBusKeyring)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="GIT_CREDENTIAL_KEYRING_CONFIG",
    help="Path to YAML configuration file",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Minimum level of diagnostics written to stderr",
)
@click.option("--json-logs/--console-logs", default=None, help="Render diagnostics as JSON or console lines")
@click.version_option(package_name="git-credential-keyring")
def cli(
    operation: str,
    wallet: str | None,
    folder: str | None,
    keyring_backend: str | None,
    config_path: str | None,
    log_level: str | None,
    json_logs: bool | None,
) -> None:
    """Git credential helper backed by the system keyring.

    OPERATION is one of get, store or erase. Other operations are ignored.
    """
    try:
        settings = HelperSettings.load(
            config_path,
            wallet=wallet,
            folder=folder,
            keyring_backend=keyring_backend,
            log_level=log_level,
            json_logs=json_logs,
        )
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    configure_logging(settings.log_level, settings.json_logs)

    if operation not in OPERATIONS:
        log.debug("unknown_operation_ignored", operation=operation)
        return

    stdin = click.get_text_stream("stdin")
    stdout = click.get_text_stream("stdout")

    credential = read_credential(stdin)
    backend = KeyringWalletBackend(settings.keyring_backend)
    helper = CredentialHelper(backend)
    wallet_settings = settings.wallet_settings

    log.debug(
        "operation_started",
        operation=operation,
        backend=backend.name,
        protocol=credential.protocol,
        host=credential.host,
        wallet=wallet_settings.wallet,
        folder=wallet_settings.folder,
    )

    if operation == "get":
        write_credential(helper.get(credential, wallet_settings), stdout)
    elif operation == "store":
        helper.store(credential, wallet_settings)
    else:
        helper.erase(credential, wallet_settings)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
