"""
aws-switchrole shared utility functions.

Output formatting for the resolved credentials and logging setup. Everything
here writes diagnostics to stderr so stdout can be evaluated by a shell.
"""

import logging
import shlex

from rich.console import Console
from rich.logging import RichHandler

from switchrole.config import OutputFormat
from switchrole.models import CachedCredentialSet

err_console = Console(stderr=True)

ENV_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_SESSION_TOKEN = "AWS_SESSION_TOKEN"


def setup_logging(verbose: bool = False) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )
    # botocore is very chatty at debug level
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _fish_quote(value: str) -> str:
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _powershell_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def format_credentials(creds: CachedCredentialSet, output_format: OutputFormat) -> list[str]:
    """
    Render the credential triple as lines for stdout.

    Args:
        creds: Credentials to render
        output_format: plain labeled lines, or assignments for sh, fish or
            PowerShell

    Returns:
        list[str]: One line per value. Shell formats clear AWS_SESSION_TOKEN
        when the credentials have no session token.
    """
    if output_format == OutputFormat.plain:
        return [
            f"AccessKeyID : {creds.access_key_id}",
            f"SecretAccessKey : {creds.secret_access_key}",
            f"SessionToken : {creds.session_token}",
        ]

    values = [
        (ENV_ACCESS_KEY_ID, creds.access_key_id),
        (ENV_SECRET_ACCESS_KEY, creds.secret_access_key),
        (ENV_SESSION_TOKEN, creds.session_token),
    ]
    lines = []
    for name, value in values:
        if output_format == OutputFormat.sh:
            lines.append(f"export {name}={shlex.quote(value)}" if value else f"unset {name}")
        elif output_format == OutputFormat.fish:
            lines.append(f"set -gx {name} {_fish_quote(value)};" if value else f"set -e {name};")
        elif output_format == OutputFormat.powershell:
            if value:
                lines.append(f"$Env:{name} = {_powershell_quote(value)}")
            else:
                lines.append(f"Remove-Item Env:{name} -ErrorAction SilentlyContinue")
        else:
            raise ValueError(f"Unsupported output format: {output_format!r}")
    return lines
