"""
aws-switchrole credential export command.

Resolves credentials for a profile through the cache and prints them in a
format a shell can evaluate.
"""

import os
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from switchrole.aws_utils import verify_credentials
from switchrole.cache import cache_file_for
from switchrole.config import OutputFormat, load_config
from switchrole.errors import AuthenticationError, DirectoryCreationError
from switchrole.helpers import format_credentials, setup_logging
from switchrole.manager import CredentialCacheManager


def env(
    profile: str = typer.Option(..., "--profile", "-p", help="AWS CLI profile name"),
    output_format: Optional[OutputFormat] = typer.Option(
        None, "--format", "-f", case_sensitive=False, help="Output format (default: plain)"
    ),
    cache_dir: Optional[Path] = typer.Option(None, "--cache-dir", help="Directory holding cached credentials"),
    expiry_window: Optional[int] = typer.Option(
        None, "--expiry-window", min=0, help="Refresh credentials this many seconds before they expire"
    ),
    no_cache: bool = typer.Option(False, "--no-cache", help="Ignore cached credentials and request new ones"),
    verify: bool = typer.Option(False, "--verify", help="Check the credentials with STS before printing them"),
    region: Optional[str] = typer.Option(None, "--region", "-r", help="AWS region used for --verify"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
):
    """Print credentials for a profile, reusing cached session credentials while they are valid."""
    setup_logging(verbose)

    try:
        config = load_config(
            os.environ,
            cache_dir=cache_dir,
            expiry_window_seconds=expiry_window,
            output_format=output_format.value if output_format else None,
        )
    except ValidationError as e:
        typer.secho(f"Invalid configuration: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    cache_path = cache_file_for(config.cache_dir, profile, config.cache_prefix)
    manager = CredentialCacheManager(expiry_window_seconds=config.expiry_window_seconds)

    try:
        result = manager.resolve(profile, cache_path, use_cache=not no_cache)
    except (ValueError, DirectoryCreationError, AuthenticationError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if result.cache_warning:
        typer.secho(f"Warning: {result.cache_warning}", fg=typer.colors.YELLOW, err=True)

    if verify:
        arn = verify_credentials(result.credentials, region=region)
        if arn is None:
            typer.secho(f"Credentials for profile '{profile}' failed verification.", fg=typer.colors.RED, err=True)
            raise typer.Exit(1)
        typer.secho(f"Authenticated as {arn}", fg=typer.colors.GREEN, err=True)

    for line in format_credentials(result.credentials, config.output_format):
        typer.echo(line)
