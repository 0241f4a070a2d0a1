"""
aws-switchrole cache clearing command.
"""

import os
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from switchrole.cache import cache_file_for
from switchrole.config import load_config
from switchrole.manager import CredentialCacheManager


def clear(
    profile: str = typer.Option(..., "--profile", "-p", help="AWS CLI profile name"),
    cache_dir: Optional[Path] = typer.Option(None, "--cache-dir", help="Directory holding cached credentials"),
):
    """Delete the cached credentials for a profile."""
    try:
        config = load_config(os.environ, cache_dir=cache_dir)
    except ValidationError as e:
        typer.secho(f"Invalid configuration: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    cache_path = cache_file_for(config.cache_dir, profile, config.cache_prefix)

    try:
        removed = CredentialCacheManager().clear(cache_path)
    except OSError as e:
        typer.secho(f"Failed to remove {cache_path}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if removed:
        typer.secho(f"Removed cached credentials for profile '{profile}'", fg=typer.colors.GREEN, err=True)
    else:
        typer.secho(f"No cached credentials for profile '{profile}'", fg=typer.colors.YELLOW, err=True)
