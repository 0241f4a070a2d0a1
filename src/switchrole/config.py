# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Configuration for aws-switchrole.

Settings come from three layers: built-in defaults, AWS_SWITCHROLE_*
environment variables, and command line overrides. The environment and the
platform are passed in explicitly so the home directory lookup stays in one
place and can be tested without touching the real environment.
"""

import sys
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field

ENV_CACHE_DIR = "AWS_SWITCHROLE_CACHE_DIR"
ENV_EXPIRY_WINDOW = "AWS_SWITCHROLE_EXPIRY_WINDOW"
ENV_FORMAT = "AWS_SWITCHROLE_FORMAT"


class OutputFormat(str, Enum):
    plain = "plain"
    sh = "sh"
    fish = "fish"
    powershell = "powershell"


class SwitchRoleConfig(BaseModel):
    """Resolved settings for one invocation."""

    cache_dir: Path
    cache_prefix: str = Field(default="aws-switchrole-", min_length=1)
    expiry_window_seconds: int = Field(default=60, ge=0)
    output_format: OutputFormat = OutputFormat.plain


def get_home_dir(environ: Mapping[str, str], platform: str = sys.platform) -> Path:
    """Return the user's home directory from the given environment.

    Windows keeps it in USERPROFILE, everything else in HOME. Falls back to
    Path.home() when the variable is missing.
    """
    var = "USERPROFILE" if platform.startswith("win") else "HOME"
    home = environ.get(var)
    if home:
        return Path(home)
    return Path.home()


def default_cache_dir(environ: Mapping[str, str], platform: str = sys.platform) -> Path:
    """The AWS CLI cache directory, shared with the aws command."""
    return get_home_dir(environ, platform) / ".aws" / "cli" / "cache"


def load_config(
    environ: Mapping[str, str],
    platform: str = sys.platform,
    cache_dir: Optional[Path] = None,
    expiry_window_seconds: Optional[int] = None,
    output_format: Optional[str] = None,
) -> SwitchRoleConfig:
    """
    Build the configuration for this invocation.

    Args:
        environ: Environment variables to read, usually os.environ
        platform: Platform name used for the home directory lookup
        cache_dir: Overrides the cache directory
        expiry_window_seconds: Overrides the expiry window
        output_format: Overrides the output format

    Returns:
        SwitchRoleConfig: Validated settings

    Raises:
        pydantic.ValidationError: If a setting has an invalid value
    """
    values = {}

    if cache_dir is not None:
        values["cache_dir"] = cache_dir
    elif environ.get(ENV_CACHE_DIR):
        values["cache_dir"] = Path(environ[ENV_CACHE_DIR]).expanduser()
    else:
        values["cache_dir"] = default_cache_dir(environ, platform)

    if expiry_window_seconds is not None:
        values["expiry_window_seconds"] = expiry_window_seconds
    elif environ.get(ENV_EXPIRY_WINDOW):
        values["expiry_window_seconds"] = environ[ENV_EXPIRY_WINDOW]

    if output_format is not None:
        values["output_format"] = output_format
    elif environ.get(ENV_FORMAT):
        values["output_format"] = environ[ENV_FORMAT]

    return SwitchRoleConfig(**values)
