# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Cache file handling for aws-switchrole.

Each profile has one JSON file in the cache directory. Files hold secrets, so
they are written with owner-only permissions. Writes are not atomic; a
truncated file is rejected as malformed on the next load.

Functions:
    ensure_cache_dir: Create the cache directory if needed
    cache_file_for: Build the cache file path for a profile
    load_cached_credentials: Read and validate a cache file
    write_cached_credentials: Persist credentials for a profile
    remove_cached_credentials: Delete a profile's cache file
"""

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from switchrole.errors import CacheUnavailableError, DirectoryCreationError, PersistError
from switchrole.models import CachedCredentialSet

logger = logging.getLogger(__name__)

DEFAULT_CACHE_PREFIX = "aws-switchrole-"


def ensure_cache_dir(cache_dir: Path) -> Path:
    """Create the cache directory with owner-only permissions.

    Raises:
        DirectoryCreationError: If the directory cannot be created
    """
    try:
        cache_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(f"Cannot create cache directory {cache_dir}: {e}") from e
    return cache_dir


def cache_file_for(cache_dir: Path, profile: str, prefix: str = DEFAULT_CACHE_PREFIX) -> Path:
    """Return the cache file path for a profile."""
    # Replace :, path sep, and / so the profile name is filename safe
    safe_name = profile.replace(":", "_").replace(os.sep, "_").replace("/", "_")
    return cache_dir / f"{prefix}{safe_name}"


def load_cached_credentials(path: Path) -> CachedCredentialSet:
    """Read a cache file.

    Raises:
        CacheUnavailableError: If the file is missing, unreadable or malformed
    """
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CacheUnavailableError(f"No cache file at {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise CacheUnavailableError(f"Cannot read cache file {path}: {e}") from e

    try:
        return CachedCredentialSet.from_cache_json(data)
    except ValidationError as e:
        raise CacheUnavailableError(
            f"Malformed cache file {path}: {e.error_count()} validation error(s)"
        ) from e


def write_cached_credentials(path: Path, creds: CachedCredentialSet) -> None:
    """Write credentials to a cache file readable only by the owner.

    Raises:
        PersistError: If the file cannot be written
    """
    payload = creds.to_cache_json()
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        # O_CREAT only applies the mode to new files
        os.chmod(path, 0o600)
    except OSError as e:
        raise PersistError(f"Cannot write cache file {path}: {e}") from e
    logger.debug("Wrote credentials cache %s", path)


def remove_cached_credentials(path: Path) -> bool:
    """Delete a cache file. Returns False if there was nothing to delete."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("Removed credentials cache %s", path)
    return True
