# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Credential cache lifecycle.

CredentialCacheManager loads a profile's cached credentials, checks them and
falls back to the provider when they cannot be used. Freshly issued
credentials are written back before they are returned. Caching is best
effort: a failed write is reported on ResolveResult.cache_warning and never
keeps credentials from being delivered.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from switchrole import aws_utils
from switchrole.cache import (
    ensure_cache_dir,
    load_cached_credentials,
    remove_cached_credentials,
    write_cached_credentials,
)
from switchrole.errors import CacheUnavailableError, DegenerateCredentialError, PersistError
from switchrole.models import CachedCredentialSet

logger = logging.getLogger(__name__)

Refresher = Callable[[str], CachedCredentialSet]
Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ResolveResult:
    """Credentials for the caller plus the outcome of the cache write."""

    credentials: CachedCredentialSet
    refreshed: bool
    cache_warning: Optional[str] = None


class CredentialCacheManager:
    """Resolve credentials for a profile through its on-disk cache."""

    def __init__(
        self,
        refresher: Optional[Refresher] = None,
        expiry_window_seconds: int = 60,
        clock: Clock = _utc_now,
    ):
        """
        Args:
            refresher: Issues fresh credentials for a profile name, defaults
                to aws_utils.fetch_credentials
            expiry_window_seconds: Refresh this many seconds before expiry
            clock: Returns the current timezone-aware time
        """
        self.refresher = refresher or aws_utils.fetch_credentials
        self.expiry_window_seconds = expiry_window_seconds
        self.clock = clock

    def load(self, cache_path: Path) -> CachedCredentialSet:
        """Load a usable record from the cache.

        Raises:
            CacheUnavailableError: If the file is missing or malformed
            DegenerateCredentialError: If the record was not issued by a provider
        """
        creds = load_cached_credentials(cache_path)
        if not creds.is_issued:
            raise DegenerateCredentialError(
                f"Cached credentials in {cache_path} came from '{creds.provider_name}'"
            )
        return creds

    def persist(self, cache_path: Path, creds: CachedCredentialSet) -> None:
        write_cached_credentials(cache_path, creds)

    def resolve(self, profile: str, cache_path: Path, use_cache: bool = True) -> ResolveResult:
        """
        Return valid credentials for a profile, refreshing the cache if needed.

        Args:
            profile: Name of the AWS profile to resolve
            cache_path: Cache file for this profile
            use_cache: When False, always refresh (issued results are still cached)

        Returns:
            ResolveResult: The credentials, whether they were refreshed, and
            any warning from writing the cache

        Raises:
            ValueError: If the profile name is empty
            DirectoryCreationError: If the cache directory cannot be created
            AuthenticationError: If the provider cannot issue credentials
        """
        if not profile or not profile.strip():
            raise ValueError(f"Invalid profile name provided: {profile!r}")

        ensure_cache_dir(cache_path.parent)

        if use_cache:
            cached = self._load_valid(cache_path)
            if cached is not None:
                logger.debug("Credentials for %s retrieved from cache", profile)
                return ResolveResult(credentials=cached, refreshed=False)

        logger.info("Requesting new credentials for profile %s", profile)
        creds = self.refresher(profile)

        if not creds.is_issued:
            # Static keys are re-read from the profile on every run
            logger.debug("Not caching credentials from '%s'", creds.provider_name)
            self._discard(cache_path)
            return ResolveResult(credentials=creds, refreshed=True)

        warning = None
        try:
            self.persist(cache_path, creds)
        except PersistError as e:
            warning = str(e)
            logger.debug("%s; credentials will not be reused", warning)

        return ResolveResult(credentials=creds, refreshed=True, cache_warning=warning)

    def clear(self, cache_path: Path) -> bool:
        return remove_cached_credentials(cache_path)

    def _discard(self, cache_path: Path) -> None:
        try:
            remove_cached_credentials(cache_path)
        except OSError as e:
            logger.debug("Could not remove stale cache %s: %s", cache_path, e)

    def _load_valid(self, cache_path: Path) -> Optional[CachedCredentialSet]:
        try:
            creds = self.load(cache_path)
        except (CacheUnavailableError, DegenerateCredentialError) as e:
            logger.debug("Ignoring cache: %s", e)
            return None

        if creds.is_expired(self.clock(), self.expiry_window_seconds):
            logger.debug("Credentials were found in cache, but they are expired")
            return None
        return creds
