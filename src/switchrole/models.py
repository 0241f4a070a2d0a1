# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Credential data model for the aws-switchrole cache.

A CachedCredentialSet is the credential triple issued for one profile, along
with the expiry reported by the provider and the botocore method that produced
it. The on-disk key names match the cache files written by earlier releases,
so three-key files without Expiration or ProviderName still load.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# botocore credential methods that read static keys without issuing anything
AMBIENT_PROVIDERS = frozenset({
    "env",
    "explicit",
    "shared-credentials-file",
    "config-file",
    "boto-config",
})


class CachedCredentialSet(BaseModel):
    """Credential triple for a single profile, as stored in the cache file."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    access_key_id: str = Field(alias="AccessKeyID", min_length=1)
    secret_access_key: str = Field(alias="SecretAccessKey", min_length=1)
    session_token: str = Field(default="", alias="SessionToken")
    expiration: Optional[datetime] = Field(default=None, alias="Expiration")
    provider_name: Optional[str] = Field(default=None, alias="ProviderName")

    @field_validator("expiration")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def is_issued(self) -> bool:
        """False when the triple came from ambient configuration.

        Records without a ProviderName predate the provenance tag and are
        judged on expiry alone.
        """
        return self.provider_name not in AMBIENT_PROVIDERS

    def is_expired(self, now: Optional[datetime] = None, window_seconds: int = 0) -> bool:
        """Check whether the credentials are inside their validity window.

        Args:
            now: Current time, defaults to the current UTC time
            window_seconds: Treat credentials as expired this many seconds early

        Returns:
            bool: True if the credentials must not be used any more
        """
        if self.expiration is None:
            # A session token without a known lifetime cannot be validated
            return bool(self.session_token)
        if now is None:
            now = datetime.now(timezone.utc)
        return now >= self.expiration - timedelta(seconds=window_seconds)

    def triple(self) -> tuple[str, str, str]:
        return self.access_key_id, self.secret_access_key, self.session_token

    def to_cache_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_cache_json(cls, data: str) -> "CachedCredentialSet":
        return cls.model_validate_json(data)
