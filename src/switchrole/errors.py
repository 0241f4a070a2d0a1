# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
Exception types raised while resolving cached credentials.

Only AuthenticationError and DirectoryCreationError end an invocation. The
cache-related errors are recovered by falling through to a refresh, and a
PersistError is downgraded to a warning.
"""


class SwitchRoleError(Exception):
    """Base class for aws-switchrole errors."""
    pass


class CacheUnavailableError(SwitchRoleError):
    """Raised when a cache file is missing, unreadable or malformed."""
    pass


class DegenerateCredentialError(SwitchRoleError):
    """Raised when a cached record was never issued by the provider."""
    pass


class AuthenticationError(SwitchRoleError):
    """Raised when the provider cannot issue credentials for a profile."""

    def __init__(self, profile: str, reason: str):
        self.profile = profile
        self.reason = reason
        super().__init__(f"Could not authenticate profile '{profile}': {reason}")


class PersistError(SwitchRoleError):
    """Raised when credentials cannot be written to the cache."""
    pass


class DirectoryCreationError(SwitchRoleError):
    """Raised when the cache directory cannot be created."""
    pass
