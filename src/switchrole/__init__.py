# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
aws-switchrole - cached AWS credentials for CLI profiles.

Resolves the credentials of a named AWS CLI profile, prompting for an MFA code
when the profile needs one, and caches the issued session credentials on disk
so later invocations reuse them until they expire.
"""

__version__ = "0.1.0"
