# Copyright (c) 2025 Mahmood Khordoo
#
# This software is licensed under the MIT License.
# See the LICENSE file in the root directory for details.

"""
AWS utilities for aws-switchrole.

This module is the boundary to the AWS SDK. It opens a session for a named
profile, lets botocore run whatever chain the profile configures (static keys,
SSO, assume-role with an MFA prompt on the terminal) and extracts the
resulting credential triple together with its expiry and provenance.

Functions:
    new_session_from_profile: Create a boto3 session for a profile
    extract_credentials: Turn a session's credentials into a cache record
    fetch_credentials: Issue fresh credentials for a profile
    verify_credentials: Check a credential triple against STS
"""

import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from switchrole.errors import AuthenticationError
from switchrole.models import CachedCredentialSet

logger = logging.getLogger(__name__)


def new_session_from_profile(profile: str) -> boto3.Session:
    """Create a session that reads the profile from the shared AWS config."""
    return boto3.Session(profile_name=profile)


def extract_credentials(session: boto3.Session, profile: str) -> CachedCredentialSet:
    """
    Resolve the session's credentials into a CachedCredentialSet.

    Freezing the credentials runs the profile's provider chain, so this is the
    point where botocore prompts for an MFA code if the role requires one.

    Args:
        session: Session created for the profile
        profile: Profile name, used in error messages

    Returns:
        CachedCredentialSet: The issued triple with expiry and provider method

    Raises:
        AuthenticationError: If no credentials can be obtained
    """
    try:
        credentials = session.get_credentials()
        if credentials is None:
            raise NoCredentialsError()
        frozen = credentials.get_frozen_credentials()
    except ClientError as e:
        error = e.response.get("Error", {})
        raise AuthenticationError(profile, f"{error.get('Code')}: {error.get('Message')}") from e
    except BotoCoreError as e:
        raise AuthenticationError(profile, str(e)) from e

    # botocore keeps the expiry only on RefreshableCredentials._expiry_time;
    # static Credentials have none.
    expiry = getattr(credentials, "_expiry_time", None)
    method = getattr(credentials, "method", None)
    logger.debug("Profile %s resolved via %s, expires %s", profile, method, expiry)

    return CachedCredentialSet(
        access_key_id=frozen.access_key,
        secret_access_key=frozen.secret_key,
        session_token=frozen.token or "",
        expiration=expiry,
        provider_name=method,
    )


def fetch_credentials(profile: str) -> CachedCredentialSet:
    """Issue fresh credentials for a profile, prompting for MFA if required."""
    try:
        session = new_session_from_profile(profile)
    except BotoCoreError as e:
        raise AuthenticationError(profile, str(e)) from e
    return extract_credentials(session, profile)


def verify_credentials(creds: CachedCredentialSet, region: Optional[str] = None) -> Optional[str]:
    """Check the credentials with STS and return the caller ARN, or None if rejected."""
    try:
        sts = boto3.client(
            "sts",
            aws_access_key_id=creds.access_key_id,
            aws_secret_access_key=creds.secret_access_key,
            aws_session_token=creds.session_token or None,
            region_name=region,
        )
        ident = sts.get_caller_identity()
        return ident["Arn"]
    except ClientError as e:
        error_code = e.response["Error"]["Code"]
        if error_code in ("ExpiredToken", "InvalidClientTokenId", "SignatureDoesNotMatch"):
            logger.error("Credentials were rejected by STS (%s)", error_code)
        else:
            logger.error("Error verifying credentials: %s", e)
        return None
    except BotoCoreError as e:
        logger.error("Error verifying credentials: %s", e)
        return None
