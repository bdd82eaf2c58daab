"""
Caller identity lookup for a profile through AWS STS.
"""

import logging
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import InvalidConfigurations

__all__ = [
    'describe_arn',
    'get_caller_identity',
]

logger = logging.getLogger(__name__)


def describe_arn(arn: str) -> Dict[str, Optional[str]]:
    """
    Get the authentication method and identity name from a caller ARN.

    Args:
        arn: ARN returned by sts:GetCallerIdentity

    Returns:
        Dict with `auth_method` and `user_identity`, either may be None
    """
    auth_method = None
    user_identity = None
    parts = arn.split("/")

    if ":assumed-role/" in arn:
        # arn:aws:sts::ACCOUNT:assumed-role/ROLE/SESSION
        auth_method = "role"
    elif ":user/" in arn:
        # arn:aws:iam::ACCOUNT:user/USERNAME
        auth_method = "api_key"
    elif ":federated-user/" in arn:
        auth_method = "federated"
    elif arn.endswith(":root"):
        auth_method = "root"

    if auth_method and len(parts) >= 2:
        user_identity = parts[1]

    return {"auth_method": auth_method, "user_identity": user_identity}


def get_caller_identity(profile: Optional[str] = None) -> Dict[str, Optional[str]]:
    """
    Ask STS who the credentials of a profile belong to.

    Args:
        profile: Profile name, or None for the default credentials chain

    Returns:
        Dict with `account`, `arn`, `user_id`, `auth_method` and `user_identity`

    Raises:
        InvalidConfigurations: If the profile is unknown to boto3 or the
            credentials are rejected
    """
    try:
        session = boto3.Session(profile_name=profile)
        identity = session.client("sts").get_caller_identity()
    except (BotoCoreError, ClientError) as e:
        raise InvalidConfigurations(
            f"failed to get caller identity of profile ({profile or 'default'}): {e}"
        ) from e

    arn = identity.get("Arn", "")
    logger.debug("caller identity of %s: %s", profile or "default", arn)
    return {
        "account": identity.get("Account"),
        "arn": arn,
        "user_id": identity.get("UserId"),
        **describe_arn(arn),
    }
