"""AWS session management utilities."""

import logging
from typing import Optional

from boto3.session import Session
from botocore.exceptions import BotoCoreError, ProfileNotFound
from mypy_boto3_iam.client import IAMClient

from ..errors import ConfigError

logger = logging.getLogger(__name__)


def create_session(
    profile_name: Optional[str] = None,
    region_name: Optional[str] = None
) -> Session:
    """
    Build a boto3 Session from the ambient configuration chain.

    Args:
        profile_name: Named profile to use (defaults to the standard chain)
        region_name: Region override for the session

    Returns:
        boto3 Session with resolvable credentials

    Raises:
        ConfigError: If the profile does not exist, the shared config can't be
            parsed, or no credentials can be found or retrieved
    """
    try:
        session = Session(profile_name=profile_name, region_name=region_name)
        credentials = session.get_credentials()
    except (ProfileNotFound, BotoCoreError) as e:
        raise ConfigError(str(e)) from e

    if credentials is None:
        raise ConfigError("Unable to locate credentials in the default configuration chain")

    logger.debug(f"Resolved AWS session (profile={session.profile_name}, region={session.region_name})")
    return session


def create_iam_client(session: Session) -> IAMClient:
    """Return an IAM client for the given session."""
    iam_client: IAMClient = session.client("iam")
    return iam_client
