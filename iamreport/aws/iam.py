"""
AWS IAM queries for the current user.

Each function maps to exactly one IAM API call and returns the response
projected onto the dataclasses in iamreport.types. Only a single page is
requested; truncated responses are not followed.
"""

import logging
from typing import Any, Dict, List, Optional

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    NoCredentialsError,
    PartialCredentialsError,
)
from mypy_boto3_iam.client import IAMClient

from ..errors import ApiError, ConfigError
from ..types import AttachedPolicy, Group, PolicyVersion, PolicyVersionDocument, User

logger = logging.getLogger(__name__)


def _list_kwargs(user_name: str, max_items: Optional[int]) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {"UserName": user_name}
    if max_items is not None:
        kwargs["MaxItems"] = max_items
    return kwargs


def get_current_user(iam_client: IAMClient) -> User:
    """
    Get the details of the user the client is authenticated as.

    Args:
        iam_client: IAM client for the current credentials

    Returns:
        User for the calling principal

    Raises:
        ConfigError: If no usable credentials are available
        ApiError: If the GetUser call fails
    """
    try:
        resp = iam_client.get_user()
    except (NoCredentialsError, PartialCredentialsError) as e:
        logger.error(f"Couldn't get details for the user. Here's why: {e}")
        raise ConfigError(str(e)) from e
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Couldn't get details for the user. Here's why: {e}")
        raise ApiError("GetUser", e) from e

    user = resp["User"]
    return User(
        user_name=user["UserName"],
        arn=user["Arn"],
        user_id=user["UserId"],
        create_date=user["CreateDate"],
    )


def list_groups_for_user(
    iam_client: IAMClient,
    user_name: str,
    max_items: Optional[int] = None
) -> List[Group]:
    """
    List the groups that the user belongs to.

    Args:
        iam_client: IAM client
        user_name: Name of the user
        max_items: Optional cap on the number of groups returned

    Returns:
        List of Group, possibly empty

    Raises:
        ApiError: If the ListGroupsForUser call fails
    """
    try:
        resp = iam_client.list_groups_for_user(**_list_kwargs(user_name, max_items))
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Couldn't get the groups for the user. Here's why: {e}")
        raise ApiError("ListGroupsForUser", e) from e

    return [
        Group(
            group_name=group["GroupName"],
            arn=group["Arn"],
            group_id=group["GroupId"],
            create_date=group["CreateDate"],
        )
        for group in resp["Groups"]
    ]


def list_attached_user_policies(
    iam_client: IAMClient,
    user_name: str,
    max_items: Optional[int] = None
) -> List[AttachedPolicy]:
    """
    List the managed policies attached directly to the user.

    Raises:
        ApiError: If the ListAttachedUserPolicies call fails
    """
    try:
        resp = iam_client.list_attached_user_policies(**_list_kwargs(user_name, max_items))
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Couldn't get the policies attached to the user. Here's why: {e}")
        raise ApiError("ListAttachedUserPolicies", e) from e

    return [
        AttachedPolicy(policy_name=policy["PolicyName"], policy_arn=policy["PolicyArn"])
        for policy in resp["AttachedPolicies"]
    ]


def list_inline_user_policies(
    iam_client: IAMClient,
    user_name: str,
    max_items: Optional[int] = None
) -> List[str]:
    """
    List the names of the inline policies embedded in the user.

    Raises:
        ApiError: If the ListUserPolicies call fails
    """
    try:
        resp = iam_client.list_user_policies(**_list_kwargs(user_name, max_items))
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Couldn't get the inline policies attached to the user. Here's why: {e}")
        raise ApiError("ListUserPolicies", e) from e

    return list(resp["PolicyNames"])


def list_policy_versions(iam_client: IAMClient, policy_arn: str) -> List[PolicyVersion]:
    """
    List the available versions of a managed policy.

    Raises:
        ApiError: If the ListPolicyVersions call fails
    """
    try:
        resp = iam_client.list_policy_versions(PolicyArn=policy_arn)
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Couldn't get details for the policy version. Here's why: {e}")
        raise ApiError("ListPolicyVersions", e) from e

    return [
        PolicyVersion(version_id=version["VersionId"], create_date=version["CreateDate"])
        for version in resp["Versions"]
    ]


def get_policy_version(iam_client: IAMClient, policy_arn: str, version_id: str) -> PolicyVersionDocument:
    """
    Get one version of a managed policy, including its document.

    Args:
        iam_client: IAM client
        policy_arn: ARN of the managed policy
        version_id: Version to fetch, e.g. "v1"

    Returns:
        PolicyVersionDocument whose document is still encoded

    Raises:
        ApiError: If the GetPolicyVersion call fails
    """
    try:
        resp = iam_client.get_policy_version(PolicyArn=policy_arn, VersionId=version_id)
    except (ClientError, BotoCoreError) as e:
        logger.error(f"Couldn't get details for the policy version. Here's why: {e}")
        raise ApiError("GetPolicyVersion", e) from e

    version = resp["PolicyVersion"]
    return PolicyVersionDocument(
        version_id=version["VersionId"],
        create_date=version["CreateDate"],
        document=version["Document"],
    )
