"""AWS integration library for the iamreport tool."""

from .iam import (
    get_current_user,
    get_policy_version,
    list_attached_user_policies,
    list_groups_for_user,
    list_inline_user_policies,
    list_policy_versions,
)
from .sessions import create_iam_client, create_session

__all__ = [
    "create_session",
    "create_iam_client",
    "get_current_user",
    "list_groups_for_user",
    "list_attached_user_policies",
    "list_inline_user_policies",
    "list_policy_versions",
    "get_policy_version",
]
