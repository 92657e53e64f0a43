"""
Report driver for the current IAM user.

Runs the fixed sequence of read-only IAM queries and prints each result.
A failed top-level query stops the report; a failure inside the interactive
policy version branch only ends that branch.
"""

import logging
from typing import Callable, List, Optional

from mypy_boto3_iam.client import IAMClient

from .aws.iam import (
    get_current_user,
    get_policy_version,
    list_attached_user_policies,
    list_groups_for_user,
    list_inline_user_policies,
    list_policy_versions,
)
from .config import ReportConfig
from .constants import (
    AFFIRMATIVE_ANSWER,
    POLICY_ARN_PROMPT,
    POLICY_VERSION_PROMPT,
    VERSION_ID_PROMPT,
)
from .errors import ApiError, DecodeError
from .output import OutputHandler
from .policy import decode_policy_document
from .types import User

logger = logging.getLogger(__name__)

InputReader = Callable[[str], str]
"""Reads one line of user input after showing a prompt."""


def read_line(prompt: str) -> str:
    """Prompt on stdout and read one line from stdin; end of input reads as empty."""
    try:
        return input(prompt)
    except EOFError:
        return ""


def _read_token(read_input: InputReader, prompt: str) -> str:
    tokens = read_input(prompt).split()
    return tokens[0] if tokens else ""


def report_current_user(iam_client: IAMClient) -> User:
    """
    Fetch and print the details of the current user.

    Raises:
        ConfigError: If credentials cannot be resolved
        ApiError: If the GetUser call fails
    """
    user = get_current_user(iam_client)

    print("User details:")
    OutputHandler.field("Username", user.user_name)
    OutputHandler.field("User ARN", user.arn)
    OutputHandler.field("User ID", user.user_id)
    OutputHandler.field("Created on", user.create_date)
    OutputHandler.major_rule()
    return user


def report_groups(iam_client: IAMClient, user_name: str, max_items: Optional[int] = None) -> None:
    """Print a block per group the user belongs to."""
    OutputHandler.section_header("Getting groups for the current user...")
    for group in list_groups_for_user(iam_client, user_name, max_items):
        OutputHandler.field("Group name", group.group_name)
        OutputHandler.field("Group ARN", group.arn)
        OutputHandler.field("Group ID", group.group_id)
        OutputHandler.field("Created on", group.create_date)
        OutputHandler.minor_rule()


def report_attached_policies(iam_client: IAMClient, user_name: str, max_items: Optional[int] = None) -> None:
    """Print a block per managed policy attached to the user."""
    OutputHandler.section_header("Getting attached policies for the current user...")
    for policy in list_attached_user_policies(iam_client, user_name, max_items):
        OutputHandler.field("Policy name", policy.policy_name)
        OutputHandler.field("Policy ARN", policy.policy_arn)
        OutputHandler.minor_rule()


def report_inline_policies(iam_client: IAMClient, user_name: str, max_items: Optional[int] = None) -> None:
    """Print a line per inline policy embedded in the user."""
    OutputHandler.section_header("Getting inline policies for the current user...")
    policy_names: List[str] = list_inline_user_policies(iam_client, user_name, max_items)
    for policy_name in policy_names:
        OutputHandler.field("Policy name", policy_name)
        OutputHandler.minor_rule()


def prompt_for_policy_version_details(iam_client: IAMClient, read_input: InputReader = read_line) -> None:
    """
    Optionally show one version of a managed policy, including its document.

    Asks whether to continue; any answer other than exactly "y" skips the
    branch. Otherwise reads a policy ARN, lists its versions, reads a version
    ID and prints that version's decoded document. API and decode failures
    end the branch without propagating.

    Args:
        iam_client: IAM client
        read_input: Line reader used for the three prompts
    """
    if _read_token(read_input, POLICY_VERSION_PROMPT) != AFFIRMATIVE_ANSWER:
        return

    policy_arn = _read_token(read_input, POLICY_ARN_PROMPT)

    print("Available versions: ")
    try:
        versions = list_policy_versions(iam_client, policy_arn)
    except ApiError:
        print("Couldn't get details for the policy version")
        return

    for version in versions:
        OutputHandler.field("Version ID", version.version_id)
        OutputHandler.field("Created on", version.create_date)
        print()

    version_id = _read_token(read_input, VERSION_ID_PROMPT)
    print(f"Getting details for version {version_id}")
    try:
        details = get_policy_version(iam_client, policy_arn, version_id)
    except ApiError:
        print("Couldn't get details for the policy version")
        return

    OutputHandler.major_rule()
    print("Policy version details:")
    OutputHandler.field("Version ID", details.version_id)
    OutputHandler.field("Created on", details.create_date)
    try:
        document = decode_policy_document(details.document)
    except DecodeError as e:
        logger.error(f"Couldn't decode policy {policy_arn} version {version_id}: {e}")
        print("Couldn't decode the document. Exiting...")
        return

    print(f"\tDocument: \n{document}")
    OutputHandler.major_rule()


def run_report(
    iam_client: IAMClient,
    config: ReportConfig,
    read_input: InputReader = read_line
) -> bool:
    """
    Run the full report for the current user.

    Args:
        iam_client: IAM client for the current credentials
        config: Validated report configuration
        read_input: Line reader for the interactive branch

    Returns:
        True if every top-level query succeeded, False if the report stopped early

    Raises:
        ConfigError: If credentials turn out to be unresolvable on the first call
    """
    print("Getting details for the current user...")
    OutputHandler.major_rule()
    try:
        user = report_current_user(iam_client)
    except ApiError:
        print("Couldn't get details for the current user. Exiting...")
        return False

    try:
        report_groups(iam_client, user.user_name, config.max_items)
    except ApiError:
        print("Couldn't get groups for the current user. Exiting...")
        return False

    try:
        report_attached_policies(iam_client, user.user_name, config.max_items)
    except ApiError:
        print("Couldn't get attached policies for the current user. Exiting...")
        return False

    if config.prompt_for_policy_versions:
        prompt_for_policy_version_details(iam_client, read_input)

    try:
        report_inline_policies(iam_client, user.user_name, config.max_items)
    except ApiError:
        print("Couldn't get inline policies for the current user. Exiting...")
        return False

    print("All done!")
    return True
