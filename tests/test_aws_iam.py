"""
Tests for iamreport.aws.iam module.

Tests for the single-call IAM query functions.
"""

import pytest
from datetime import datetime, timezone
from botocore.exceptions import ClientError, EndpointConnectionError, NoCredentialsError
from unittest.mock import MagicMock, patch
from iamreport.aws.iam import (
    get_current_user,
    get_policy_version,
    list_attached_user_policies,
    list_groups_for_user,
    list_inline_user_policies,
    list_policy_versions,
)
from iamreport.errors import ApiError, ConfigError
from iamreport.types import AttachedPolicy, Group, PolicyVersion, User

CREATED = datetime(2023, 4, 1, 12, 30, tzinfo=timezone.utc)


def _access_denied(operation: str) -> ClientError:
    return ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "User is not authorized"}},
        operation
    )


class TestGetCurrentUser:
    """Test get_current_user function."""

    def test_get_current_user_success(self) -> None:
        """Test response fields are copied onto the User."""
        mock_iam_client = MagicMock()
        mock_iam_client.get_user.return_value = {
            "User": {
                "Path": "/",
                "UserName": "alice",
                "UserId": "AIDAEXAMPLE1234567890",
                "Arn": "arn:aws:iam::123456789012:user/alice",
                "CreateDate": CREATED,
            }
        }

        result = get_current_user(mock_iam_client)

        mock_iam_client.get_user.assert_called_once_with()
        assert result == User(
            user_name="alice",
            arn="arn:aws:iam::123456789012:user/alice",
            user_id="AIDAEXAMPLE1234567890",
            create_date=CREATED,
        )

    def test_get_current_user_client_error(self) -> None:
        """Test ClientError is wrapped in ApiError and logged."""
        mock_iam_client = MagicMock()
        mock_iam_client.get_user.side_effect = _access_denied("GetUser")

        with patch("iamreport.aws.iam.logger.error") as mock_logger:
            with pytest.raises(ApiError) as exc_info:
                get_current_user(mock_iam_client)

        assert exc_info.value.operation == "GetUser"
        assert isinstance(exc_info.value.error, ClientError)
        mock_logger.assert_called_once()
        assert "Here's why" in mock_logger.call_args[0][0]

    def test_get_current_user_no_credentials(self) -> None:
        """Test missing credentials raise ConfigError rather than ApiError."""
        mock_iam_client = MagicMock()
        mock_iam_client.get_user.side_effect = NoCredentialsError()

        with pytest.raises(ConfigError):
            get_current_user(mock_iam_client)

    def test_get_current_user_transport_error(self) -> None:
        """Test botocore transport errors are wrapped in ApiError."""
        mock_iam_client = MagicMock()
        mock_iam_client.get_user.side_effect = EndpointConnectionError(endpoint_url="https://iam.amazonaws.com")

        with pytest.raises(ApiError) as exc_info:
            get_current_user(mock_iam_client)

        assert exc_info.value.operation == "GetUser"

    def test_get_current_user_missing_field(self) -> None:
        """Test partial responses are not defended against."""
        mock_iam_client = MagicMock()
        mock_iam_client.get_user.return_value = {"User": {"UserName": "alice"}}

        with pytest.raises(KeyError):
            get_current_user(mock_iam_client)


class TestListGroupsForUser:
    """Test list_groups_for_user function."""

    def test_list_groups(self) -> None:
        """Test each group in the response becomes a Group."""
        mock_iam_client = MagicMock()
        mock_iam_client.list_groups_for_user.return_value = {
            "Groups": [
                {
                    "Path": "/",
                    "GroupName": "admins",
                    "GroupId": "AGPAADMINS",
                    "Arn": "arn:aws:iam::123456789012:group/admins",
                    "CreateDate": CREATED,
                },
                {
                    "Path": "/",
                    "GroupName": "devs",
                    "GroupId": "AGPADEVS",
                    "Arn": "arn:aws:iam::123456789012:group/devs",
                    "CreateDate": CREATED,
                },
            ],
            "IsTruncated": False,
        }

        result = list_groups_for_user(mock_iam_client, "alice")

        mock_iam_client.list_groups_for_user.assert_called_once_with(UserName="alice")
        assert result == [
            Group("admins", "arn:aws:iam::123456789012:group/admins", "AGPAADMINS", CREATED),
            Group("devs", "arn:aws:iam::123456789012:group/devs", "AGPADEVS", CREATED),
        ]

    def test_list_groups_empty(self) -> None:
        """Test a user with no groups."""
        mock_iam_client = MagicMock()
        mock_iam_client.list_groups_for_user.return_value = {"Groups": [], "IsTruncated": False}

        assert list_groups_for_user(mock_iam_client, "alice") == []

    def test_list_groups_passes_max_items(self) -> None:
        """Test max_items is sent as MaxItems."""
        mock_iam_client = MagicMock()
        mock_iam_client.list_groups_for_user.return_value = {"Groups": []}

        list_groups_for_user(mock_iam_client, "alice", max_items=5)

        mock_iam_client.list_groups_for_user.assert_called_once_with(UserName="alice", MaxItems=5)

    def test_list_groups_truncated_response_not_followed(self) -> None:
        """Test only a single page is requested even when IAM reports truncation."""
        mock_iam_client = MagicMock()
        mock_iam_client.list_groups_for_user.return_value = {
            "Groups": [],
            "IsTruncated": True,
            "Marker": "next-page",
        }

        list_groups_for_user(mock_iam_client, "alice")

        assert mock_iam_client.list_groups_for_user.call_count == 1

    def test_list_groups_client_error(self) -> None:
        """Test ClientError is wrapped in ApiError."""
        mock_iam_client = MagicMock()
        mock_iam_client.list_groups_for_user.side_effect = _access_denied("ListGroupsForUser")

        with pytest.raises(ApiError) as exc_info:
            list_groups_for_user(mock_iam_client, "alice")

        assert exc_info.value.operation == "ListGroupsForUser"


class TestListAttachedUserPolicies:
    """Test list_attached_user_policies function."""

    def test_list_attached_policies(self) -> None:
        mock_iam_client = MagicMock()
        mock_iam_client.list_attached_user_policies.return_value = {
            "AttachedPolicies": [
                {"PolicyName": "ReadOnlyAccess", "PolicyArn": "arn:aws:iam::aws:policy/ReadOnlyAccess"}
            ]
        }

        result = list_attached_user_policies(mock_iam_client, "alice")

        mock_iam_client.list_attached_user_policies.assert_called_once_with(UserName="alice")
        assert result == [AttachedPolicy("ReadOnlyAccess", "arn:aws:iam::aws:policy/ReadOnlyAccess")]

    def test_list_attached_policies_client_error(self) -> None:
        mock_iam_client = MagicMock()
        mock_iam_client.list_attached_user_policies.side_effect = _access_denied("ListAttachedUserPolicies")

        with pytest.raises(ApiError) as exc_info:
            list_attached_user_policies(mock_iam_client, "alice")

        assert exc_info.value.operation == "ListAttachedUserPolicies"


class TestListInlineUserPolicies:
    """Test list_inline_user_policies function."""

    def test_list_inline_policies(self) -> None:
        mock_iam_client = MagicMock()
        mock_iam_client.list_user_policies.return_value = {"PolicyNames": ["s3-scratch", "kms-decrypt"]}

        result = list_inline_user_policies(mock_iam_client, "alice", max_items=10)

        mock_iam_client.list_user_policies.assert_called_once_with(UserName="alice", MaxItems=10)
        assert result == ["s3-scratch", "kms-decrypt"]

    def test_list_inline_policies_client_error(self) -> None:
        mock_iam_client = MagicMock()
        mock_iam_client.list_user_policies.side_effect = _access_denied("ListUserPolicies")

        with pytest.raises(ApiError) as exc_info:
            list_inline_user_policies(mock_iam_client, "alice")

        assert exc_info.value.operation == "ListUserPolicies"


class TestPolicyVersions:
    """Test list_policy_versions and get_policy_version functions."""

    def test_list_policy_versions(self) -> None:
        mock_iam_client = MagicMock()
        mock_iam_client.list_policy_versions.return_value = {
            "Versions": [
                {"VersionId": "v2", "IsDefaultVersion": True, "CreateDate": CREATED},
                {"VersionId": "v1", "IsDefaultVersion": False, "CreateDate": CREATED},
            ]
        }

        result = list_policy_versions(mock_iam_client, "arn:aws:iam::123456789012:policy/app")

        mock_iam_client.list_policy_versions.assert_called_once_with(
            PolicyArn="arn:aws:iam::123456789012:policy/app"
        )
        assert result == [PolicyVersion("v2", CREATED), PolicyVersion("v1", CREATED)]

    def test_list_policy_versions_not_found(self) -> None:
        mock_iam_client = MagicMock()
        mock_iam_client.list_policy_versions.side_effect = ClientError(
            {"Error": {"Code": "NoSuchEntity", "Message": "Policy not found"}},
            "ListPolicyVersions"
        )

        with pytest.raises(ApiError) as exc_info:
            list_policy_versions(mock_iam_client, "arn:aws:iam::123456789012:policy/missing")

        assert exc_info.value.error.response["Error"]["Code"] == "NoSuchEntity"  # type: ignore[union-attr]

    def test_get_policy_version_keeps_document_encoded(self) -> None:
        """Test the document is returned untouched for the caller to decode."""
        mock_iam_client = MagicMock()
        mock_iam_client.get_policy_version.return_value = {
            "PolicyVersion": {
                "Document": "%7B%22Version%22%3A%222012-10-17%22%7D",
                "VersionId": "v1",
                "IsDefaultVersion": True,
                "CreateDate": CREATED,
            }
        }

        result = get_policy_version(mock_iam_client, "arn:aws:iam::123456789012:policy/app", "v1")

        mock_iam_client.get_policy_version.assert_called_once_with(
            PolicyArn="arn:aws:iam::123456789012:policy/app",
            VersionId="v1"
        )
        assert result.version_id == "v1"
        assert result.create_date == CREATED
        assert result.document == "%7B%22Version%22%3A%222012-10-17%22%7D"

    def test_get_policy_version_client_error(self) -> None:
        mock_iam_client = MagicMock()
        mock_iam_client.get_policy_version.side_effect = _access_denied("GetPolicyVersion")

        with pytest.raises(ApiError) as exc_info:
            get_policy_version(mock_iam_client, "arn:aws:iam::123456789012:policy/app", "v9")

        assert exc_info.value.operation == "GetPolicyVersion"
