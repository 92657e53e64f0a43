"""
Shared data types for the iamreport application.

These dataclasses are read-only projections of IAM API responses. Every field
is taken directly from the response; none are created or mutated locally.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Union


PolicyDocument = Union[str, Dict[str, Any]]
"""A policy document, either URL-encoded JSON text or an already-decoded mapping."""


@dataclass
class User:
    """The currently authenticated IAM user."""
    user_name: str
    arn: str
    user_id: str
    create_date: datetime


@dataclass
class Group:
    """An IAM group the user belongs to."""
    group_name: str
    arn: str
    group_id: str
    create_date: datetime


@dataclass
class AttachedPolicy:
    """A managed policy attached to the user by reference."""
    policy_name: str
    policy_arn: str


@dataclass
class PolicyVersion:
    """Summary of one version of a managed policy."""
    version_id: str
    create_date: datetime


@dataclass
class PolicyVersionDocument:
    """
    A single policy version together with its document.

    Attributes:
        version_id: Version identifier, e.g. "v3"
        create_date: When the version was created
        document: URL-encoded JSON text or a decoded mapping
    """
    version_id: str
    create_date: datetime
    document: PolicyDocument
