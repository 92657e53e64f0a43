"""Exception types raised by iamreport."""

from typing import Optional


class ReportError(Exception):
    """Base class for all iamreport errors."""
    pass


class ConfigError(ReportError):
    """Raised when ambient AWS credentials or configuration cannot be resolved."""
    pass


class ApiError(ReportError):
    """
    Raised when an IAM API call fails.

    Attributes:
        operation: Name of the IAM operation that failed
        error: The underlying botocore exception
    """

    def __init__(self, operation: str, error: Optional[Exception] = None) -> None:
        self.operation = operation
        self.error = error
        super().__init__(f"{operation} failed: {error}")


class DecodeError(ReportError):
    """Raised when a policy document cannot be percent-decoded."""
    pass
