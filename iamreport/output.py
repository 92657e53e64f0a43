"""
Centralized output handling with consistent formatting.

This module provides a single point of control for all user-facing output,
so every report section is delimited and indented the same way.
"""

from typing import Any

from .constants import MAJOR_SEPARATOR, MINOR_SEPARATOR


class OutputHandler:
    """Centralized output handling with consistent formatting."""

    @staticmethod
    def major_rule() -> None:
        """Print the rule that delimits top-level sections."""
        print(MAJOR_SEPARATOR)

    @staticmethod
    def minor_rule() -> None:
        """Print the rule that delimits items within a section."""
        print(MINOR_SEPARATOR)

    @staticmethod
    def section_header(title: str) -> None:
        """
        Print section header between two major rules.

        Args:
            title: Section title
        """
        print(MAJOR_SEPARATOR)
        print(title)
        print(MAJOR_SEPARATOR)

    @staticmethod
    def field(label: str, value: Any) -> None:
        """
        Print one tab-indented field of a report item.

        Args:
            label: Field label, e.g. "User ARN"
            value: Field value, printed as-is
        """
        print(f"\t{label}: {value}")

    @staticmethod
    def error(title: str, error: Exception) -> None:
        """
        Print formatted error message.

        Args:
            title: Error title
            error: Exception that occurred
        """
        print(f"\n🚨 {title}:\n{error}\n")
