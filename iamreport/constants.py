"""
Constants module for report separators and prompts.

This module contains the fixed strings used throughout the iamreport codebase.
"""

# Report separators
# Major rule delimits top-level sections, minor rule delimits items within a section
MAJOR_SEPARATOR = "=" * 37
MINOR_SEPARATOR = "-" * 37

# Interactive prompts for the policy version branch
POLICY_VERSION_PROMPT = "Do you want the details of any policy's version? (y/n): "
POLICY_ARN_PROMPT = "Enter the ARN of the policy: "
VERSION_ID_PROMPT = "Enter the version ID to retrieve: "

# Only this exact answer enters the policy version branch
AFFIRMATIVE_ANSWER = "y"
