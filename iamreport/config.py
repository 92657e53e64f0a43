import logging
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class ReportConfig(BaseModel):
    # Named profile from the shared AWS config; None uses the default chain
    profile_name: Optional[str] = None
    region_name: Optional[str] = None
    # Passed as MaxItems to list calls; None lets IAM pick its page size
    max_items: Optional[int] = Field(default=None, ge=1)
    # Ask whether to show a policy version's document
    prompt_for_policy_versions: bool = True
    # Exit with status 1 when a query fails instead of returning quietly
    exit_on_error: bool = False
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{value}'")
        return level
