"""Rollout configuration schema."""

from datetime import timedelta
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from asg_rollout.config.duration import parse_duration

DEFAULT_BATCH_SIZE = 1
DEFAULT_MIN_INSTANCES_IN_SERVICE = 0
DEFAULT_PAUSE_TIME = "0s"
DEFAULT_ASG_NEW_TIME = "2m"


class RolloutConfig(BaseModel):
    """Settings for a single rollout of one Auto Scaling Group."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    asg_name: str = Field(..., min_length=1, description="The name of the AutoScaling Group to manage")
    region: Optional[str] = Field(
        None, description="The AWS region, looked up from environment or profile when unset"
    )
    access_key: Optional[str] = Field(
        None, description="The AWS access key, looked up from environment or profile when unset"
    )
    secret_key: Optional[str] = Field(None, repr=False, description="The AWS secret key")
    token: Optional[str] = Field(None, repr=False, description="The AWS session token")
    profile: Optional[str] = Field(
        None, description="The AWS profile name as set in the shared configuration file"
    )
    batch_size: int = Field(
        DEFAULT_BATCH_SIZE,
        description="The maximum number of instances updated in a single pass; "
        "0 or less means the group's desired capacity",
    )
    min_instances_in_service: int = Field(
        DEFAULT_MIN_INSTANCES_IN_SERVICE,
        ge=0,
        description="The minimum number of instances that must stay in service while old instances are updated",
    )
    pause_time: timedelta = Field(
        default_factory=lambda: parse_duration(DEFAULT_PAUSE_TIME),
        description="Pause between batches of instances",
    )
    asg_new_time: timedelta = Field(
        default_factory=lambda: parse_duration(DEFAULT_ASG_NEW_TIME),
        description="Age below which the group is considered new and left alone",
    )

    @field_validator("region", "access_key", "secret_key", "token", "profile", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("pause_time", "asg_new_time", mode="before")
    @classmethod
    def _parse_duration(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_duration(value)
        if isinstance(value, timedelta):
            return value
        # bare numbers have no unit
        raise ValueError(f'invalid duration {value!r}, expected a string such as "30s"')

    @field_validator("pause_time", "asg_new_time")
    @classmethod
    def _non_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("duration must not be negative")
        return value

    @property
    def has_static_credentials(self) -> bool:
        return bool(self.access_key)
