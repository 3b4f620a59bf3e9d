"""Auto Scaling Group domain models."""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class GroupDescription(BaseModel):
    """Group state as reported by a single describe call."""

    model_config = ConfigDict(frozen=True)

    name: str
    launch_configuration_name: Optional[str] = None
    launch_template_id: Optional[str] = None
    created_at: datetime
    desired_capacity: int = Field(ge=0)
    min_size: int = 0
    max_size: int = 0
    instance_count: int = 0
    instance_ids: tuple[str, ...] = ()

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return _ensure_utc(value)

    @classmethod
    def from_describe_auto_scaling_group(cls, asg_data: dict[str, Any]) -> "GroupDescription":
        """Build from a describe_auto_scaling_groups API response entry."""
        launch_template = asg_data.get("LaunchTemplate") or {}
        instances = asg_data.get("Instances", [])
        created_time = asg_data["CreatedTime"]
        if isinstance(created_time, str):
            created_time = datetime.fromisoformat(created_time.replace("Z", "+00:00"))
        return cls(
            name=asg_data["AutoScalingGroupName"],
            launch_configuration_name=asg_data.get("LaunchConfigurationName") or None,
            launch_template_id=launch_template.get("LaunchTemplateId"),
            created_at=created_time,
            desired_capacity=asg_data.get("DesiredCapacity", 0),
            min_size=asg_data.get("MinSize", 0),
            max_size=asg_data.get("MaxSize", 0),
            instance_count=len(instances),
            instance_ids=tuple(instance["InstanceId"] for instance in instances),
        )


class GroupSnapshot(BaseModel):
    """Immutable view of the group captured once at the start of a rollout.

    ``active_config_id`` is the sole staleness criterion for the whole pass
    and is never re-read, even though terminations change group membership.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    active_config_id: str
    created_at: datetime
    desired_capacity: int = Field(ge=0)

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return _ensure_utc(value)

    def age(self, now: datetime) -> timedelta:
        """Time elapsed since the group was created."""
        return _ensure_utc(now) - self.created_at


class InstanceRecord(BaseModel):
    """A group member as listed by the control plane.

    ``config_id`` is None when the launch configuration the instance was
    started with has since been deleted.
    """

    model_config = ConfigDict(frozen=True)

    instance_id: str
    config_id: Optional[str] = None

    def is_stale(self, active_config_id: str) -> bool:
        """Whether the instance runs under anything other than the active configuration."""
        return self.config_id is None or self.config_id != active_config_id


class InstancePage(BaseModel):
    """One page of instance records and the token for the next page, if any."""

    model_config = ConfigDict(frozen=True)

    records: tuple[InstanceRecord, ...] = ()
    next_token: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return bool(self.next_token)
