"""Auto Scaling Group domain."""

from asg_rollout.domain.group.models import (
    GroupDescription,
    GroupSnapshot,
    InstancePage,
    InstanceRecord,
)

__all__: list[str] = ["GroupDescription", "GroupSnapshot", "InstancePage", "InstanceRecord"]
