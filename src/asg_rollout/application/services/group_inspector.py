"""Group inspection: capture the group's active launch configuration once."""

from asg_rollout.domain.base.exceptions import GroupNotFoundError, PreconditionError, ProviderError
from asg_rollout.domain.base.ports import AutoScalingPort, LoggingPort
from asg_rollout.domain.group.models import GroupSnapshot


class GroupInspector:
    """Builds the GroupSnapshot a rollout runs against."""

    def __init__(self, autoscaling: AutoScalingPort, logger: LoggingPort) -> None:
        self._autoscaling = autoscaling
        self._logger = logger

    def inspect(self, group_name: str) -> GroupSnapshot:
        """
        Describe the group and capture its active launch configuration.

        Exactly one describe call is made.

        Args:
            group_name: Name of the Auto Scaling Group

        Returns:
            Immutable snapshot of the group

        Raises:
            GroupNotFoundError: If the group does not exist
            PreconditionError: If the describe call fails or the group has no
                launch configuration to compare instances against
        """
        try:
            groups = self._autoscaling.describe_groups([group_name])
        except ProviderError as e:
            raise PreconditionError(
                f"Unable to describe AutoScalingGroup {group_name}: {e}",
                error_code=e.error_code,
                details={"group_name": group_name},
            ) from e

        group = next((g for g in groups if g.name == group_name), None)
        if group is None:
            raise GroupNotFoundError(group_name)

        if not group.launch_configuration_name:
            raise PreconditionError(
                f"AutoScalingGroup {group_name} has no launch configuration"
                + (f" (launch template {group.launch_template_id})" if group.launch_template_id else ""),
                error_code="NoLaunchConfiguration",
                details={"group_name": group_name},
            )

        snapshot = GroupSnapshot(
            name=group.name,
            active_config_id=group.launch_configuration_name,
            created_at=group.created_at,
            desired_capacity=group.desired_capacity,
        )
        self._logger.info(
            "Inspected AutoScalingGroup %s: active launch configuration %s, desired capacity %d",
            snapshot.name,
            snapshot.active_config_id,
            snapshot.desired_capacity,
        )
        return snapshot
