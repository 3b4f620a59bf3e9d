"""AWS Auto Scaling adapter.

Implements the AutoScalingPort on top of the boto3 Auto Scaling client:

    - DescribeAutoScalingGroups for the group snapshot and its member list
    - DescribeAutoScalingInstances, one page of members per call, for enumeration
    - TerminateInstanceInAutoScalingGroup for replacements

Note:
    DescribeAutoScalingInstances has no group filter, so each call is scoped
    with the InstanceIds of the group's members. Membership is read once per
    pass, on the first page; instances launched later run the active launch
    configuration and are not listed. Members that left the group in the
    meantime are dropped from the page.
"""

from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from asg_rollout.domain.base.exceptions import ProviderError
from asg_rollout.domain.base.ports import AutoScalingPort, LoggingPort
from asg_rollout.domain.group.models import GroupDescription, InstancePage, InstanceRecord
from asg_rollout.providers.aws.exceptions.aws_exceptions import translate_aws_error
from asg_rollout.providers.aws.infrastructure.aws_client import AWSClient

# API maximum for DescribeAutoScalingInstances MaxRecords
MAX_INSTANCE_RECORDS = 50


class AWSAutoScalingAdapter(AutoScalingPort):
    """AutoScalingPort backed by boto3."""

    def __init__(self, aws_client: AWSClient, logger: LoggingPort) -> None:
        self.aws_client = aws_client
        self._logger = logger
        self._members: dict[str, tuple[str, ...]] = {}

    @property
    def _client(self):
        return self.aws_client.autoscaling_client

    def describe_groups(self, group_names: list[str]) -> list[GroupDescription]:
        try:
            response = self._client.describe_auto_scaling_groups(
                AutoScalingGroupNames=list(group_names)
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_aws_error(
                e, "DescribeAutoScalingGroups", ",".join(group_names)
            ) from e

        groups = [
            GroupDescription.from_describe_auto_scaling_group(asg_data)
            for asg_data in response.get("AutoScalingGroups", [])
        ]
        self._logger.debug("Described %d of %d Auto Scaling Groups", len(groups), len(group_names))
        return groups

    def list_instances_page(
        self, group_name: str, page_size: int, next_token: Optional[str] = None
    ) -> InstancePage:
        """
        List one page of the group's instances.

        The first page (no token) records the group's membership; later pages
        walk that list. The token is the offset of the next page.

        Args:
            group_name: Auto Scaling Group to enumerate
            page_size: Records per page, capped at MAX_INSTANCE_RECORDS
            next_token: Token from the previous page, None for the first page

        Returns:
            The page, with a token when more members remain
        """
        max_records = max(1, min(page_size, MAX_INSTANCE_RECORDS))
        if max_records != page_size:
            self._logger.debug(
                "Page size %d adjusted to %d for DescribeAutoScalingInstances",
                page_size,
                max_records,
            )

        if next_token is None or group_name not in self._members:
            self._members[group_name] = self._describe_members(group_name)
        members = self._members[group_name]
        offset = self._parse_token(next_token, group_name)
        chunk = members[offset : offset + max_records]
        if not chunk:
            # an empty InstanceIds list would list the whole region
            return InstancePage()

        try:
            response = self._client.describe_auto_scaling_instances(
                InstanceIds=list(chunk), MaxRecords=max_records
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_aws_error(e, "DescribeAutoScalingInstances", group_name) from e

        records = tuple(
            InstanceRecord(
                instance_id=instance["InstanceId"],
                config_id=instance.get("LaunchConfigurationName") or None,
            )
            for instance in response.get("AutoScalingInstances", [])
            if instance.get("AutoScalingGroupName") == group_name
        )
        end = offset + len(chunk)
        return InstancePage(records=records, next_token=str(end) if end < len(members) else None)

    def _describe_members(self, group_name: str) -> tuple[str, ...]:
        groups = [group for group in self.describe_groups([group_name]) if group.name == group_name]
        if not groups:
            self._logger.warning("AutoScalingGroup %s has no members to list", group_name)
            return ()
        self._logger.debug(
            "Listing %d member instances of %s", len(groups[0].instance_ids), group_name
        )
        return groups[0].instance_ids

    @staticmethod
    def _parse_token(next_token: Optional[str], group_name: str) -> int:
        if next_token is None:
            return 0
        if not next_token.isdigit():
            raise ProviderError(
                f"Invalid page token {next_token!r} for {group_name}",
                operation="DescribeAutoScalingInstances",
                error_code="InvalidNextToken",
            )
        return int(next_token)

    def terminate_instance(self, instance_id: str, decrement_desired_capacity: bool) -> None:
        try:
            self._client.terminate_instance_in_auto_scaling_group(
                InstanceId=instance_id,
                ShouldDecrementDesiredCapacity=decrement_desired_capacity,
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_aws_error(e, "TerminateInstanceInAutoScalingGroup", instance_id) from e
