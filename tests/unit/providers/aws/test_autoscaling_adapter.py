"""Tests for the AWS Auto Scaling adapter."""

from unittest.mock import MagicMock, Mock, call

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from asg_rollout.config.loader import build_config
from asg_rollout.domain.base.exceptions import ProviderError
from asg_rollout.providers.aws.exceptions.aws_exceptions import AWSApiError
from asg_rollout.providers.aws.infrastructure.autoscaling_adapter import (
    MAX_INSTANCE_RECORDS,
    AWSAutoScalingAdapter,
)
from asg_rollout.providers.aws.infrastructure.aws_client import AWSClient


def _client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def _group_response(instance_ids):
    return {
        "AutoScalingGroups": [
            {
                "AutoScalingGroupName": "demo-asg",
                "LaunchConfigurationName": "lc-v1",
                "CreatedTime": "2024-01-01T00:00:00Z",
                "DesiredCapacity": len(instance_ids),
                "Instances": [{"InstanceId": instance_id} for instance_id in instance_ids],
            }
        ]
    }


def _instance(instance_id, launch_configuration, group="demo-asg"):
    return {
        "InstanceId": instance_id,
        "AutoScalingGroupName": group,
        "LaunchConfigurationName": launch_configuration,
    }


@pytest.fixture
def mock_aws_client():
    """AWSClient stand-in exposing a MagicMock Auto Scaling client."""
    aws_client = Mock(spec=AWSClient)
    aws_client.autoscaling_client = MagicMock()
    return aws_client


@pytest.fixture
def adapter(aws_mocks, logger) -> AWSAutoScalingAdapter:
    """Adapter wired to moto."""
    config = build_config({"asg_name": "demo-asg", "region": "us-east-1"})
    return AWSAutoScalingAdapter(AWSClient(config, logger), logger)


@pytest.mark.aws
class TestAWSAutoScalingAdapterMoto:
    """Adapter behaviour against moto."""

    def test_describe_groups(self, adapter, demo_group):
        groups = adapter.describe_groups(["demo-asg"])

        assert len(groups) == 1
        group = groups[0]
        assert group.name == "demo-asg"
        assert group.launch_configuration_name == "lc-v1"
        assert group.desired_capacity == 3
        assert group.instance_count == 3
        assert group.created_at.tzinfo is not None

    def test_describe_missing_group(self, adapter, demo_group):
        assert adapter.describe_groups(["missing-asg"]) == []

    def test_list_instances_keeps_only_target_group(self, adapter, demo_group):
        page = adapter.list_instances_page("demo-asg", MAX_INSTANCE_RECORDS)

        assert sorted(r.instance_id for r in page.records) == sorted(demo_group)
        assert all(r.config_id == "lc-v1" for r in page.records)
        assert page.has_more is False

    def test_list_instances_in_pages(self, adapter, demo_group):
        first = adapter.list_instances_page("demo-asg", 2)
        second = adapter.list_instances_page("demo-asg", 2, next_token=first.next_token)

        assert len(first.records) == 2
        assert first.has_more is True
        assert len(second.records) == 1
        assert second.has_more is False
        listed = [r.instance_id for r in first.records + second.records]
        assert sorted(listed) == sorted(demo_group)

    def test_terminate_keeps_desired_capacity(self, adapter, demo_group, autoscaling_client):
        """The group replaces the instance instead of shrinking."""
        adapter.terminate_instance(demo_group[0], decrement_desired_capacity=False)

        group = autoscaling_client.describe_auto_scaling_groups(
            AutoScalingGroupNames=["demo-asg"]
        )["AutoScalingGroups"][0]
        instance_ids = [i["InstanceId"] for i in group["Instances"]]
        assert group["DesiredCapacity"] == 3
        assert len(instance_ids) == 3
        assert demo_group[0] not in instance_ids


@pytest.mark.unit
class TestAWSAutoScalingAdapter:
    """Adapter request shaping and error translation."""

    def test_page_size_capped_at_api_maximum(self, mock_aws_client, logger):
        client = mock_aws_client.autoscaling_client
        members = [f"i-{n:02d}" for n in range(60)]
        client.describe_auto_scaling_groups.return_value = _group_response(members)
        client.describe_auto_scaling_instances.return_value = {"AutoScalingInstances": []}

        page = AWSAutoScalingAdapter(mock_aws_client, logger).list_instances_page("demo-asg", 500)

        client.describe_auto_scaling_instances.assert_called_once_with(
            InstanceIds=members[:50], MaxRecords=50
        )
        assert page.next_token == "50"

    def test_pages_walk_group_members(self, mock_aws_client, logger):
        client = mock_aws_client.autoscaling_client
        client.describe_auto_scaling_groups.return_value = _group_response(["i-1", "i-2", "i-3"])
        client.describe_auto_scaling_instances.side_effect = [
            {
                "AutoScalingInstances": [
                    {
                        "InstanceId": "i-1",
                        "AutoScalingGroupName": "demo-asg",
                        "LaunchConfigurationName": "lc-v1",
                    },
                    {"InstanceId": "i-2", "AutoScalingGroupName": "demo-asg"},
                ]
            },
            {"AutoScalingInstances": [_instance("i-3", "lc-v1")]},
        ]
        adapter = AWSAutoScalingAdapter(mock_aws_client, logger)

        first = adapter.list_instances_page("demo-asg", 2)
        second = adapter.list_instances_page("demo-asg", 2, next_token=first.next_token)

        assert [(r.instance_id, r.config_id) for r in first.records] == [
            ("i-1", "lc-v1"),
            ("i-2", None),
        ]
        assert first.next_token == "2"
        assert [r.instance_id for r in second.records] == ["i-3"]
        assert second.next_token is None
        client.describe_auto_scaling_groups.assert_called_once_with(AutoScalingGroupNames=["demo-asg"])
        assert client.describe_auto_scaling_instances.call_args_list == [
            call(InstanceIds=["i-1", "i-2"], MaxRecords=2),
            call(InstanceIds=["i-3"], MaxRecords=2),
        ]

    def test_members_moved_to_other_group_dropped(self, mock_aws_client, logger):
        client = mock_aws_client.autoscaling_client
        client.describe_auto_scaling_groups.return_value = _group_response(["i-1", "i-2"])
        client.describe_auto_scaling_instances.return_value = {
            "AutoScalingInstances": [
                _instance("i-1", "lc-v1"),
                _instance("i-2", "lc-v1", group="other-asg"),
            ]
        }

        page = AWSAutoScalingAdapter(mock_aws_client, logger).list_instances_page("demo-asg", 5)

        assert [r.instance_id for r in page.records] == ["i-1"]
        assert page.has_more is False

    def test_empty_group_lists_nothing(self, mock_aws_client, logger):
        """An empty InstanceIds filter would return every instance in the region."""
        client = mock_aws_client.autoscaling_client
        client.describe_auto_scaling_groups.return_value = _group_response([])

        page = AWSAutoScalingAdapter(mock_aws_client, logger).list_instances_page("demo-asg", 5)

        assert page.records == ()
        assert page.has_more is False
        client.describe_auto_scaling_instances.assert_not_called()

    def test_missing_group_lists_nothing(self, mock_aws_client, logger):
        client = mock_aws_client.autoscaling_client
        client.describe_auto_scaling_groups.return_value = {"AutoScalingGroups": []}

        page = AWSAutoScalingAdapter(mock_aws_client, logger).list_instances_page("demo-asg", 5)

        assert page.records == ()
        client.describe_auto_scaling_instances.assert_not_called()

    def test_invalid_page_token(self, mock_aws_client, logger):
        client = mock_aws_client.autoscaling_client
        client.describe_auto_scaling_groups.return_value = _group_response(["i-1"])

        with pytest.raises(ProviderError) as exc_info:
            AWSAutoScalingAdapter(mock_aws_client, logger).list_instances_page(
                "demo-asg", 2, next_token="token-1"
            )

        assert exc_info.value.error_code == "InvalidNextToken"
        client.describe_auto_scaling_instances.assert_not_called()

    def test_list_error_translated(self, mock_aws_client, logger):
        client = mock_aws_client.autoscaling_client
        client.describe_auto_scaling_groups.return_value = _group_response(["i-1", "i-2"])
        client.describe_auto_scaling_instances.side_effect = _client_error(
            "Throttling", "Rate exceeded", "DescribeAutoScalingInstances"
        )

        with pytest.raises(AWSApiError) as exc_info:
            AWSAutoScalingAdapter(mock_aws_client, logger).list_instances_page("demo-asg", 2)

        error = exc_info.value
        assert error.error_code == "Throttling"
        assert error.is_throttling_error is True
        assert error.operation == "DescribeAutoScalingInstances"
        assert str(error) == "DescribeAutoScalingInstances failed (Throttling): Rate exceeded"
        assert isinstance(error.__cause__, ClientError)

    def test_membership_error_translated(self, mock_aws_client, logger):
        client = mock_aws_client.autoscaling_client
        client.describe_auto_scaling_groups.side_effect = _client_error(
            "Throttling", "Rate exceeded", "DescribeAutoScalingGroups"
        )

        with pytest.raises(AWSApiError) as exc_info:
            AWSAutoScalingAdapter(mock_aws_client, logger).list_instances_page("demo-asg", 2)

        assert exc_info.value.operation == "DescribeAutoScalingGroups"
        client.describe_auto_scaling_instances.assert_not_called()

    def test_terminate_error_translated(self, mock_aws_client, logger):
        client = mock_aws_client.autoscaling_client
        client.terminate_instance_in_auto_scaling_group.side_effect = _client_error(
            "AccessDenied", "not allowed", "TerminateInstanceInAutoScalingGroup"
        )

        with pytest.raises(AWSApiError) as exc_info:
            AWSAutoScalingAdapter(mock_aws_client, logger).terminate_instance("i-1", False)

        assert exc_info.value.is_authorization_error is True
        assert exc_info.value.details["resource_id"] == "i-1"
        client.terminate_instance_in_auto_scaling_group.assert_called_once_with(
            InstanceId="i-1", ShouldDecrementDesiredCapacity=False
        )

    def test_connection_error_translated(self, mock_aws_client, logger):
        client = mock_aws_client.autoscaling_client
        client.describe_auto_scaling_groups.side_effect = EndpointConnectionError(
            endpoint_url="https://autoscaling.us-east-1.amazonaws.com"
        )

        with pytest.raises(AWSApiError) as exc_info:
            AWSAutoScalingAdapter(mock_aws_client, logger).describe_groups(["demo-asg"])

        assert exc_info.value.error_code == "EndpointConnectionError"
