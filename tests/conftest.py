"""Global test configuration and fixtures."""

import os
import sys
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import Mock

import boto3
import pytest
from moto import mock_aws

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from asg_rollout.domain.base.ports import LoggingPort, OutputPort  # noqa: E402
from asg_rollout.domain.group.models import GroupDescription, GroupSnapshot  # noqa: E402

EXAMPLE_AMI_ID = "ami-12c6146b"
NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables."""
    os.environ.update(
        {
            "AWS_DEFAULT_REGION": "us-east-1",
            "AWS_ACCESS_KEY_ID": "testing",
            "AWS_SECRET_ACCESS_KEY": "testing",
            "AWS_SECURITY_TOKEN": "testing",
            "AWS_SESSION_TOKEN": "testing",
            "ASG_ROLLOUT_CONSOLE_ENABLED": "true",
        }
    )


@pytest.fixture
def logger() -> Mock:
    """Mock logger."""
    return Mock(spec=LoggingPort)


@pytest.fixture
def output() -> Mock:
    """Mock operator output sink."""
    return Mock(spec=OutputPort)


@pytest.fixture
def snapshot() -> GroupSnapshot:
    """Snapshot of an old group whose active launch configuration is lc-v2."""
    return GroupSnapshot(
        name="demo-asg",
        active_config_id="lc-v2",
        created_at=NOW - timedelta(days=1),
        desired_capacity=10,
    )


@pytest.fixture
def group_description() -> GroupDescription:
    """Description of demo-asg as returned by the control plane."""
    return GroupDescription(
        name="demo-asg",
        launch_configuration_name="lc-v2",
        created_at=NOW - timedelta(days=1),
        desired_capacity=10,
        min_size=0,
        max_size=20,
        instance_count=10,
    )


@pytest.fixture
def aws_mocks() -> Generator[None, None, None]:
    """Set up AWS service mocks."""
    with mock_aws():
        yield


@pytest.fixture
def autoscaling_client(aws_mocks):
    """Create a mocked Auto Scaling client."""
    return boto3.client("autoscaling", region_name="us-east-1")


def create_group(autoscaling_client, name: str, launch_configuration: str, capacity: int) -> None:
    """Create a launch configuration (if needed) and a group running on it."""
    existing = autoscaling_client.describe_launch_configurations(
        LaunchConfigurationNames=[launch_configuration]
    )["LaunchConfigurations"]
    if not existing:
        autoscaling_client.create_launch_configuration(
            LaunchConfigurationName=launch_configuration,
            ImageId=EXAMPLE_AMI_ID,
            InstanceType="t2.micro",
        )
    autoscaling_client.create_auto_scaling_group(
        AutoScalingGroupName=name,
        LaunchConfigurationName=launch_configuration,
        MinSize=0,
        MaxSize=capacity * 2,
        DesiredCapacity=capacity,
        AvailabilityZones=["us-east-1a"],
    )


@pytest.fixture
def demo_group(autoscaling_client) -> list[str]:
    """demo-asg with three instances on lc-v1, next to other-asg with two.

    Returns the IDs of the demo-asg instances.
    """
    create_group(autoscaling_client, "demo-asg", "lc-v1", 3)
    create_group(autoscaling_client, "other-asg", "lc-v1", 2)
    group = autoscaling_client.describe_auto_scaling_groups(AutoScalingGroupNames=["demo-asg"])
    return [i["InstanceId"] for i in group["AutoScalingGroups"][0]["Instances"]]
