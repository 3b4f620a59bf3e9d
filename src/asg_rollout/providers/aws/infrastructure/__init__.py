"""AWS provider infrastructure."""

from asg_rollout.providers.aws.infrastructure.autoscaling_adapter import AWSAutoScalingAdapter
from asg_rollout.providers.aws.infrastructure.aws_client import AWSClient

__all__: list[str] = ["AWSAutoScalingAdapter", "AWSClient"]
