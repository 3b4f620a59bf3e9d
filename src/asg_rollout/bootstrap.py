"""Wire the rollout service to AWS, the console and the logger."""

from typing import Optional

from asg_rollout.application.services.rollout_service import RolloutService
from asg_rollout.config.schemas.rollout_schema import RolloutConfig
from asg_rollout.domain.base.ports import LoggingPort, OutputPort
from asg_rollout.domain.rollout.report import RolloutReport
from asg_rollout.infrastructure.adapters.console_output_adapter import ConsoleOutputAdapter
from asg_rollout.infrastructure.adapters.logging_adapter import LoggingAdapter
from asg_rollout.providers.aws.infrastructure.autoscaling_adapter import AWSAutoScalingAdapter
from asg_rollout.providers.aws.infrastructure.aws_client import AWSClient


def create_rollout_service(
    config: RolloutConfig,
    output: Optional[OutputPort] = None,
    logger: Optional[LoggingPort] = None,
) -> RolloutService:
    """Build a RolloutService talking to AWS with the config's region and credentials."""
    logger = logger or LoggingAdapter("rollout")
    aws_client = AWSClient(config, logger)
    autoscaling = AWSAutoScalingAdapter(aws_client, logger)
    return RolloutService(autoscaling, output or ConsoleOutputAdapter(), logger)


def apply(config: RolloutConfig, output: Optional[OutputPort] = None) -> RolloutReport:
    """Run one rollout pass against AWS."""
    return create_rollout_service(config, output=output).apply(config)
