"""Domain ports."""

from asg_rollout.domain.base.ports.autoscaling_port import AutoScalingPort
from asg_rollout.domain.base.ports.logging_port import LoggingPort
from asg_rollout.domain.base.ports.output_port import OutputPort

__all__: list[str] = ["AutoScalingPort", "LoggingPort", "OutputPort"]
