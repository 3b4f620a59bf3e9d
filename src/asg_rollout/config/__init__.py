"""Rollout configuration."""

from asg_rollout.config.duration import format_duration, parse_duration
from asg_rollout.config.loader import build_config, load_config
from asg_rollout.config.schemas.rollout_schema import RolloutConfig

__all__: list[str] = [
    "RolloutConfig",
    "build_config",
    "format_duration",
    "load_config",
    "parse_duration",
]
