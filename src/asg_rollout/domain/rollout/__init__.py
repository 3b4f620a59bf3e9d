"""Rollout domain: outcomes and reports."""

from asg_rollout.domain.rollout.outcomes import (
    InstanceTerminated,
    PageFetchFailed,
    TerminationFailed,
    TerminationOutcome,
)
from asg_rollout.domain.rollout.report import RolloutReport

__all__: list[str] = [
    "InstanceTerminated",
    "PageFetchFailed",
    "RolloutReport",
    "TerminationFailed",
    "TerminationOutcome",
]
