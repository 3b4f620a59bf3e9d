"""Application services."""

from asg_rollout.application.services.batch_planner import (
    BatchPlan,
    effective_batch_size,
    plan_batches,
)
from asg_rollout.application.services.freshness_guard import SKIP_NOTICE, is_fresh
from asg_rollout.application.services.group_inspector import GroupInspector
from asg_rollout.application.services.rollout_service import RolloutService
from asg_rollout.application.services.termination_orchestrator import TerminationOrchestrator

__all__: list[str] = [
    "SKIP_NOTICE",
    "BatchPlan",
    "GroupInspector",
    "RolloutService",
    "TerminationOrchestrator",
    "effective_batch_size",
    "is_fresh",
    "plan_batches",
]
