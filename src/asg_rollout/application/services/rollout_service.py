"""Rollout service: one apply of the rolling replacement.

Inspect the group once, skip it if it is new, plan the batch size, then
stream the termination pass and relay every warning to the operator.
"""

import time
from datetime import datetime, timezone
from typing import Callable, Optional

from asg_rollout.application.services.batch_planner import plan_batches
from asg_rollout.application.services.freshness_guard import SKIP_NOTICE, is_fresh
from asg_rollout.application.services.group_inspector import GroupInspector
from asg_rollout.application.services.termination_orchestrator import TerminationOrchestrator
from asg_rollout.config.duration import format_duration
from asg_rollout.config.schemas.rollout_schema import RolloutConfig
from asg_rollout.domain.base.exceptions import InstancePageFetchError
from asg_rollout.domain.base.ports import AutoScalingPort, LoggingPort, OutputPort
from asg_rollout.domain.rollout.report import RolloutReport


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RolloutService:
    """Runs a rollout pass for a validated RolloutConfig."""

    def __init__(
        self,
        autoscaling: AutoScalingPort,
        output: OutputPort,
        logger: LoggingPort,
        clock: Callable[[], datetime] = _utcnow,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._autoscaling = autoscaling
        self._output = output
        self._logger = logger
        self._clock = clock
        self._sleep = sleep
        self._inspector = GroupInspector(autoscaling, logger)
        self._orchestrator: Optional[TerminationOrchestrator] = None

    def apply(self, config: RolloutConfig) -> RolloutReport:
        """
        Replace the stale instances of the configured group.

        Args:
            config: Validated rollout configuration

        Returns:
            Report of the pass; ``skipped`` is set when the group was too new

        Raises:
            PreconditionError: If the group cannot be inspected
            InstancePageFetchError: If instance enumeration fails mid-pass;
                the partial report is attached as ``report``
        """
        snapshot = self._inspector.inspect(config.asg_name)
        report = RolloutReport(asg_name=snapshot.name)

        if is_fresh(snapshot, self._clock(), config.asg_new_time):
            self._logger.info(
                "AutoScalingGroup %s is younger than %s, skipping",
                snapshot.name,
                format_duration(config.asg_new_time),
            )
            self._output.output(SKIP_NOTICE)
            report.skipped = True
            return report

        plan = plan_batches(
            config.batch_size, config.min_instances_in_service, snapshot.desired_capacity
        )
        report.batch_size = plan.batch_size
        self._logger.debug(
            "Batch size %d from requested %d, min in service %d, desired capacity %d",
            plan.batch_size,
            plan.requested,
            plan.min_in_service,
            plan.desired_capacity,
        )

        self._orchestrator = TerminationOrchestrator(self._autoscaling, self._logger, sleep=self._sleep)
        for outcome in self._orchestrator.stream(snapshot, plan.batch_size, config.pause_time):
            report.record(outcome)
            if outcome.failed:
                self._output.output(f"WARNING: {outcome.message}")

        self._logger.info(
            "Rollout of %s finished: %d terminated, %d warnings",
            snapshot.name,
            len(report.terminated),
            len(report.warnings),
        )

        if isinstance(report.fatal_error, InstancePageFetchError):
            report.fatal_error.report = report
            raise report.fatal_error
        return report

    def cancel(self) -> None:
        """Ask a running pass to stop at the next page boundary."""
        if self._orchestrator is not None:
            self._orchestrator.cancel()
