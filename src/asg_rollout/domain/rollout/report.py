"""Summary of a single rollout pass."""

from dataclasses import dataclass, field
from typing import Optional

from asg_rollout.domain.rollout.outcomes import (
    InstanceTerminated,
    PageFetchFailed,
    TerminationFailed,
    TerminationOutcome,
)


@dataclass
class RolloutReport:
    """What happened during one apply.

    There is no partial-success status: a pass succeeded unless a page could
    not be fetched. Termination failures only add warnings.
    """

    asg_name: str
    skipped: bool = False
    batch_size: Optional[int] = None
    terminated: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    fatal_error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.fatal_error is None

    def record(self, outcome: TerminationOutcome) -> None:
        """Fold one outcome into the report."""
        if isinstance(outcome, InstanceTerminated):
            self.terminated.append(outcome.instance_id)
        elif isinstance(outcome, TerminationFailed):
            self.warnings.append(outcome.message)
        elif isinstance(outcome, PageFetchFailed):
            self.warnings.append(outcome.message)
            self.fatal_error = outcome.cause
