"""Termination outcomes streamed by the orchestrator."""

from dataclasses import dataclass
from typing import ClassVar


class TerminationOutcome:
    """Base class for everything a termination pass emits."""

    failed: ClassVar[bool] = False
    fatal: ClassVar[bool] = False


@dataclass(frozen=True)
class InstanceTerminated(TerminationOutcome):
    """A stale instance was terminated."""

    instance_id: str


@dataclass(frozen=True)
class TerminationFailed(TerminationOutcome):
    """A single termination failed; the pass continued."""

    failed: ClassVar[bool] = True

    instance_id: str
    cause: Exception

    @property
    def message(self) -> str:
        return str(self.cause)


@dataclass(frozen=True)
class PageFetchFailed(TerminationOutcome):
    """Listing a page failed; this is the last outcome of the pass."""

    failed: ClassVar[bool] = True
    fatal: ClassVar[bool] = True

    page_number: int
    cause: Exception

    @property
    def message(self) -> str:
        return str(self.cause)
