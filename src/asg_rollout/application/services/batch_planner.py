"""Batch planning: how many instances to process per page."""

from dataclasses import dataclass


def effective_batch_size(requested: int, min_in_service: int, desired_capacity: int) -> int:
    """
    Compute the page size used to enumerate and replace instances.

    A request of 0 or less, or larger than the desired capacity, means the
    whole desired capacity. Otherwise the minimum-in-service floor is taken
    off the request, never going below 1 so the rollout always progresses.

    This only bounds the page size. It does not check how many instances are
    actually in service while replacements launch.

    Args:
        requested: Configured batch size
        min_in_service: Configured minimum number of instances in service
        desired_capacity: The group's desired capacity

    Returns:
        Effective batch size, at least 1
    """
    if requested <= 0 or requested > desired_capacity:
        return max(desired_capacity, 1)

    available = requested - min_in_service
    if available < 1:
        return 1
    return available


@dataclass(frozen=True)
class BatchPlan:
    """Planning inputs and the resulting batch size."""

    requested: int
    min_in_service: int
    desired_capacity: int
    batch_size: int

    @property
    def uses_desired_capacity(self) -> bool:
        return self.requested <= 0 or self.requested > self.desired_capacity


def plan_batches(requested: int, min_in_service: int, desired_capacity: int) -> BatchPlan:
    """Build a BatchPlan without touching the configuration it came from."""
    return BatchPlan(
        requested=requested,
        min_in_service=min_in_service,
        desired_capacity=desired_capacity,
        batch_size=effective_batch_size(requested, min_in_service, desired_capacity),
    )
