"""Freshness guard: leave groups that are still being provisioned alone."""

from datetime import datetime, timedelta

from asg_rollout.domain.group.models import GroupSnapshot

SKIP_NOTICE = "AutoScalingGroup appears to be new, skipping provisioning"


def is_fresh(snapshot: GroupSnapshot, now: datetime, threshold: timedelta) -> bool:
    """True when the group is younger than ``threshold``."""
    # simple, and possibly unreliable, test
    return snapshot.age(now) < threshold
