"""Domain port for the cloud Auto Scaling control plane."""

from abc import ABC, abstractmethod
from typing import Optional

from asg_rollout.domain.group.models import GroupDescription, InstancePage


class AutoScalingPort(ABC):
    """Narrow control-plane contract consumed by the rollout.

    Implementations raise ``ProviderError`` for any failed call.
    """

    @abstractmethod
    def describe_groups(self, group_names: list[str]) -> list[GroupDescription]:
        """Describe the named groups. Missing groups are simply absent."""

    @abstractmethod
    def list_instances_page(
        self, group_name: str, page_size: int, next_token: Optional[str] = None
    ) -> InstancePage:
        """Fetch up to ``page_size`` instance records of a group."""

    @abstractmethod
    def terminate_instance(self, instance_id: str, decrement_desired_capacity: bool) -> None:
        """Terminate a single group instance."""
