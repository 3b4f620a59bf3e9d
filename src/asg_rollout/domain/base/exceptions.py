"""Domain exceptions for rollout operations."""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from asg_rollout.domain.rollout.report import RolloutReport


class RolloutError(Exception):
    """Base exception for all rollout errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class ConfigValidationError(RolloutError):
    """Raised when rollout configuration is missing or malformed."""

    def __init__(self, message: str, errors: Optional[dict[str, str]] = None) -> None:
        super().__init__(message, details={"errors": errors or {}})
        self.errors = errors or {}


class PreconditionError(RolloutError):
    """Raised when the group cannot be inspected before any termination."""


class GroupNotFoundError(PreconditionError):
    """Raised when the requested Auto Scaling Group does not exist."""

    def __init__(self, group_name: str) -> None:
        super().__init__(
            f"AutoScalingGroup {group_name} not found",
            error_code="GroupNotFound",
            details={"group_name": group_name},
        )
        self.group_name = group_name


class ProviderError(RolloutError):
    """Raised when a cloud control-plane call fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        details = dict(details or {})
        if operation:
            details.setdefault("operation", operation)
        super().__init__(message, error_code=error_code, details=details)
        self.operation = operation


class InstancePageFetchError(RolloutError):
    """Raised when a page of group instances cannot be fetched.

    Fatal to the remaining pass. Instances terminated on earlier pages stay
    terminated. ``report`` is attached by the rollout service before the
    error is raised to its caller.
    """

    def __init__(self, group_name: str, page_number: int, cause: Exception) -> None:
        super().__init__(
            f"failed to list instances of {group_name} (page {page_number}): {cause}",
            error_code=getattr(cause, "error_code", None),
            details={"group_name": group_name, "page_number": page_number},
        )
        self.group_name = group_name
        self.page_number = page_number
        self.cause = cause
        self.report: Optional["RolloutReport"] = None


class InstanceTerminationError(RolloutError):
    """Raised when a single instance cannot be terminated. Never fatal."""

    def __init__(self, instance_id: str, cause: Exception) -> None:
        super().__init__(
            f"failed to terminate instance {instance_id}: {cause}",
            error_code=getattr(cause, "error_code", None),
            details={"instance_id": instance_id},
        )
        self.instance_id = instance_id
        self.cause = cause
