"""AWS-specific exceptions and botocore error translation."""

from typing import Optional

from botocore.exceptions import BotoCoreError, ClientError

from asg_rollout.domain.base.exceptions import PreconditionError, ProviderError

AUTHORIZATION_ERROR_CODES = frozenset(
    {"UnauthorizedOperation", "InvalidClientTokenId", "AccessDenied", "AccessDeniedException"}
)
THROTTLING_ERROR_CODES = frozenset({"Throttling", "ThrottlingException", "RequestLimitExceeded"})


class AWSConfigurationError(PreconditionError):
    """Raised when an AWS session cannot be built from the given settings."""


class AWSApiError(ProviderError):
    """A failed AWS API call."""

    @property
    def is_authorization_error(self) -> bool:
        return self.error_code in AUTHORIZATION_ERROR_CODES

    @property
    def is_throttling_error(self) -> bool:
        return self.error_code in THROTTLING_ERROR_CODES


def translate_aws_error(
    error: Exception, operation: str, resource_id: Optional[str] = None
) -> AWSApiError:
    """
    Translate a botocore failure into an AWSApiError.

    Args:
        error: The ClientError or BotoCoreError raised by boto3
        operation: AWS API operation name, e.g. "DescribeAutoScalingGroups"
        resource_id: Group name or instance ID the call was about

    Returns:
        AWSApiError carrying the AWS error code when there is one
    """
    details = {"resource_id": resource_id} if resource_id else {}

    if isinstance(error, ClientError):
        error_code = error.response.get("Error", {}).get("Code", "Unknown")
        error_message = error.response.get("Error", {}).get("Message", str(error))
        return AWSApiError(
            f"{operation} failed ({error_code}): {error_message}",
            operation=operation,
            error_code=error_code,
            details=details,
        )

    if isinstance(error, BotoCoreError):
        return AWSApiError(
            f"{operation} failed: {error}",
            operation=operation,
            error_code=error.__class__.__name__,
            details=details,
        )

    return AWSApiError(f"{operation} failed: {error}", operation=operation, details=details)
