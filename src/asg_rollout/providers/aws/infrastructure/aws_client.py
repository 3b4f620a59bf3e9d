"""AWS client wrapper with additional functionality."""

from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ProfileNotFound

from asg_rollout.config.schemas.rollout_schema import RolloutConfig
from asg_rollout.domain.base.ports import LoggingPort
from asg_rollout.providers.aws.exceptions.aws_exceptions import AWSConfigurationError

DEFAULT_MAX_RETRIES = 3
DEFAULT_CONNECT_TIMEOUT = 5
DEFAULT_READ_TIMEOUT = 10


class AWSClient:
    """Wrapper for AWS service clients built from rollout settings.

    Region and profile fall back to the environment and shared configuration
    when unset. Static credentials, when given, take precedence over both.
    """

    def __init__(
        self,
        config: RolloutConfig,
        logger: LoggingPort,
        max_retries: int = DEFAULT_MAX_RETRIES,
        connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
        read_timeout: int = DEFAULT_READ_TIMEOUT,
    ) -> None:
        """
        Initialize AWS client wrapper.

        Args:
            config: Rollout configuration carrying region, profile and credentials
            logger: Logger for logging messages
            max_retries: Maximum attempts botocore makes per API call
            connect_timeout: Connection timeout in seconds
            read_timeout: Read timeout in seconds
        """
        self._logger = logger
        self.region_name = config.region
        self.profile_name = config.profile

        # Configure retry settings
        self.boto_config = Config(
            region_name=self.region_name,
            retries={"max_attempts": max_retries, "mode": "adaptive"},
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        )

        session_kwargs: dict[str, Any] = {}
        if self.region_name:
            session_kwargs["region_name"] = self.region_name
        if self.profile_name:
            session_kwargs["profile_name"] = self.profile_name
        if config.has_static_credentials:
            session_kwargs["aws_access_key_id"] = config.access_key
            session_kwargs["aws_secret_access_key"] = config.secret_key
            session_kwargs["aws_session_token"] = config.token

        try:
            self.session = boto3.Session(**session_kwargs)
        except ProfileNotFound as e:
            raise AWSConfigurationError(
                f"AWS profile not found: {self.profile_name}",
                error_code="ProfileNotFound",
            ) from e
        except BotoCoreError as e:
            raise AWSConfigurationError(f"AWS session initialization failed: {e}") from e

        self._autoscaling_client: Optional[Any] = None

        self._logger.debug(
            "AWS client initialized with region: %s, profile: %s, static credentials: %s, "
            "retries: %d, timeouts: connect=%ds, read=%ds",
            self.session.region_name or "default",
            self.profile_name or "default",
            config.has_static_credentials,
            max_retries,
            connect_timeout,
            read_timeout,
        )

    @property
    def autoscaling_client(self):
        """Lazy initialization of Auto Scaling client."""
        if self._autoscaling_client is None:
            self._logger.debug("Initializing Auto Scaling client on first use")
            try:
                self._autoscaling_client = self.session.client(
                    "autoscaling", config=self.boto_config
                )
            except BotoCoreError as e:
                raise AWSConfigurationError(f"Auto Scaling client creation failed: {e}") from e
        return self._autoscaling_client
