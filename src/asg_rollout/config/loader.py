"""Load rollout configuration from files, environment and explicit values."""

import os
from typing import Any, Optional

from dynaconf import Dynaconf
from pydantic import ValidationError

from asg_rollout.config.schemas.rollout_schema import RolloutConfig
from asg_rollout.domain.base.exceptions import ConfigValidationError

ENVVAR_PREFIX = "ASG_ROLLOUT"

# dynaconf casts values like "20240601" or "30" to numbers
_STRING_FIELDS = frozenset(
    {"asg_name", "region", "access_key", "secret_key", "token", "profile", "pause_time", "asg_new_time"}
)


def build_config(data: dict[str, Any]) -> RolloutConfig:
    """
    Validate raw settings into a RolloutConfig.

    Args:
        data: Raw settings keyed by RolloutConfig field name

    Returns:
        Validated, immutable configuration

    Raises:
        ConfigValidationError: If a field is missing or malformed
    """
    try:
        return RolloutConfig(**data)
    except ValidationError as e:
        errors = {
            ".".join(str(part) for part in err["loc"]) or "config": err["msg"]
            for err in e.errors()
        }
        detail = "; ".join(f"{field}: {message}" for field, message in errors.items())
        raise ConfigValidationError(f"Invalid rollout configuration - {detail}", errors) from e


def load_settings(config_file: Optional[str] = None) -> Dynaconf:
    """Read settings from an optional file and ``ASG_ROLLOUT_*`` environment variables."""
    settings_files = []
    if config_file:
        if not os.path.isfile(config_file):
            raise ConfigValidationError(
                f"Configuration file not found: {config_file}", {"config_file": "not found"}
            )
        settings_files.append(config_file)

    return Dynaconf(
        settings_files=settings_files,
        envvar_prefix=ENVVAR_PREFIX,
        environments=False,
        load_dotenv=False,
    )


def load_config(config_file: Optional[str] = None, **overrides: Any) -> RolloutConfig:
    """
    Load and validate the rollout configuration.

    Precedence, lowest first: configuration file, environment variables,
    explicit overrides. Overrides set to None are ignored.

    Args:
        config_file: Optional YAML, TOML or JSON settings file
        **overrides: Field values, typically from command-line flags

    Returns:
        Validated RolloutConfig
    """
    settings = load_settings(config_file)

    data: dict[str, Any] = {}
    for name in RolloutConfig.model_fields:
        value = settings.get(name)
        if value is None:
            continue
        if name in _STRING_FIELDS and not isinstance(value, str):
            value = str(value)
        data[name] = value

    data.update({key: value for key, value in overrides.items() if value is not None})
    return build_config(data)
