"""Public API for the configuration system.

Precedence: Programmatic > Environment (including an explicit ``.env`` file)
> Defaults.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import SecretStr
from pydantic import ValidationError as PydanticValidationError

from dental_vision.exceptions import ConfigurationError

from .schema import DentalVisionSettings
from .scope import get_ambient_resolved_config
from .types import FIELD_ORDER, ConfigOrigin, ResolvedConfig

log = logging.getLogger(__name__)

ENV_PREFIX = "DENTAL_VISION_"


def _env_keys(use_env_file: str | Path | None) -> set[str]:
    """Field names that are set in the environment or the given .env file."""
    names = {
        key[len(ENV_PREFIX) :].lower()
        for key in os.environ
        if key.upper().startswith(ENV_PREFIX)
    }
    if use_env_file:
        env_path = Path(use_env_file)
        if not env_path.exists():
            raise ConfigurationError(f"Environment file not found: {env_path}")
        names.update(
            key[len(ENV_PREFIX) :].lower()
            for key in dotenv_values(env_path)
            if key.upper().startswith(ENV_PREFIX)
        )
    return names & set(FIELD_ORDER)


def _plain(value: Any) -> Any:
    if isinstance(value, SecretStr):
        return value.get_secret_value() or None
    return value


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    use_env_file: str | Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Args:
        programmatic: Overrides with the highest precedence. Unknown keys
            are ignored.
        use_env_file: Optional path to a ``.env`` file read alongside the
            process environment.

    Returns:
        ResolvedConfig with merged values and an origin map for auditing.

    Raises:
        ConfigurationError: If a value fails validation or the .env file is
            missing.

    Example:
        config = resolve_config({"login_delay": 0})
    """
    ambient = get_ambient_resolved_config()
    if ambient is not None:
        return ambient.with_overrides(**programmatic) if programmatic else ambient

    overrides = {k: v for k, v in (programmatic or {}).items() if k in FIELD_ORDER}
    env_fields = _env_keys(use_env_file)

    try:
        settings = DentalVisionSettings(_env_file=use_env_file, **overrides)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    origin: dict[str, ConfigOrigin] = {}
    for field in FIELD_ORDER:
        if field in overrides:
            origin[field] = "programmatic"
        elif field in env_fields:
            origin[field] = "env"
        else:
            origin[field] = "default"

    values = {field: _plain(getattr(settings, field)) for field in FIELD_ORDER}
    resolved = ResolvedConfig(**values, origin=origin)
    log.debug("Resolved configuration: %s", resolved)
    return resolved
