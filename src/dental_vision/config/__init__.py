"""Configuration for the Dental Vision client.

Values resolve once per call to ``resolve_config()`` with the precedence
Programmatic > Environment (``DENTAL_VISION_*``) > Defaults, and are then
passed around as an immutable ``ResolvedConfig``.
"""

from .api import resolve_config
from .schema import DentalVisionSettings
from .scope import config_scope
from .types import ResolvedConfig

__all__ = [
    "DentalVisionSettings",
    "ResolvedConfig",
    "config_scope",
    "resolve_config",
]
