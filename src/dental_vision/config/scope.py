"""Configuration scoping for entry-time overrides."""

from collections.abc import Generator
from contextlib import contextmanager
import contextvars

from .types import ResolvedConfig

_ambient_resolved_config: contextvars.ContextVar[ResolvedConfig] = (
    contextvars.ContextVar("dental_vision_resolved_config")
)


def get_ambient_resolved_config() -> ResolvedConfig | None:
    """Return the configuration set by an enclosing ``config_scope``, if any."""
    try:
        return _ambient_resolved_config.get()
    except LookupError:
        return None


@contextmanager
def config_scope(config: ResolvedConfig) -> Generator[None]:
    """Temporarily use a different resolved configuration.

    Inside the block ``resolve_config()`` returns ``config`` (with any
    programmatic overrides applied on top). The scope is task-local, so
    concurrent asyncio tasks do not see each other's scopes.

    Example:
        cfg = resolve_config({"login_delay": 0})
        with config_scope(cfg):
            use_case = LoginUseCase()
    """
    token = _ambient_resolved_config.set(config)
    try:
        yield
    finally:
        _ambient_resolved_config.reset(token)
