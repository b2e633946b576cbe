"""Resolved configuration type for the Dental Vision client.

Configuration is resolved once, then flows through the library as an
immutable value with an origin map for auditing.
"""

from collections.abc import Mapping
from typing import Literal, NamedTuple

ConfigOrigin = Literal["programmatic", "env", "default"]
SourceMap = Mapping[str, ConfigOrigin]

SECRET_FIELDS = frozenset({"inference_token", "gemini_api_key"})

FIELD_ORDER = (
    "backend_url",
    "inference_url",
    "gemini_base_url",
    "gemini_model",
    "inference_token",
    "gemini_api_key",
    "request_timeout",
    "connect_timeout",
    "socket_timeout",
    "analysis_timeout",
    "confidence_threshold",
    "login_delay",
    "file_picker",
)


class ResolvedConfig(NamedTuple):
    """Configuration after resolution from all sources.

    Secrets are held as plain strings so they can be handed to HTTP headers,
    but never appear in ``str``/``repr`` or in the audit report.
    """

    backend_url: str
    inference_url: str
    gemini_base_url: str
    gemini_model: str
    inference_token: str | None
    gemini_api_key: str | None
    request_timeout: float
    connect_timeout: float
    socket_timeout: float
    analysis_timeout: float
    confidence_threshold: float
    login_delay: float
    file_picker: str

    # Audit metadata - tracks where each field value came from
    origin: SourceMap

    def _display(self, field: str) -> object:
        value = getattr(self, field)
        if field in SECRET_FIELDS:
            return "[REDACTED]" if value else None
        return value

    def __str__(self) -> str:
        """String representation with redacted secrets for safe logging."""
        body = ", ".join(f"{f}={self._display(f)!r}" for f in FIELD_ORDER)
        return f"ResolvedConfig({body}, origin={dict(self.origin)!r})"

    def __repr__(self) -> str:
        return self.__str__()

    def with_overrides(self, **overrides: object) -> "ResolvedConfig":
        """Create a new ResolvedConfig with programmatic overrides applied.

        Unknown fields are ignored.
        """
        new_values = self._asdict()
        new_origin = dict(self.origin)

        for field, value in overrides.items():
            if field in FIELD_ORDER:
                new_values[field] = value
                new_origin[field] = "programmatic"

        new_values["origin"] = new_origin
        return ResolvedConfig(**new_values)

    def audit(self) -> str:
        """Redacted, human-readable report of where each value came from."""
        lines = []
        for field in FIELD_ORDER:
            origin = self.origin.get(field, "default")
            lines.append(f"{field}: {self._display(field)!r} ({origin})")
        return "\n".join(lines)
