"""Core result types shared across the client core.

Component boundaries (the HTTP client, the insight client, the pipeline)
hand failures back as data instead of raising, so callers branch on the
variant with ``isinstance`` rather than wrapping every call in ``try``.
"""

from __future__ import annotations

import dataclasses
import typing

TSuccess = typing.TypeVar("TSuccess")
TFailure = typing.TypeVar("TFailure", bound=Exception)


def _require(
    *,
    condition: bool,
    message: str,
    exc: type[Exception] = ValueError,
    field_name: str | None = None,
) -> None:
    """Centralized validation with optional field context for clearer errors."""
    if not condition:
        if field_name:
            raise exc(f"{field_name}: {message}")
        raise exc(message)


# --- Result Monad for Explicit Error Handling ---


@dataclasses.dataclass(frozen=True, slots=True)
class Success(typing.Generic[TSuccess]):
    """A successful result."""

    value: TSuccess


@dataclasses.dataclass(frozen=True, slots=True)
class Failure(typing.Generic[TFailure]):
    """A failed result, containing the error."""

    error: TFailure


Result = Success[TSuccess] | Failure[TFailure]


def unwrap(result: Result[TSuccess, TFailure]) -> TSuccess:
    """Return the success value or raise the carried error."""
    if isinstance(result, Failure):
        raise result.error
    return result.value
