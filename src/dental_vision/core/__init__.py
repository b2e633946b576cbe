"""Core types for the Dental Vision client."""

from .types import Failure, Result, Success, unwrap

__all__ = ["Failure", "Result", "Success", "unwrap"]
