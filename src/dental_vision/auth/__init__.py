"""User authentication."""

from .login import LoginUseCase, validate_credentials
from .providers import (
    INVALID_CREDENTIALS,
    AuthenticationProvider,
    AuthError,
    AuthResult,
    AuthSuccess,
    BackendAuthenticationProvider,
    DemoAuthenticationProvider,
)

__all__ = [
    "INVALID_CREDENTIALS",
    "AuthError",
    "AuthResult",
    "AuthSuccess",
    "AuthenticationProvider",
    "BackendAuthenticationProvider",
    "DemoAuthenticationProvider",
    "LoginUseCase",
    "validate_credentials",
]
