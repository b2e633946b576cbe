"""Login orchestration: input rules, the artificial delay, then the provider."""

import asyncio
from collections.abc import Awaitable, Callable
import logging

from dental_vision import constants
from dental_vision.config import resolve_config
from dental_vision.exceptions import ValidationError

from .providers import (
    AuthenticationProvider,
    AuthError,
    AuthResult,
    DemoAuthenticationProvider,
)

log = logging.getLogger(__name__)


def validate_credentials(email: str, password: str) -> None:
    """Apply the login input rules in order; the first failing rule wins.

    Raises:
        ValidationError: Carrying the message to display.
    """
    if not email.strip():
        raise ValidationError("Email is required")
    if not password.strip():
        raise ValidationError("Password is required")
    if "@" not in email:
        raise ValidationError("Invalid email format")
    if len(password) < constants.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {constants.MIN_PASSWORD_LENGTH} characters"
        )


class LoginUseCase:
    """Authenticates a user: ``await LoginUseCase()(email, password)``.

    Args:
        provider: Who decides whether credentials are valid. Defaults to the
            demo account.
        delay: Seconds to wait between validation and authentication; 0
            disables it. Defaults to the configured ``login_delay``.
        sleep: Awaitable sleep, replaceable in tests.
    """

    def __init__(
        self,
        provider: AuthenticationProvider | None = None,
        *,
        delay: float | None = None,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        self.provider = provider or DemoAuthenticationProvider()
        self.delay = resolve_config().login_delay if delay is None else delay
        self._sleep = sleep

    async def __call__(self, email: str, password: str) -> AuthResult:
        try:
            validate_credentials(email, password)
        except ValidationError as e:
            return AuthError(e.message)

        if self.delay > 0:
            await self._sleep(self.delay)

        result = await self.provider.authenticate(email, password)
        if isinstance(result, AuthError):
            log.info("Login rejected: %s", result.message)
        return result
