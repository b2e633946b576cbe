"""Authentication outcomes and the providers that produce them."""

from __future__ import annotations

import dataclasses
import logging
import secrets
from typing import Protocol, runtime_checkable

from dental_vision import constants
from dental_vision.api import ApiClient, get_backend_client
from dental_vision.core.types import Failure
from dental_vision.exceptions import HttpStatusError
from dental_vision.services.dto import LoginRequest, LoginResponse, UserDTO

log = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclasses.dataclass(frozen=True, slots=True)
class AuthSuccess:
    """Credentials accepted. Backend logins also carry the issued token."""

    access_token: str | None = dataclasses.field(default=None, repr=False)
    user: UserDTO | None = None


@dataclasses.dataclass(frozen=True, slots=True)
class AuthError:
    message: str


AuthResult = AuthSuccess | AuthError


@runtime_checkable
class AuthenticationProvider(Protocol):
    async def authenticate(self, email: str, password: str) -> AuthResult: ...


class DemoAuthenticationProvider:
    """Accepts the single built-in demo account and nothing else."""

    def __init__(
        self,
        email: str = constants.DEMO_EMAIL,
        password: str = constants.DEMO_PASSWORD,
    ) -> None:
        self._email = email
        self._password = password

    async def authenticate(self, email: str, password: str) -> AuthResult:
        email_ok = secrets.compare_digest(email.encode(), self._email.encode())
        password_ok = secrets.compare_digest(password.encode(), self._password.encode())
        if email_ok and password_ok:
            return AuthSuccess()
        return AuthError(INVALID_CREDENTIALS)


class BackendAuthenticationProvider:
    """Checks credentials against the backend login endpoint."""

    def __init__(self, api_client: ApiClient | None = None) -> None:
        self._api = api_client or get_backend_client()

    async def authenticate(self, email: str, password: str) -> AuthResult:
        result = await self._api.post(
            constants.LOGIN_ENDPOINT,
            LoginResponse,
            LoginRequest(username=email, password=password),
        )
        if isinstance(result, Failure):
            error = result.error
            if isinstance(error, HttpStatusError) and error.status_code in (401, 403):
                return AuthError(INVALID_CREDENTIALS)
            log.warning("Login request failed: %s", error)
            return AuthError(str(error))

        response = result.value
        log.info("Logged in as %s", response.user.username)
        return AuthSuccess(access_token=response.access_token, user=response.user)
