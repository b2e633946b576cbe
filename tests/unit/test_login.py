"""Unit tests for LoginUseCase and the authentication providers."""

from unittest.mock import AsyncMock

import httpx
import pytest

from dental_vision.auth import (
    AuthError,
    AuthSuccess,
    BackendAuthenticationProvider,
    DemoAuthenticationProvider,
    LoginUseCase,
    validate_credentials,
)
from dental_vision.config import config_scope, resolve_config
from dental_vision.exceptions import ValidationError
from tests.helpers import RecordingHandler, json_response, make_api_client

DEMO_EMAIL = "admin@dentalvision.ai"
DEMO_PASSWORD = "admin123"


@pytest.fixture
def sleep():
    return AsyncMock()


@pytest.fixture
def use_case(sleep):
    return LoginUseCase(sleep=sleep)


class TestValidationOrder:
    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("email", "password", "message"),
        [
            ("", "", "Email is required"),
            ("   ", "secret1", "Email is required"),
            ("a@b.c", "", "Password is required"),
            ("a@b.c", "   ", "Password is required"),
            ("not-an-email", "", "Password is required"),
            ("not-an-email", "x", "Invalid email format"),
            ("a@b.c", "12345", "Password must be at least 6 characters"),
        ],
    )
    async def test_first_failing_rule_wins(self, use_case, sleep, email, password, message):
        assert await use_case(email, password) == AuthError(message)
        sleep.assert_not_awaited()

    @pytest.mark.unit
    def test_validate_credentials_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_credentials("nobody", "longenough")

        assert exc_info.value.message == "Invalid email format"


class TestDemoAuthentication:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_demo_credentials_succeed_after_delay(self, use_case, sleep):
        assert await use_case(DEMO_EMAIL, DEMO_PASSWORD) == AuthSuccess()
        sleep.assert_awaited_once_with(1.0)

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("email", "password"),
        [
            (DEMO_EMAIL, "admin1234"),
            ("Admin@dentalvision.ai", DEMO_PASSWORD),
            ("someone@else.com", DEMO_PASSWORD),
        ],
    )
    async def test_anything_else_is_invalid(self, use_case, email, password):
        assert await use_case(email, password) == AuthError("Invalid credentials")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_zero_delay_skips_sleep(self, sleep):
        use_case = LoginUseCase(delay=0, sleep=sleep)

        assert await use_case(DEMO_EMAIL, DEMO_PASSWORD) == AuthSuccess()
        sleep.assert_not_awaited()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_delay_comes_from_config(self, sleep):
        with config_scope(resolve_config({"login_delay": 0.25})):
            use_case = LoginUseCase(sleep=sleep)

        await use_case(DEMO_EMAIL, DEMO_PASSWORD)

        sleep.assert_awaited_once_with(0.25)

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_custom_provider_is_used(self, sleep):
        provider = AsyncMock()
        provider.authenticate.return_value = AuthSuccess(access_token="t")
        use_case = LoginUseCase(provider, sleep=sleep)

        result = await use_case("doc@clinic.org", "hunter22")

        assert result == AuthSuccess(access_token="t")
        provider.authenticate.assert_awaited_once_with("doc@clinic.org", "hunter22")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_default_provider_directly(self):
        provider = DemoAuthenticationProvider()

        assert await provider.authenticate(DEMO_EMAIL, DEMO_PASSWORD) == AuthSuccess()


LOGIN_REPLY = {
    "access_token": "jwt-token",
    "token_type": "bearer",
    "user": {
        "id": "u1",
        "username": "doc",
        "email": "doc@clinic.org",
        "role": "dentist",
        "created_at": "2024-01-01T00:00:00Z",
    },
}


class TestBackendAuthentication:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_success_carries_token_and_user(self):
        handler = RecordingHandler(json_response(LOGIN_REPLY))
        provider = BackendAuthenticationProvider(make_api_client(handler))

        result = await provider.authenticate("doc@clinic.org", "hunter22")

        assert isinstance(result, AuthSuccess)
        assert result.access_token == "jwt-token"
        assert result.user.role == "dentist"
        assert handler.last.url.path == "/api/v1/auth/login"
        assert handler.last_json() == {"username": "doc@clinic.org", "password": "hunter22"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [401, 403])
    async def test_rejection_is_invalid_credentials(self, status):
        handler = RecordingHandler(httpx.Response(status))
        provider = BackendAuthenticationProvider(make_api_client(handler))

        assert await provider.authenticate("a@b.c", "secret1") == AuthError(
            "Invalid credentials"
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_other_failures_carry_their_message(self):
        handler = RecordingHandler(httpx.Response(503))
        provider = BackendAuthenticationProvider(make_api_client(handler))

        result = await provider.authenticate("a@b.c", "secret1")

        assert isinstance(result, AuthError)
        assert "HTTP error 503" in result.message

    @pytest.mark.unit
    def test_token_is_not_in_repr(self):
        assert "jwt-token" not in repr(AuthSuccess(access_token="jwt-token"))
