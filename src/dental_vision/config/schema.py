"""Configuration schema and validation using Pydantic.

This module defines the settings schema that validates and coerces configuration
values from the environment (``DENTAL_VISION_*``), an optional ``.env`` file and
programmatic overrides into the correct types with proper defaults.
"""

from typing import Any, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dental_vision import constants

PickerKind = Literal["path", "dialog", "hosted", "upload"]


class DentalVisionSettings(BaseSettings):
    """Pydantic settings schema for the Dental Vision client.

    Environment variables use the ``DENTAL_VISION_`` prefix, e.g.
    ``DENTAL_VISION_INFERENCE_TOKEN``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DENTAL_VISION_",
        env_file=None,  # Only used when explicitly requested
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown env vars for forward compatibility
    )

    # --- Service endpoints ---

    backend_url: str = Field(default=constants.BACKEND_URL, min_length=1)
    inference_url: str = Field(default=constants.INFERENCE_URL, min_length=1)
    gemini_base_url: str = Field(default=constants.GEMINI_BASE_URL, min_length=1)
    gemini_model: str = Field(default=constants.GEMINI_MODEL, min_length=1)

    # --- Credentials (never logged) ---

    inference_token: SecretStr | None = Field(
        default=None,
        description="Bearer token for the third-party inference service",
    )
    gemini_api_key: SecretStr | None = Field(
        default=None,
        description="API key for the Gemini generation endpoint",
    )

    # --- Timeouts (seconds) ---

    request_timeout: float = Field(default=constants.REQUEST_TIMEOUT, gt=0)
    connect_timeout: float = Field(default=constants.CONNECT_TIMEOUT, gt=0)
    socket_timeout: float = Field(default=constants.SOCKET_TIMEOUT, gt=0)
    analysis_timeout: float = Field(default=constants.ANALYSIS_TIMEOUT, gt=0)

    # --- Behaviour ---

    confidence_threshold: float = Field(
        default=constants.DEFAULT_CONFIDENCE_THRESHOLD, ge=0.0, le=1.0
    )
    login_delay: float = Field(default=constants.LOGIN_DELAY, ge=0.0)
    file_picker: PickerKind = "dialog"

    @field_validator("backend_url", "inference_url", "gemini_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Endpoints are joined as ``base + '/api/...'``."""
        return v.rstrip("/")

    @field_validator("file_picker", mode="before")
    @classmethod
    def normalize_picker(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v
