"""Generation adapters: how a ``GeminiRequest`` reaches the model.

Adapters are injected into ``InsightClient``. Both return a ``Result`` so
that transport and status failures stay distinct from decode failures.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol, Self, runtime_checkable

from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types
import httpx

from dental_vision import constants
from dental_vision.core.types import Failure, Result, Success
from dental_vision.exceptions import (
    ApiError,
    DecodeError,
    HttpStatusError,
    TransportError,
)

from .envelope import GeminiRequest, GeminiResponse

if TYPE_CHECKING:
    from dental_vision.api.client import ApiClient

log = logging.getLogger(__name__)


@runtime_checkable
class GenerationAdapter(Protocol):
    """Sends one envelope to a text-generation backend."""

    async def generate(
        self, request: GeminiRequest
    ) -> Result[GeminiResponse, ApiError]: ...

    async def close(self) -> None: ...


class HttpGenerationAdapter:
    """Calls the REST ``generateContent`` endpoint through an ``ApiClient``.

    The API key travels as the ``key`` query parameter; ``ApiClient`` never
    logs query strings.
    """

    def __init__(
        self,
        api_client: ApiClient,
        api_key: str,
        model: str = constants.GEMINI_MODEL,
    ) -> None:
        self._client = api_client
        self._api_key = api_key
        self.model = model

    async def close(self) -> None:
        """Release the connections of the underlying ``ApiClient``."""
        await self._client.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def endpoint(self) -> str:
        return f"/v1beta/models/{self.model}:generateContent"

    async def generate(
        self, request: GeminiRequest
    ) -> Result[GeminiResponse, ApiError]:
        return await self._client.post(
            self.endpoint, GeminiResponse, body=request, params={"key": self._api_key}
        )


class GoogleGenAIAdapter:
    """Calls Gemini through the ``google-genai`` SDK."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = constants.GEMINI_MODEL,
        *,
        client: Any | None = None,
    ) -> None:
        self._client = client if client is not None else genai.Client(api_key=api_key)
        self.model = model

    async def close(self) -> None:
        """Nothing to release; the SDK manages its own connections."""

    @staticmethod
    def _to_sdk_contents(request: GeminiRequest) -> list[genai_types.Content]:
        return [
            genai_types.Content(
                role=content.role or "user",
                parts=[genai_types.Part(text=part.text) for part in content.parts],
            )
            for content in request.contents
        ]

    async def generate(
        self, request: GeminiRequest
    ) -> Result[GeminiResponse, ApiError]:
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=self._to_sdk_contents(request),
                config=genai_types.GenerateContentConfig(
                    response_mime_type=constants.CONTENT_TYPE_JSON
                ),
            )
        except genai_errors.APIError as e:
            log.warning("Gemini SDK returned HTTP %s", e.code)
            error = HttpStatusError(e.code, str(e.message or e))
            error.__cause__ = e
            return Failure(error)
        except (httpx.RequestError, TimeoutError) as e:
            error = TransportError(f"Failed to reach Gemini: {e}")
            error.__cause__ = e
            return Failure(error)

        text = response.text
        if text is None:
            return Failure(DecodeError("Empty response from Gemini: no candidate text"))
        return Success(GeminiResponse.from_text(text))
