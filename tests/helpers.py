"""Shared fakes for the test suite."""

from collections.abc import Callable
import json
from typing import Any

import httpx

from dental_vision.api import ApiClient
from dental_vision.core.types import Failure, Result, Success
from dental_vision.exceptions import ApiError
from dental_vision.gemini import ClinicalInsightResponse, GeminiRequest, GeminiResponse
from dental_vision.gemini.mapping import encode_insight_response
from dental_vision.pickers import FilePickerResult

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16


def make_api_client(
    handler: Callable[[httpx.Request], httpx.Response],
    base_url: str = "https://backend.test",
    headers: dict[str, str] | None = None,
    **kwargs: Any,
) -> ApiClient:
    """ApiClient whose requests are answered by ``handler``."""
    return ApiClient(
        base_url, headers, transport=httpx.MockTransport(handler), **kwargs
    )


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload)


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response | Callable[[], httpx.Response]):
        self._response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self._response):
            return self._response()
        return self._response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def sample_insight(**overrides: Any) -> ClinicalInsightResponse:
    values = {
        "greeting": "Hello Dr. Smith, this is Dental Vision AI.",
        "diagnosis_summary": "Two carious lesions on the lower molars.",
        "prevention_tips": ["Brush twice daily", "Floss", "Reduce sugar"],
        "corrective_actions": ["Fillings on 36 and 46", "Recall in 6 months"],
        "risk_level": "HIGH",
    }
    values.update(overrides)
    return ClinicalInsightResponse(**values)


def gemini_payload(text: str) -> dict[str, Any]:
    """Raw ``generateContent`` JSON carrying ``text``."""
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
                "safetyRatings": [],
            }
        ],
        "usageMetadata": {"totalTokenCount": 42},
    }


class FakePicker:
    def __init__(self, result: FilePickerResult):
        self.result = result
        self.calls = 0

    async def pick_image(self) -> FilePickerResult:
        self.calls += 1
        return self.result


class FakeAdapter:
    """GenerationAdapter returning a canned result and recording requests."""

    def __init__(self, result: Result[GeminiResponse, ApiError] | None = None):
        self.result = result or Success(encode_insight_response(sample_insight()))
        self.requests: list[GeminiRequest] = []
        self.closed = False

    async def generate(self, request: GeminiRequest) -> Result[GeminiResponse, ApiError]:
        self.requests.append(request)
        return self.result

    async def close(self) -> None:
        self.closed = True


def failing_adapter(error: ApiError) -> FakeAdapter:
    return FakeAdapter(Failure(error))
