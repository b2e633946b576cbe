"""Mapping between clinical insights and the generic Gemini envelope.

Outbound, the insight request is rendered as a prompt in the single text part.
Inbound, ``candidates[0].content.parts[0].text`` must hold a JSON object with
all five insight fields; anything else is a ``DecodeError``.
"""

from collections.abc import Mapping
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from dental_vision.exceptions import DecodeError

from .envelope import GeminiRequest, GeminiResponse
from .insight import ClinicalInsightRequest, ClinicalInsightResponse
from .prompts import build_prompt

log = logging.getLogger(__name__)


def encode_insight_request(request: ClinicalInsightRequest) -> GeminiRequest:
    return GeminiRequest.from_text(build_prompt(request))


def encode_insight_response(response: ClinicalInsightResponse) -> GeminiResponse:
    """Embed an insight as JSON text, the way the model is asked to reply."""
    return GeminiResponse.from_text(response.model_dump_json(by_alias=True))


def extract_json_object(text: str) -> str:
    """Strip markdown fences and any prose around the outermost ``{...}``."""
    cleaned = text.strip().replace("```json", "").replace("```", "")
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        cleaned = cleaned[start : end + 1]
    return cleaned.strip()


def decode_insight_response(
    envelope: GeminiResponse | Mapping[str, Any],
) -> ClinicalInsightResponse:
    """Parse a generation response into a ``ClinicalInsightResponse``.

    Raises:
        DecodeError: If the nested text is missing, is not JSON, or lacks any
            of the five required fields.
    """
    if not isinstance(envelope, GeminiResponse):
        try:
            envelope = GeminiResponse.model_validate(envelope)
        except PydanticValidationError as e:
            raise DecodeError(f"Malformed generation envelope: {e}") from e

    text = envelope.first_text()
    if text is None:
        raise DecodeError("Empty response from Gemini: no candidate text")

    payload = extract_json_object(text)
    log.debug("Decoding insight payload (%d chars)", len(payload))
    try:
        return ClinicalInsightResponse.model_validate_json(payload)
    except PydanticValidationError as e:
        raise DecodeError(f"Generated text is not a clinical insight: {e}") from e
