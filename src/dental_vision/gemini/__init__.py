"""Gemini contracts and the clinical insight client."""

from .adapters import GenerationAdapter, GoogleGenAIAdapter, HttpGenerationAdapter
from .client import InsightClient, create_insight_client
from .envelope import (
    GeminiCandidate,
    GeminiContent,
    GeminiPart,
    GeminiRequest,
    GeminiResponse,
)
from .insight import (
    ClinicalInsight,
    ClinicalInsightRequest,
    ClinicalInsightResponse,
    RiskLevel,
    normalize_risk_level,
)
from .mapping import (
    decode_insight_response,
    encode_insight_request,
    encode_insight_response,
    extract_json_object,
)
from .prompts import build_prompt

__all__ = [
    "ClinicalInsight",
    "ClinicalInsightRequest",
    "ClinicalInsightResponse",
    "GeminiCandidate",
    "GeminiContent",
    "GeminiPart",
    "GeminiRequest",
    "GeminiResponse",
    "GenerationAdapter",
    "GoogleGenAIAdapter",
    "HttpGenerationAdapter",
    "InsightClient",
    "RiskLevel",
    "build_prompt",
    "create_insight_client",
    "decode_insight_response",
    "encode_insight_request",
    "encode_insight_response",
    "extract_json_object",
    "normalize_risk_level",
]
