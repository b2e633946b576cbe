"""Unit tests for the clinical insight wire mapping."""

import json

from pydantic import ValidationError as PydanticValidationError
import pytest

from dental_vision.exceptions import DecodeError, UnknownRiskLevelError
from dental_vision.gemini import (
    ClinicalInsight,
    ClinicalInsightRequest,
    GeminiResponse,
    RiskLevel,
    build_prompt,
    decode_insight_response,
    encode_insight_request,
    encode_insight_response,
    extract_json_object,
    normalize_risk_level,
)
from dental_vision.gemini.prompts import format_confidence
from tests.helpers import gemini_payload, sample_insight


@pytest.fixture
def insight_request():
    return ClinicalInsightRequest(
        doctor_name="Smith",
        patient_name="Jane Doe",
        cavity_count=2,
        healthy_count=26,
        confidence=0.873,
    )


class TestRequestEncoding:
    @pytest.mark.unit
    def test_single_text_part_carries_every_field(self, insight_request):
        envelope = encode_insight_request(insight_request)

        assert len(envelope.contents) == 1
        assert len(envelope.contents[0].parts) == 1
        text = envelope.contents[0].parts[0].text
        for expected in ("Smith", "Jane Doe", "2 cavities", "26 healthy", "87.3%"):
            assert expected in text

    @pytest.mark.unit
    def test_wire_shape(self, insight_request):
        wire = encode_insight_request(insight_request).model_dump(exclude_none=True)

        assert list(wire) == ["contents"]
        assert list(wire["contents"][0]) == ["parts"]

    @pytest.mark.unit
    def test_prompt_asks_for_all_response_fields(self, insight_request):
        prompt = build_prompt(insight_request)

        for key in (
            "greeting",
            "diagnosisSummary",
            "preventionTips",
            "correctiveActions",
            "riskLevel",
        ):
            assert f'"{key}"' in prompt

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("confidence", "rendered"), [(0.873, "87.3%"), (1.0, "100.0%"), (0.0, "0.0%")]
    )
    def test_confidence_is_rendered_as_percentage(self, confidence, rendered):
        assert format_confidence(confidence) == rendered

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "overrides",
        [{"cavity_count": -1}, {"healthy_count": -3}, {"confidence": 1.2}],
    )
    def test_request_rejects_out_of_range_values(self, overrides):
        values = {
            "doctor_name": "Smith",
            "patient_name": "Jane",
            "cavity_count": 0,
            "healthy_count": 0,
            "confidence": 0.5,
        }
        values.update(overrides)
        with pytest.raises(PydanticValidationError):
            ClinicalInsightRequest(**values)


class TestResponseDecoding:
    @pytest.mark.unit
    def test_encoded_response_decodes_to_equal_value(self):
        insight = sample_insight()

        assert decode_insight_response(encode_insight_response(insight)) == insight

    @pytest.mark.unit
    def test_embedded_text_uses_camel_case_keys(self):
        text = encode_insight_response(sample_insight()).first_text()

        assert set(json.loads(text)) == {
            "greeting",
            "diagnosisSummary",
            "preventionTips",
            "correctiveActions",
            "riskLevel",
        }

    @pytest.mark.unit
    def test_raw_mapping_with_unknown_fields_decodes(self):
        text = encode_insight_response(sample_insight()).first_text()

        decoded = decode_insight_response(gemini_payload(text))

        assert decoded.risk_level == "HIGH"

    @pytest.mark.unit
    def test_fenced_model_output_decodes(self):
        inner = encode_insight_response(sample_insight()).first_text()
        fenced = f"Here you go:\n```json\n{inner}\n```"

        decoded = decode_insight_response(GeminiResponse.from_text(fenced))

        assert decoded == sample_insight()

    @pytest.mark.unit
    def test_non_json_text_is_decode_error(self):
        with pytest.raises(DecodeError):
            decode_insight_response(GeminiResponse.from_text("I cannot help with that."))

    @pytest.mark.unit
    def test_missing_field_is_decode_error(self):
        payload = json.loads(encode_insight_response(sample_insight()).first_text())
        del payload["riskLevel"]

        with pytest.raises(DecodeError):
            decode_insight_response(GeminiResponse.from_text(json.dumps(payload)))

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "envelope",
        [{}, {"candidates": []}, {"candidates": [{"content": {"parts": []}}]}],
    )
    def test_missing_candidate_text_is_decode_error(self, envelope):
        with pytest.raises(DecodeError, match="no candidate text"):
            decode_insight_response(envelope)

    @pytest.mark.unit
    def test_malformed_envelope_is_decode_error(self):
        with pytest.raises(DecodeError, match="Malformed"):
            decode_insight_response({"candidates": "nope"})

    @pytest.mark.unit
    def test_extract_json_object_strips_prose(self):
        assert extract_json_object('noise {"a": {"b": 1}} trailing') == '{"a": {"b": 1}}'


class TestRiskLevel:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("raw", "level"),
        [
            ("LOW", RiskLevel.LOW),
            ("low", RiskLevel.LOW),
            (" Moderate ", RiskLevel.MODERATE),
            ("MEDIUM", RiskLevel.MODERATE),
            ("high", RiskLevel.HIGH),
            ("critical", RiskLevel.UNKNOWN),
            ("", RiskLevel.UNKNOWN),
        ],
    )
    def test_normalization(self, raw, level):
        assert normalize_risk_level(raw) is level

    @pytest.mark.unit
    def test_strict_mode_raises_for_unknown_values(self):
        with pytest.raises(UnknownRiskLevelError, match="critical"):
            normalize_risk_level("critical", strict=True)

    @pytest.mark.unit
    def test_domain_insight_carries_normalized_level(self):
        insight = ClinicalInsight.from_response(sample_insight(risk_level="medium"))

        assert insight.risk_level is RiskLevel.MODERATE
        assert insight.risk_level.display_name == "Moderate Risk"
        assert insight.prevention_tips == ("Brush twice daily", "Floss", "Reduce sugar")
