"""Prompt construction for clinical insight generation."""

from .insight import ClinicalInsightRequest

_PROMPT_TEMPLATE = """\
You are Dental Vision AI, an expert assistant in preventive and corrective dentistry.

Context: Dr. {doctor} is treating patient {patient}. The analysis detected \
{cavities} cavities and {healthy} healthy teeth. The model confidence is {confidence}.

Instructions:
1. Return ONLY a valid JSON object: no markdown, no backticks, no extra text.
2. Use exactly the structure shown below.
3. riskLevel is "LOW" if there are no cavities, "HIGH" if there are cavities, \
"MODERATE" if the result is uncertain.
4. Write in professional English and keep the greeting concise.
5. Provide 3 prevention tips and 2-3 corrective actions.

Required JSON structure:
{{
  "greeting": "Hello Dr. {doctor}, this is Dental Vision AI. Based on the analysis of {patient}...",
  "diagnosisSummary": "Brief professional clinical summary...",
  "preventionTips": ["Tip 1", "Tip 2", "Tip 3"],
  "correctiveActions": ["Suggested action 1", "Suggested action 2"],
  "riskLevel": "LOW"
}}

Generate the JSON response now:"""


def format_confidence(confidence: float) -> str:
    """``0.873`` -> ``'87.3%'``"""
    return f"{confidence * 100:.1f}%"


def build_prompt(request: ClinicalInsightRequest) -> str:
    """Render the generation prompt carrying all five request fields."""
    return _PROMPT_TEMPLATE.format(
        doctor=request.doctor_name,
        patient=request.patient_name,
        cavities=request.cavity_count,
        healthy=request.healthy_count,
        confidence=format_confidence(request.confidence),
    )
