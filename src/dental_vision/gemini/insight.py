"""Clinical insight request and response models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dental_vision.exceptions import UnknownRiskLevelError


class _CamelModel(BaseModel):
    # Wire names are camelCase; Python names stay snake_case.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class ClinicalInsightRequest(_CamelModel):
    """Detection counts and identities an insight is generated for."""

    doctor_name: str
    patient_name: str
    cavity_count: int = Field(ge=0)
    healthy_count: int = Field(ge=0)
    confidence: float = Field(ge=0.0, le=1.0)


class ClinicalInsightResponse(_CamelModel):
    """Structured insight as returned (embedded as JSON text) by the model."""

    greeting: str
    diagnosis_summary: str
    prevention_tips: list[str]
    corrective_actions: list[str]
    risk_level: str


class RiskLevel(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    UNKNOWN = "UNKNOWN"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    RiskLevel.LOW: "Low Risk",
    RiskLevel.MODERATE: "Moderate Risk",
    RiskLevel.HIGH: "High Risk",
    RiskLevel.UNKNOWN: "Unknown Risk",
}

_RISK_ALIASES = {
    "low": RiskLevel.LOW,
    "moderate": RiskLevel.MODERATE,
    "medium": RiskLevel.MODERATE,
    "high": RiskLevel.HIGH,
}


def normalize_risk_level(value: str, *, strict: bool = False) -> RiskLevel:
    """Map a free-form wire value onto a ``RiskLevel``.

    Matching ignores case and surrounding whitespace. Unrecognized values
    become ``RiskLevel.UNKNOWN``, or raise when ``strict`` is set.

    Raises:
        UnknownRiskLevelError: For an unrecognized value with ``strict=True``.
    """
    level = _RISK_ALIASES.get(value.strip().lower())
    if level is not None:
        return level
    if strict:
        raise UnknownRiskLevelError(value)
    return RiskLevel.UNKNOWN


class ClinicalInsight(BaseModel):
    """Insight handed to callers, with the risk level normalized."""

    model_config = ConfigDict(frozen=True)

    greeting: str
    diagnosis_summary: str
    prevention_tips: tuple[str, ...]
    corrective_actions: tuple[str, ...]
    risk_level: RiskLevel

    @classmethod
    def from_response(cls, response: ClinicalInsightResponse) -> "ClinicalInsight":
        return cls(
            greeting=response.greeting,
            diagnosis_summary=response.diagnosis_summary,
            prevention_tips=tuple(response.prevention_tips),
            corrective_actions=tuple(response.corrective_actions),
            risk_level=normalize_risk_level(response.risk_level),
        )
