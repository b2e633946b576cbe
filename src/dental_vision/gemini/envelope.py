"""Wire envelope for the Gemini ``generateContent`` endpoint.

The envelope is payload-agnostic: it only carries text parts. Embedding a
clinical insight into it (and back out) lives in ``mapping``.
"""

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class GeminiPart(_WireModel):
    text: str


class GeminiContent(_WireModel):
    parts: list[GeminiPart]
    role: str | None = None


class GeminiRequest(_WireModel):
    """``{"contents": [{"parts": [{"text": ...}]}]}``"""

    contents: list[GeminiContent]

    @classmethod
    def from_text(cls, text: str) -> "GeminiRequest":
        return cls(contents=[GeminiContent(parts=[GeminiPart(text=text)])])


class GeminiCandidate(_WireModel):
    content: GeminiContent
    finish_reason: str | None = Field(default=None, alias="finishReason")


class GeminiResponse(_WireModel):
    """``{"candidates": [{"content": {"parts": [{"text": ...}]}}]}``"""

    candidates: list[GeminiCandidate] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> "GeminiResponse":
        return cls(
            candidates=[
                GeminiCandidate(
                    content=GeminiContent(parts=[GeminiPart(text=text)], role="model")
                )
            ]
        )

    def first_text(self) -> str | None:
        """Text of the first part of the first candidate, if present."""
        if not self.candidates or not self.candidates[0].content.parts:
            return None
        return self.candidates[0].content.parts[0].text
