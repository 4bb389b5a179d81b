"""Pydantic schemas for RakshaVaani endpoints and internal results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


Classification = Literal["AI_GENERATED", "HUMAN"]
RiskLevel = Literal["Safe", "Suspicious", "Fraud"]

CLASSIFICATIONS: tuple[str, ...] = ("AI_GENERATED", "HUMAN")


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class VoiceDetectionRequest(_WireModel):
    language: str | None = None
    audio_base64: str | None = None
    audio_format: str | None = None


class ChatRequest(_WireModel):
    message: str | None = None


class CallAnalysisRequest(_WireModel):
    audio_base64: str | None = None


class ClassificationResult(_WireModel):
    classification: Classification
    confidence_score: float = Field(ge=0.0, le=1.0)
    explanation: str


class RiskAnalysisResult(_WireModel):
    transcript: str
    risk_level: RiskLevel
    score: int = Field(ge=0, le=98)
    reasons: list[str] = Field(default_factory=list)
    risky_phrases: list[str] = Field(default_factory=list)


class VoiceDetectionResponse(_WireModel):
    status: Literal["success"] = "success"
    language: str
    classification: Classification
    confidence_score: float
    explanation: str


class ChatResponse(_WireModel):
    status: Literal["success"] = "success"
    reply: str


class ErrorResponse(_WireModel):
    status: Literal["error"] = "error"
    message: str
