"""Voice clip classification: remote models first, degraded mode last."""

from __future__ import annotations

import random
from dataclasses import dataclass

from rakshavaani.config import Settings
from rakshavaani.degraded import degraded_classification
from rakshavaani.errors import ExhaustionError
from rakshavaani.fallback import ModelFallbackOrchestrator
from rakshavaani.gemini import TextGenerator
from rakshavaani.normalizer import parse_classification
from rakshavaani.schemas import ClassificationResult

DEFAULT_MIME_TYPE = "audio/mp3"

_MIME_TYPES = {
    "mp3": "audio/mp3",
    "mpeg": "audio/mp3",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "webm": "audio/webm",
    "m4a": "audio/mp4",
    "mp4": "audio/mp4",
    "flac": "audio/flac",
}


@dataclass(frozen=True)
class DetectionOutcome:
    result: ClassificationResult
    model: str | None
    degraded: bool


def mime_type_for(audio_format: str | None) -> str:
    token = str(audio_format or "").strip().lower().lstrip(".")
    if token.startswith("audio/"):
        return token
    return _MIME_TYPES.get(token, DEFAULT_MIME_TYPE)


def strip_data_url(value: str) -> str:
    if value.strip().startswith("data:") and "," in value:
        _, _, value = value.partition(",")
    return value.strip()


def build_detection_prompt(language: str) -> str:
    return (
        "Analyze this audio clip carefully for Voice Security.\n\n"
        "Task: Detect if this voice is AI-GENERATED (Deepfake/TTS) or HUMAN (Real).\n\n"
        "CRITICAL INDICATORS FOR AI/SCAM:\n"
        '- Robotic intonation or "perfect" pacing.\n'
        "- Lack of natural breathing sounds.\n"
        '- Reading a "Bank Security" or "OTP" scam script.\n'
        "- Sudden changes in tone.\n\n"
        f"Context: Language is {language}.\n\n"
        "STRICTLY return a JSON object with this format (no markdown):\n"
        "{\n"
        '    "classification": "AI_GENERATED" or "HUMAN",\n'
        '    "confidenceScore": 0.0 to 1.0,\n'
        '    "explanation": "Short reason citing specific audio artifacts or script content."\n'
        "}"
    )


class VoiceDetectionService:
    def __init__(
        self,
        client: TextGenerator,
        settings: Settings,
        *,
        orchestrator: ModelFallbackOrchestrator | None = None,
        rng: random.Random | None = None,
    ):
        self._client = client
        self._settings = settings
        self._orchestrator = orchestrator or ModelFallbackOrchestrator()
        self._rng = rng

    async def detect(self, language: str, audio_b64: str, audio_format: str | None = None) -> DetectionOutcome:
        prompt = build_detection_prompt(language)
        audio = strip_data_url(audio_b64)
        mime_type = mime_type_for(audio_format)

        async def _call(model: str) -> str:
            return await self._client.generate(model, prompt, attachment_b64=audio, mime_type=mime_type)

        try:
            outcome = await self._orchestrator.run(
                self._settings.voice_models,
                _call,
                parse_classification,
                max_attempts=1,
                label="voice_model",
            )
        except ExhaustionError as exc:
            print(f"[rakshavaani] voice_degraded_mode: {exc}")
            return DetectionOutcome(result=degraded_classification(self._rng), model=None, degraded=True)

        return DetectionOutcome(result=outcome.value, model=outcome.model, degraded=False)
