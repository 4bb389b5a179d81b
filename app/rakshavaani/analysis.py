"""Call analysis: simulated transcription followed by keyword risk scoring."""

from __future__ import annotations

from rakshavaani.risk import score_transcript
from rakshavaani.schemas import RiskAnalysisResult

# Speech-to-text is simulated; every clip yields the same scam script.
SIMULATED_TRANSCRIPT = (
    "Sir your bank account will be blocked today. Please share your OTP immediately for verification."
)


def simulate_transcription(audio_b64: str) -> str:
    _ = audio_b64
    return SIMULATED_TRANSCRIPT


def analyze_call(audio_b64: str) -> RiskAnalysisResult:
    return score_transcript(simulate_transcription(audio_b64))
