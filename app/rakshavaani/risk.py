"""Keyword heuristics for call-transcript fraud risk."""

from __future__ import annotations

from rakshavaani.schemas import RiskAnalysisResult

FRAUD_KEYWORDS = ("otp", "blocked", "account", "verify", "bank", "urgency")

BASE_SCORE = 40
KEYWORD_WEIGHT = 15
MAX_SCORE = 98

FRAUD_THRESHOLD = 70
SUSPICIOUS_THRESHOLD = 40

# Static annotations; they do not track which keywords matched.
STATIC_REASONS = ("Urgency detected", "Bank impersonation", "Request for sensitive data (OTP)")
STATIC_RISKY_PHRASES = ("blocked today", "share your OTP", "immediately")


def matched_keywords(transcript: str) -> list[str]:
    lower = (transcript or "").lower()
    return [word for word in FRAUD_KEYWORDS if word in lower]


def score_for_matches(match_count: int) -> int:
    return min(BASE_SCORE + match_count * KEYWORD_WEIGHT, MAX_SCORE)


def risk_level_for_score(score: int) -> str:
    if score > FRAUD_THRESHOLD:
        return "Fraud"
    if score > SUSPICIOUS_THRESHOLD:
        return "Suspicious"
    return "Safe"


def score_transcript(transcript: str) -> RiskAnalysisResult:
    score = score_for_matches(len(matched_keywords(transcript)))
    return RiskAnalysisResult(
        transcript=transcript,
        risk_level=risk_level_for_score(score),
        score=score,
        reasons=list(STATIC_REASONS),
        risky_phrases=list(STATIC_RISKY_PHRASES),
    )
