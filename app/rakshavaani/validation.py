"""Request gates that run before any remote call."""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import ValidationError as PydanticValidationError

from rakshavaani.errors import AuthError, ValidationError
from rakshavaani.schemas import CallAnalysisRequest, ChatRequest, VoiceDetectionRequest

AUTH_ERROR_MESSAGE = "Invalid API key or malformed request"
MISSING_VOICE_FIELDS_MESSAGE = "Missing language or audioBase64"
MISSING_MESSAGE_MESSAGE = "Missing message"
MISSING_AUDIO_MESSAGE = "Missing audioBase64"


def check_api_key(presented: str | None, allowed: Iterable[str]) -> None:
    if not presented or presented not in set(allowed):
        raise AuthError(AUTH_ERROR_MESSAGE)


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


def _as_dict(payload: Any, message: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValidationError(message)
    return payload


def validate_voice_request(payload: Any) -> VoiceDetectionRequest:
    body = _as_dict(payload, MISSING_VOICE_FIELDS_MESSAGE)
    try:
        request = VoiceDetectionRequest.model_validate(body)
    except PydanticValidationError as exc:
        raise ValidationError(MISSING_VOICE_FIELDS_MESSAGE) from exc
    if not (_present(request.language) and _present(request.audio_base64)):
        raise ValidationError(MISSING_VOICE_FIELDS_MESSAGE)
    return request


def validate_chat_request(payload: Any) -> ChatRequest:
    body = _as_dict(payload, MISSING_MESSAGE_MESSAGE)
    try:
        request = ChatRequest.model_validate(body)
    except PydanticValidationError as exc:
        raise ValidationError(MISSING_MESSAGE_MESSAGE) from exc
    if not _present(request.message):
        raise ValidationError(MISSING_MESSAGE_MESSAGE)
    return request


def validate_call_analysis_request(payload: Any) -> CallAnalysisRequest:
    body = _as_dict(payload, MISSING_AUDIO_MESSAGE)
    try:
        request = CallAnalysisRequest.model_validate(body)
    except PydanticValidationError as exc:
        raise ValidationError(MISSING_AUDIO_MESSAGE) from exc
    if not _present(request.audio_base64):
        raise ValidationError(MISSING_AUDIO_MESSAGE)
    return request
