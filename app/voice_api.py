"""HTTP entrypoint for the RakshaVaani voice security API."""

from __future__ import annotations

import random
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rakshavaani.analysis import analyze_call
from rakshavaani.chat import ChatAssistant
from rakshavaani.config import Settings, get_settings
from rakshavaani.detection import VoiceDetectionService
from rakshavaani.errors import AuthError, ModelError, ValidationError
from rakshavaani.fallback import ModelFallbackOrchestrator
from rakshavaani.gemini import GeminiClient, TextGenerator
from rakshavaani.schemas import ChatResponse, ErrorResponse, VoiceDetectionResponse
from rakshavaani.storage import HistoryStore
from rakshavaani.utils import elapsed_ms, now_ms, utc_now
from rakshavaani.validation import (
    check_api_key,
    validate_call_analysis_request,
    validate_chat_request,
    validate_voice_request,
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).to_wire())


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


def create_app(
    settings: Settings | None = None,
    *,
    client: TextGenerator | None = None,
    orchestrator: ModelFallbackOrchestrator | None = None,
    store: HistoryStore | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    client = client or GeminiClient(settings)
    orchestrator = orchestrator or ModelFallbackOrchestrator()
    store = store or HistoryStore(settings)
    allowed_keys = settings.allowed_api_keys()

    detector = VoiceDetectionService(client, settings, orchestrator=orchestrator, rng=rng)
    assistant = ChatAssistant(client, settings, orchestrator=orchestrator)

    api = FastAPI(title="RakshaVaani API", version="1.0.0")
    api.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @api.get("/health")
    async def health(probe: bool = False) -> dict[str, Any]:
        remote: dict[str, Any] = {"reachable": None, "models": [], "error": None}
        if probe and isinstance(client, GeminiClient):
            try:
                remote["models"] = await client.list_models()
                remote["reachable"] = True
            except ModelError as exc:
                remote["reachable"] = False
                remote["error"] = type(exc).__name__

        return {
            "status": "ok",
            "service": settings.app_name,
            "timestamp": utc_now().isoformat(),
            "gemini_key_configured": bool(settings.gemini_api_key),
            "voice_models": list(settings.voice_models),
            "chat_models": list(settings.chat_models),
            "history_enabled": settings.history_enabled,
            "probe_performed": probe,
            "remote": remote,
        }

    @api.post("/api/voice-detection")
    async def voice_detection(request: Request):
        try:
            check_api_key(request.headers.get("x-api-key"), allowed_keys)
            voice_request = validate_voice_request(await _read_json(request))
        except AuthError as exc:
            return _error(401, str(exc))
        except ValidationError as exc:
            return _error(400, str(exc))

        started = now_ms()
        try:
            outcome = await detector.detect(
                voice_request.language,
                voice_request.audio_base64,
                voice_request.audio_format,
            )
            response = VoiceDetectionResponse(
                language=voice_request.language,
                classification=outcome.result.classification,
                confidence_score=outcome.result.confidence_score,
                explanation=outcome.result.explanation,
            )
        except Exception as exc:
            print(f"[rakshavaani] voice_detection_error: {type(exc).__name__}: {exc}")
            return _error(500, str(exc) or "Internal processing error")

        payload = response.to_wire()
        await store.record(
            "voice_detection",
            {
                **payload,
                "model": outcome.model,
                "degraded": outcome.degraded,
                "latency_ms": elapsed_ms(started),
            },
        )
        return payload

    @api.post("/api/chat")
    async def chat(request: Request):
        try:
            check_api_key(request.headers.get("x-api-key"), allowed_keys)
            chat_request = validate_chat_request(await _read_json(request))
        except AuthError as exc:
            return _error(401, str(exc))
        except ValidationError as exc:
            return _error(400, str(exc))

        try:
            outcome = await assistant.reply(chat_request.message)
        except Exception as exc:
            print(f"[rakshavaani] chat_error: {type(exc).__name__}: {exc}")
            return _error(500, str(exc) or "Internal processing error")

        await store.record("chat", {"sender": "user", "text": chat_request.message})
        await store.record("chat", {"sender": "bot", "text": outcome.reply, "model": outcome.model})
        return ChatResponse(reply=outcome.reply).to_wire()

    @api.post("/api/call-analysis")
    async def call_analysis(request: Request):
        try:
            check_api_key(request.headers.get("x-api-key"), allowed_keys)
            analysis_request = validate_call_analysis_request(await _read_json(request))
        except AuthError as exc:
            return _error(401, str(exc))
        except ValidationError as exc:
            return _error(400, str(exc))

        try:
            result = analyze_call(analysis_request.audio_base64)
        except Exception as exc:
            print(f"[rakshavaani] call_analysis_error: {type(exc).__name__}: {exc}")
            return _error(500, str(exc) or "Internal processing error")

        payload = {"status": "success", **result.to_wire()}
        await store.record("call_analysis", result.to_wire())
        return payload

    return api


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run("voice_api:app", host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
