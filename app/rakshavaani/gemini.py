"""Gemini `generateContent` REST client."""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from rakshavaani.config import Settings
from rakshavaani.errors import ModelPermanentError, ModelTransientError

_PERMANENT_BODY_MARKERS = ("not found", "is not supported", "unsupported model")


class TextGenerator(Protocol):
    async def generate(
        self,
        model: str,
        prompt: str,
        *,
        attachment_b64: str | None = None,
        mime_type: str | None = None,
    ) -> str: ...


class GeminiClient:
    """Minimal provider client: model id + prompt + optional inline audio in, text out.

    Failures are raised as `ModelPermanentError` when the model identifier is
    unknown to the provider and as `ModelTransientError` otherwise.
    """

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None):
        self._settings = settings
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._settings.gemini_api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._settings.gemini_base_url.rstrip("/"),
            timeout=self._settings.request_timeout_sec,
            transport=self._transport,
        )

    @staticmethod
    def _build_body(
        prompt: str,
        attachment_b64: str | None,
        mime_type: str | None,
    ) -> dict[str, Any]:
        parts: list[dict[str, Any]] = [{"text": prompt}]
        if attachment_b64:
            parts.append(
                {
                    "inline_data": {
                        "mime_type": mime_type or "application/octet-stream",
                        "data": attachment_b64,
                    }
                }
            )
        return {"contents": [{"parts": parts}]}

    @staticmethod
    def _raise_for_status(model: str, response: httpx.Response) -> None:
        if response.is_success:
            return
        status = response.status_code
        detail = response.text[:300]
        message = f"{model} returned HTTP {status}: {detail}"
        lowered = detail.lower()
        if status == 404 or (status == 400 and any(m in lowered for m in _PERMANENT_BODY_MARKERS)):
            raise ModelPermanentError(message, model=model, status_code=status)
        raise ModelTransientError(message, model=model, status_code=status)

    @staticmethod
    def _extract_text(model: str, data: dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            raise ModelTransientError(f"{model} returned no candidates", model=model)

        parts = (((candidates[0] or {}).get("content") or {}).get("parts")) or []
        text = "".join(str(p.get("text", "")) for p in parts if isinstance(p, dict)).strip()
        if not text:
            raise ModelTransientError(f"{model} returned an empty response", model=model)
        return text

    async def generate(
        self,
        model: str,
        prompt: str,
        *,
        attachment_b64: str | None = None,
        mime_type: str | None = None,
    ) -> str:
        if not self._settings.gemini_api_key:
            raise ModelTransientError("gemini_api_key_missing", model=model)

        body = self._build_body(prompt, attachment_b64, mime_type)
        try:
            async with self._client() as client:
                response = await client.post(
                    f"/models/{model}:generateContent",
                    params={"key": self._settings.gemini_api_key},
                    json=body,
                )
        except httpx.TimeoutException as exc:
            raise ModelTransientError(f"{model} timed out: {type(exc).__name__}", model=model) from exc
        except httpx.HTTPError as exc:
            raise ModelTransientError(f"{model} transport error: {type(exc).__name__}", model=model) from exc

        self._raise_for_status(model, response)
        try:
            data = response.json()
        except ValueError as exc:
            raise ModelTransientError(f"{model} returned a non-JSON body", model=model) from exc
        return self._extract_text(model, data)

    async def list_models(self) -> list[str]:
        if not self._settings.gemini_api_key:
            raise ModelTransientError("gemini_api_key_missing")
        try:
            async with self._client() as client:
                response = await client.get("/models", params={"key": self._settings.gemini_api_key})
        except httpx.HTTPError as exc:
            raise ModelTransientError(f"model listing transport error: {type(exc).__name__}") from exc

        self._raise_for_status("models", response)
        try:
            data = response.json()
        except ValueError as exc:
            raise ModelTransientError("model listing returned a non-JSON body") from exc
        if not isinstance(data, dict) or not isinstance(data.get("models") or [], list):
            raise ModelTransientError("model listing returned an unexpected payload")
        return [
            str(m["name"]).replace("models/", "")
            for m in data.get("models") or []
            if isinstance(m, dict) and m.get("name")
        ]
