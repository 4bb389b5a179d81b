"""Security assistant chat with an offline fallback."""

from __future__ import annotations

from dataclasses import dataclass

from rakshavaani.config import Settings
from rakshavaani.errors import ExhaustionError
from rakshavaani.fallback import ModelFallbackOrchestrator
from rakshavaani.gemini import TextGenerator
from rakshavaani.normalizer import clean_chat_text
from rakshavaani.offline import OfflineIntentResponder

ASSISTANT_PROMPT = """You are RakshaVaani, a helpful Indian AI security assistant.

Your capabilities:
1. Detect specific call scams (Bank, OTP, Customs, FedEx).
2. Provide safety advice in Indian context.
3. Speak fluently in English, Hindi, Tamil, Telugu, and Malayalam.

Rules:
- Detect the language of the user's input.
- Reply in the SAME language as the user (or Hinglish if appropriate).
- Be brief, clear, and reassuring.

Example:
User: "Mera account block ho gaya"
You: "Ghabrayein nahi. Ye ek aam scam ho sakta hai. Bank kabhi bhi phone par OTP nahi mangta. Kya unhone aapse koi code manga?"
"""


@dataclass(frozen=True)
class ChatOutcome:
    reply: str
    model: str | None
    offline: bool


def build_chat_prompt(message: str) -> str:
    return f"{ASSISTANT_PROMPT}\nUser: {message}"


class ChatAssistant:
    def __init__(
        self,
        client: TextGenerator,
        settings: Settings,
        *,
        orchestrator: ModelFallbackOrchestrator | None = None,
        responder: OfflineIntentResponder | None = None,
    ):
        self._client = client
        self._settings = settings
        self._orchestrator = orchestrator or ModelFallbackOrchestrator()
        self._responder = responder or OfflineIntentResponder()

    async def reply(self, message: str) -> ChatOutcome:
        prompt = build_chat_prompt(message)

        async def _call(model: str) -> str:
            return await self._client.generate(model, prompt)

        try:
            outcome = await self._orchestrator.run(
                self._settings.chat_models,
                _call,
                clean_chat_text,
                max_attempts=self._settings.chat_max_attempts,
                retry_pause_sec=self._settings.chat_retry_pause_sec,
                label="chat_model",
            )
        except ExhaustionError as exc:
            print(f"[rakshavaani] chat_offline_mode: {exc}")
            return ChatOutcome(reply=self._responder.respond(message), model=None, offline=True)

        return ChatOutcome(reply=outcome.value, model=outcome.model, offline=False)
