import asyncio
import random

from rakshavaani.chat import ASSISTANT_PROMPT, ChatAssistant
from rakshavaani.detection import VoiceDetectionService, mime_type_for, strip_data_url
from rakshavaani.errors import ModelPermanentError, ModelTransientError
from rakshavaani.fallback import ModelFallbackOrchestrator
from rakshavaani.offline import INTENT_RULES
from stubs import RecordingSleep, ScriptedClient, make_settings

GOOD = '```json\n{"classification": "AI_GENERATED", "confidenceScore": 0.91, "explanation": "Flat prosody."}\n```'


def test_detection_returns_first_usable_model_answer(tmp_path):
    client = ScriptedClient({"voice-a": [ModelTransientError("quota")], "voice-b": [GOOD]})
    service = VoiceDetectionService(client, make_settings(tmp_path))

    outcome = asyncio.run(service.detect("Tamil", "data:audio/mp3;base64,QUJD", "wav"))

    assert outcome.degraded is False
    assert outcome.model == "voice-b"
    assert outcome.result.classification == "AI_GENERATED"
    assert client.calls_for("voice-c") == 0
    first = client.calls[0]
    assert "Context: Language is Tamil." in first["prompt"]
    assert first["attachment_b64"] == "QUJD"
    assert first["mime_type"] == "audio/wav"


def test_detection_never_retries_a_voice_candidate(tmp_path):
    client = ScriptedClient(default=ModelTransientError("overloaded"))
    sleep = RecordingSleep()
    service = VoiceDetectionService(
        client,
        make_settings(tmp_path),
        orchestrator=ModelFallbackOrchestrator(sleep=sleep),
        rng=random.Random(7),
    )

    outcome = asyncio.run(service.detect("English", "QUJD"))

    assert [c["model"] for c in client.calls] == ["voice-a", "voice-b", "voice-c"]
    assert sleep.pauses == []
    assert outcome.degraded is True
    assert outcome.model is None
    assert 0.85 <= outcome.result.confidence_score <= 0.99


def test_mime_type_mapping():
    assert mime_type_for(None) == "audio/mp3"
    assert mime_type_for("MP3") == "audio/mp3"
    assert mime_type_for(".ogg") == "audio/ogg"
    assert mime_type_for("audio/webm") == "audio/webm"
    assert mime_type_for("aiff") == "audio/mp3"


def test_strip_data_url():
    assert strip_data_url("data:audio/wav;base64,AAAA") == "AAAA"
    assert strip_data_url("AAAA") == "AAAA"


def test_chat_returns_model_text(tmp_path):
    client = ScriptedClient({"chat-a": ["  Bank kabhi OTP nahi mangta.  "]})
    assistant = ChatAssistant(client, make_settings(tmp_path))

    outcome = asyncio.run(assistant.reply("Mera account block ho gaya"))

    assert outcome.reply == "Bank kabhi OTP nahi mangta."
    assert outcome.offline is False
    assert client.calls[0]["prompt"].startswith(ASSISTANT_PROMPT)
    assert client.calls[0]["prompt"].endswith("User: Mera account block ho gaya")
    assert client.calls[0]["attachment_b64"] is None


def test_chat_retries_transient_then_skips_missing_model(tmp_path):
    client = ScriptedClient(
        {
            "chat-a": [ModelPermanentError("404 model not found")],
            "chat-b": [ModelTransientError("429"), "Stay calm."],
        }
    )
    sleep = RecordingSleep()
    assistant = ChatAssistant(
        client,
        make_settings(tmp_path),
        orchestrator=ModelFallbackOrchestrator(sleep=sleep),
    )

    outcome = asyncio.run(assistant.reply("Is this call safe?"))

    assert outcome.reply == "Stay calm."
    assert outcome.model == "chat-b"
    assert client.calls_for("chat-a") == 1
    assert client.calls_for("chat-b") == 2
    assert sleep.pauses == [1.5]


def test_chat_falls_back_to_offline_responder(tmp_path):
    client = ScriptedClient(default=ModelTransientError("quota"))
    sleep = RecordingSleep()
    assistant = ChatAssistant(
        client,
        make_settings(tmp_path),
        orchestrator=ModelFallbackOrchestrator(sleep=sleep),
    )

    outcome = asyncio.run(assistant.reply("Hi, the caller wants my OTP"))

    assert outcome.offline is True
    assert outcome.model is None
    assert outcome.reply == INTENT_RULES[0].reply
    assert len(client.calls) == 6
    assert sleep.pauses == [1.5, 1.5, 1.5]
