"""Turn raw model text into structured results."""

from __future__ import annotations

import json
import re
from typing import Any

from rakshavaani.errors import ParseError
from rakshavaani.schemas import CLASSIFICATIONS, ClassificationResult


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = re.sub(r"^```[a-zA-Z]*\n?", "", cleaned)
        cleaned = re.sub(r"\n?```$", "", cleaned)
    # Models sometimes leave fence markers mid-text.
    cleaned = cleaned.replace("```json", "").replace("```", "")
    return cleaned.strip()


def extract_json_object(text: str) -> dict[str, Any]:
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise ParseError("empty model response", raw_text=text)

    try:
        parsed = json.loads(cleaned)
        if isinstance(parsed, dict):
            return parsed
    except json.JSONDecodeError:
        pass

    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        try:
            parsed = json.loads(cleaned[start : end + 1])
        except json.JSONDecodeError as exc:
            raise ParseError(f"model response is not valid JSON: {exc}", raw_text=text) from exc
        if isinstance(parsed, dict):
            return parsed
    raise ParseError("model response does not contain a JSON object", raw_text=text)


def parse_classification(text: str) -> ClassificationResult:
    """Parse a voice classification answer.

    Out-of-contract values are rejected rather than clamped, so a buggy answer
    sends the fallback chain on to the next model.
    """
    payload = extract_json_object(text)

    classification = payload.get("classification")
    if classification not in CLASSIFICATIONS:
        raise ParseError(f"unknown classification {classification!r}", raw_text=text)

    score = payload.get("confidenceScore")
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ParseError(f"confidenceScore is not a number: {score!r}", raw_text=text)
    if not 0.0 <= float(score) <= 1.0:
        raise ParseError(f"confidenceScore out of range: {score!r}", raw_text=text)

    explanation = payload.get("explanation")
    if not isinstance(explanation, str):
        raise ParseError("explanation is missing", raw_text=text)

    return ClassificationResult(
        classification=classification,
        confidence_score=float(score),
        explanation=explanation.strip(),
    )


def clean_chat_text(text: str) -> str:
    reply = (text or "").strip()
    if not reply:
        raise ParseError("empty chat reply", raw_text=text)
    return reply
