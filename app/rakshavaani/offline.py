"""Offline chat replies used when no remote model answers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IntentRule:
    name: str
    keywords: tuple[str, ...]
    reply: str

    def matches(self, lower_text: str) -> bool:
        return any(keyword in lower_text for keyword in self.keywords)


# Priority order: credential-theft warnings must win over greetings.
INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(
        name="sensitive_credential",
        keywords=("opt", "otp", "pin", "cvv"),
        reply=(
            "⚠️ **Security Alert**: That is definitely a scam! \n\n"
            "No bank or official will EVER ask for your OTP, PIN, or Password over the phone.\n\n"
            "**Action:** Hang up immediately. Do not share any code."
        ),
    ),
    IntentRule(
        name="scam_report",
        keywords=("scam", "fraud", "police"),
        reply=(
            "If you have lost money or suspect fraud:\n"
            "1. Call **1930** (Cybercrime Helpline) immediately.\n"
            "2. Report it on **cybercrime.gov.in**.\n"
            "3. Block your bank cards through your banking app."
        ),
    ),
    IntentRule(
        name="safety_verification",
        keywords=("safe", "verify", "check"),
        reply=(
            "It is better to be safe than sorry. \n\n"
            "If you are unsure about a call, **hang up** and call the organization back using the "
            "official number from their website (not the one they gave you)."
        ),
    ),
    IntentRule(
        name="identity",
        keywords=("who are you", "what is this"),
        reply=(
            "Namaste! I am **RakshaVaani**, your AI assistant for voice security. "
            "I listen to call patterns to help protect you from potential scams."
        ),
    ),
    IntentRule(
        name="greeting",
        keywords=("hello", "hi", "namaste"),
        reply="Namaste! I am here to protect you. How can I help you regarding call security today?",
    ),
)

LOW_POWER_REPLY = (
    "Namaste. I am currently operating in **Low Power Mode** (High Server Traffic). \n    \n    "
    "I can answer basic questions about OTPs, Fraud, and Safety right now. "
    "For complex queries, please wait 1 minute for my connection to restore."
)


class OfflineIntentResponder:
    def __init__(self, rules: tuple[IntentRule, ...] = INTENT_RULES, default_reply: str = LOW_POWER_REPLY):
        self._rules = rules
        self._default_reply = default_reply

    def match(self, text: str) -> IntentRule | None:
        lower = (text or "").lower()
        for rule in self._rules:
            if rule.matches(lower):
                return rule
        return None

    def respond(self, text: str) -> str:
        rule = self.match(text)
        return rule.reply if rule else self._default_reply
