from rakshavaani.offline import INTENT_RULES, LOW_POWER_REPLY, OfflineIntentResponder


def _reply(name: str) -> str:
    return next(rule.reply for rule in INTENT_RULES if rule.name == name)


def test_otp_beats_greeting_in_any_case():
    responder = OfflineIntentResponder()

    for text in ("Hello, they asked for my OTP", "NAMASTE otp please", "hi, what is an Otp?"):
        assert responder.respond(text) == _reply("sensitive_credential")


def test_pin_and_cvv_are_credential_requests():
    responder = OfflineIntentResponder()

    assert responder.respond("Caller wants my card CVV") == _reply("sensitive_credential")
    assert responder.respond("Should I tell them my PIN") == _reply("sensitive_credential")


def test_scam_report_beats_safety_question():
    responder = OfflineIntentResponder()

    assert responder.respond("I think this was a fraud, is it safe?") == _reply("scam_report")
    assert "1930" in responder.respond("call the police")


def test_safety_verification_and_identity():
    responder = OfflineIntentResponder()

    assert responder.respond("How do I verify a caller?") == _reply("safety_verification")
    assert responder.respond("Who are you?") == _reply("identity")


def test_greeting():
    assert OfflineIntentResponder().respond("Namaste") == _reply("greeting")


def test_unmatched_input_gets_low_power_notice():
    reply = OfflineIntentResponder().respond("Tell me tomorrow's weather")

    assert reply == LOW_POWER_REPLY
    assert reply.strip()


def test_empty_input_still_gets_reply():
    assert OfflineIntentResponder().respond("") == LOW_POWER_REPLY


def test_low_power_notice_keeps_original_wording():
    assert LOW_POWER_REPLY == (
        "Namaste. I am currently operating in **Low Power Mode** (High Server Traffic). \n    \n    "
        "I can answer basic questions about OTPs, Fraud, and Safety right now. "
        "For complex queries, please wait 1 minute for my connection to restore."
    )
