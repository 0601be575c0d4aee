import logging

import pytest
import requests

from career_assistant.config import Settings
from career_assistant.errors import InvalidHistoryError
from career_assistant.gemini import (
    FALLBACK_MESSAGE,
    MODEL,
    STATUS_ERROR,
    STATUS_FALLBACK,
    USER,
    GeminiClient,
    Turn,
    parse_history,
)
from conftest import FakeResponse, FakeSession, gemini_reply


def test_generate_returns_text_and_extended_history(gemini, session):
    result = gemini.generate("Tell me a joke")

    assert result.ok
    assert result.text == "Hello there"
    assert result.history == (Turn(USER, "Tell me a joke"), Turn(MODEL, "Hello there"))
    assert session.sent_contents == [[{"role": "user", "parts": [{"text": "Tell me a joke"}]}]]


def test_generate_posts_to_configured_model_with_key(gemini, session):
    gemini.generate("hi")

    call = session.calls[0]
    assert call["url"] == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-test:generateContent"
    )
    assert call["headers"]["x-goog-api-key"] == "test-key"
    assert "params" not in call
    assert "test-key" not in call["url"]
    assert call["timeout"] is None
    assert set(call["json"]) == {"contents"}


def test_empty_prompt_is_passed_through(gemini, session):
    gemini.generate("")

    assert session.sent_prompts == [""]


def test_zero_candidates_returns_fallback(settings):
    client = GeminiClient(settings, session=FakeSession(FakeResponse(200, {"candidates": []})))

    result = client.generate("hi")

    assert result.text == FALLBACK_MESSAGE
    assert result.status == STATUS_FALLBACK
    assert result.history == (Turn(USER, "hi"),)


@pytest.mark.parametrize("payload", [
    {},
    {"candidates": [{"content": {"parts": []}}]},
    {"candidates": [{"finishReason": "SAFETY"}]},
    ["not", "a", "dict"],
])
def test_malformed_payloads_return_fallback(settings, payload):
    client = GeminiClient(settings, session=FakeSession(FakeResponse(200, payload)))

    assert client.generate("hi").text == FALLBACK_MESSAGE


def test_non_json_success_body_returns_fallback(settings, no_json):
    client = GeminiClient(settings, session=FakeSession(FakeResponse(200, no_json)))

    assert client.generate("hi").status == STATUS_FALLBACK


def test_rejected_call_embeds_upstream_message(settings):
    reply = FakeResponse(500, {"error": {"message": "quota exceeded"}})
    client = GeminiClient(settings, session=FakeSession(reply))

    result = client.generate("hi")

    assert "quota exceeded" in result.text
    assert "500" in result.text
    assert result.status == STATUS_ERROR
    assert result.history == (Turn(USER, "hi"),)


def test_rejected_call_without_error_payload_uses_generic_message(settings, no_json):
    client = GeminiClient(settings, session=FakeSession(FakeResponse(403, no_json)))

    result = client.generate("hi")

    assert "Unknown error" in result.text
    assert result.status == STATUS_ERROR


def test_network_failure_is_returned_as_text(settings, connection_error):
    client = GeminiClient(settings, session=FakeSession(connection_error))

    result = client.generate("hi")

    assert "Connection refused" in result.text
    assert result.status == STATUS_ERROR


def test_network_failure_never_exposes_api_key(caplog):
    settings = Settings(gemini_api_key="SECRET-KEY-123")
    error = requests.ConnectionError(
        "HTTPSConnectionPool(host='generativelanguage.googleapis.com', port=443): "
        "Max retries exceeded with url: "
        "/v1beta/models/gemini-2.0-flash:generateContent?key=SECRET-KEY-123"
    )
    client = GeminiClient(settings, session=FakeSession(error))

    with caplog.at_level(logging.ERROR, logger="career_assistant"):
        result = client.generate("hi")

    assert result.status == STATUS_ERROR
    assert "Max retries exceeded" in result.text
    assert "SECRET-KEY-123" not in result.text
    assert "SECRET-KEY-123" not in caplog.text


def test_history_is_not_mutated(gemini):
    history = [Turn(USER, "first"), Turn(MODEL, "reply")]

    result = gemini.generate("second", history)

    assert history == [Turn(USER, "first"), Turn(MODEL, "reply")]
    assert result.history[:2] == tuple(history)


def test_second_call_carries_first_reply_as_model_turn(settings):
    session = FakeSession(
        FakeResponse(200, gemini_reply("reply1")),
        FakeResponse(200, gemini_reply("reply2")),
    )
    client = GeminiClient(settings, session=session)

    first = client.generate("question1")
    client.generate("question2", first.history)

    assert session.sent_contents[1] == [
        {"role": "user", "parts": [{"text": "question1"}]},
        {"role": "model", "parts": [{"text": "reply1"}]},
        {"role": "user", "parts": [{"text": "question2"}]},
    ]


def test_turn_from_dict_accepts_both_wire_shapes():
    assert Turn.from_dict({"role": "user", "text": "a"}) == Turn(USER, "a")
    assert Turn.from_dict({"role": "model", "parts": [{"text": "b"}]}) == Turn(MODEL, "b")


@pytest.mark.parametrize("raw", [
    [{"role": "assistant", "text": "x"}],
    [{"role": "user"}],
    ["just a string"],
    "not a list",
])
def test_parse_history_rejects_bad_turns(raw):
    with pytest.raises(InvalidHistoryError):
        parse_history(raw)


def test_parse_history_empty():
    assert parse_history(None) == ()
    assert parse_history([]) == ()
