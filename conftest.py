import pytest
import requests

from career_assistant.config import Settings
from career_assistant.gemini import GeminiClient

_NO_JSON = object()


def gemini_reply(text):
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    """Stands in for requests: records every post() and replays queued replies."""

    def __init__(self, *replies):
        self.replies = list(replies) or [FakeResponse(200, gemini_reply("Hello there"))]
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def sent_contents(self):
        return [call["json"]["contents"] for call in self.calls]

    @property
    def sent_prompts(self):
        return [contents[-1]["parts"][0]["text"] for contents in self.sent_contents]


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", gemini_model="gemini-test", log_level="DEBUG")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def gemini(settings, session):
    return GeminiClient(settings, session=session)


@pytest.fixture
def no_json():
    return _NO_JSON


@pytest.fixture
def connection_error():
    return requests.ConnectionError("Connection refused")
