"""Gemini orchestration: one prompt (plus prior turns) in, one displayable text out.

Every backend problem is folded into the returned text so the caller always
has something to show; only local bugs escape as exceptions.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import requests

from .errors import InvalidHistoryError

logger = logging.getLogger(__name__)

USER = "user"
MODEL = "model"
ROLES = (USER, MODEL)

STATUS_OK = "ok"
STATUS_FALLBACK = "fallback"
STATUS_ERROR = "error"

FALLBACK_MESSAGE = "Sorry, I could not produce a clear answer. Could you try rephrasing?"
ERROR_TEMPLATE = "An error occurred while processing your request: {reason}. Please try again."


@dataclass(frozen=True)
class Turn:
    """One utterance in a conversation with Gemini."""

    role: str
    text: str

    def __post_init__(self):
        if self.role not in ROLES:
            raise InvalidHistoryError(f"Unknown turn role: {self.role!r}")
        if not isinstance(self.text, str):
            raise InvalidHistoryError("Turn text must be a string")

    @classmethod
    def from_dict(cls, data):
        """Accepts {"role", "text"} or Gemini's {"role", "parts": [{"text"}]}."""
        if not isinstance(data, dict):
            raise InvalidHistoryError(f"Turn must be an object, got {type(data).__name__}")
        text = data.get("text")
        if text is None:
            parts = data.get("parts") or []
            if not parts or not isinstance(parts[0], dict):
                raise InvalidHistoryError("Turn has neither 'text' nor 'parts'")
            text = parts[0].get("text")
        return cls(role=data.get("role"), text=text)

    def to_dict(self):
        return {"role": self.role, "text": self.text}

    def to_content(self):
        return {"role": self.role, "parts": [{"text": self.text}]}


History = Tuple[Turn, ...]


def parse_history(raw) -> History:
    if not raw:
        return ()
    if isinstance(raw, (str, bytes, dict)):
        raise InvalidHistoryError("History must be a list of turns")
    return tuple(turn if isinstance(turn, Turn) else Turn.from_dict(turn) for turn in raw)


@dataclass(frozen=True)
class GenerationResult:
    text: str
    history: History
    status: str = STATUS_OK

    @property
    def ok(self):
        return self.status == STATUS_OK


def extract_text(payload) -> Optional[str]:
    """Pull candidates[0].content.parts[0].text out of a generateContent reply."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def _error_message(response):
    try:
        payload = response.json()
    except ValueError:
        return None
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return error.get("message")
    return None


class GeminiClient:
    """Sends conversations to the Gemini generateContent endpoint.

    Holds configuration only; conversation state lives with the caller, who
    gets an extended copy of the history back from every call.
    """

    def __init__(self, settings, session=None):
        self.settings = settings
        # Anything with a requests-style post() works; the module itself by default.
        self._http = session if session is not None else requests

    def build_contents(self, prompt_text, history=()):
        """Return the turn sequence for the next call: history plus the new user turn."""
        return tuple(history) + (Turn(USER, prompt_text),)

    def _redact(self, text):
        key = self.settings.gemini_api_key
        return text.replace(key, "***") if key else text

    def generate(self, prompt_text, history=()) -> GenerationResult:
        context = self.build_contents(prompt_text, history)
        payload = {"contents": [turn.to_content() for turn in context]}

        try:
            response = self._http.post(
                self.settings.generate_url,
                # The key travels only in this header, never in the URL
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self.settings.gemini_api_key,
                },
                json=payload,
                timeout=self.settings.gemini_timeout,
            )
        except requests.RequestException as e:
            reason = self._redact(str(e))
            logger.error("Error calling the Gemini API: %s", reason)
            return GenerationResult(ERROR_TEMPLATE.format(reason=reason), context, STATUS_ERROR)

        if not response.ok:
            message = _error_message(response) or "Unknown error"
            logger.error("Gemini API responded with an error: %s %s", response.status_code, message)
            reason = f"Gemini API error: {response.status_code} - {message}"
            return GenerationResult(ERROR_TEMPLATE.format(reason=reason), context, STATUS_ERROR)

        try:
            result = response.json()
        except ValueError:
            result = None

        text = extract_text(result)
        if text is None:
            logger.warning("Gemini response did not contain the expected text: %r", result)
            return GenerationResult(FALLBACK_MESSAGE, context, STATUS_FALLBACK)

        return GenerationResult(text, context + (Turn(MODEL, text),), STATUS_OK)
