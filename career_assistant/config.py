import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_PORT = 3000


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, built once at startup and passed down explicitly."""

    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_MODEL
    gemini_api_base: str = DEFAULT_API_BASE
    # None means no timeout: the call blocks until Gemini answers or fails.
    gemini_timeout: Optional[float] = None
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @property
    def generate_url(self):
        return f"{self.gemini_api_base.rstrip('/')}/models/{self.gemini_model}:generateContent"


def _optional_float(raw):
    if raw is None or not raw.strip():
        return None
    return float(raw)


def load_settings(environ=None, dotenv=True):
    """Build Settings from the environment (and a .env file, if present)."""
    if dotenv:
        load_dotenv()
    env = os.environ if environ is None else environ

    return Settings(
        gemini_api_key=env.get("GEMINI_API_KEY", ""),
        gemini_model=env.get("GEMINI_MODEL") or DEFAULT_MODEL,
        gemini_api_base=env.get("GEMINI_API_BASE") or DEFAULT_API_BASE,
        gemini_timeout=_optional_float(env.get("GEMINI_TIMEOUT")),
        port=int(env.get("PORT") or DEFAULT_PORT),
        log_level=env.get("LOG_LEVEL") or "INFO",
    )
