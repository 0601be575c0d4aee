"""Career assistant backend: Gemini-powered career help actions."""

from .app import create_app
from .config import Settings, load_settings
from .dispatcher import Action, ActionDispatcher, handle_action
from .gemini import FALLBACK_MESSAGE, GeminiClient, GenerationResult, Turn

__all__ = [
    "Action",
    "ActionDispatcher",
    "FALLBACK_MESSAGE",
    "GeminiClient",
    "GenerationResult",
    "Settings",
    "Turn",
    "create_app",
    "handle_action",
    "load_settings",
]
