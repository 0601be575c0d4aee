class InvalidHistoryError(ValueError):
    """Conversation history that cannot be sent to Gemini as-is."""
