import logging
import sys

LOGGER_NAME = "career_assistant"
_CONFIGURED_ATTR = "_career_assistant_handler"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _parse_level(raw):
    return getattr(logging, str(raw).strip().upper(), logging.INFO)


def configure_logging(level="INFO"):
    """Attach a stdout handler to the package logger. Safe to call repeatedly."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_parse_level(level))

    if not any(getattr(handler, _CONFIGURED_ATTR, False) for handler in logger.handlers):
        handler = logging.StreamHandler(stream=sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        setattr(handler, _CONFIGURED_ATTR, True)
        logger.addHandler(handler)

    return logger
