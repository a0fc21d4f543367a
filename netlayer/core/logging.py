"""
Logging for the network layer.

Every module logs through a child of the ``netlayer`` logger, so an
application embedding the layer can tune or silence it in one place.
Handlers installed by ``setup_logging`` mask bearer credentials: a token that
slips into a message, an exception or a formatted header dict is written as
``Bearer ***``.
"""
import logging
import re
import sys
from pathlib import Path
from typing import Optional, Union

ROOT_LOGGER_NAME = "netlayer"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_BEARER_PATTERN = re.compile(r"(Bearer\s+)[^\s'\",}]+", re.IGNORECASE)


def redact_bearer_tokens(text: str) -> str:
    return _BEARER_PATTERN.sub(r"\1***", text)


class BearerTokenRedactionFilter(logging.Filter):
    """Rewrites records so that bearer tokens never reach a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_bearer_tokens(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        if record.exc_info and record.exc_info[1] is not None:
            # Formatted once here so the traceback text can be masked too
            if not record.exc_text:
                record.exc_text = logging.Formatter().formatException(record.exc_info)
            record.exc_text = redact_bearer_tokens(record.exc_text)
        return True


def _level(log_level: str) -> int:
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def setup_logging(log_level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> logging.Logger:
    """
    Attach console (and optionally file) handlers to the package logger.

    Calling it again only updates the level; handlers are installed once.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR
        log_file: File receiving every record, DEBUG included (optional)

    Returns:
        The ``netlayer`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = _level(log_level)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    redaction = BearerTokenRedactionFilter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(redaction)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(redaction)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for ``name``, placed under the package logger if it is not already."""
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
