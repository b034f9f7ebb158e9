"""
Logging configuration for the application.
"""
import logging
import sys


class ColoredFormatter(logging.Formatter):
    """Custom formatter with log levels."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record with colors."""
        color = self.COLORS.get(record.levelname, self.RESET)
        record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    Set up a logger.

    Args:
        name: Logger name
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)

    formatter = ColoredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)

    logger.addHandler(handler)
    return logger


app_logger = setup_logger("stelluna")


def format_event_fields(fields: dict) -> str:
    """Render event fields as key=value pairs, skipping empty values."""
    return " ".join(f"{key}={value}" for key, value in fields.items() if value is not None)


def log_ai_event(event_type: str, **fields) -> None:
    """
    Write one structured line for an AI call.

    Args:
        event_type: "ai_response" or "ai_error"
        **fields: model, userId, promptLength, responseLength, durationMs, errorMessage
    """
    level = logging.ERROR if event_type == "ai_error" else logging.INFO
    app_logger.log(level, f"AI Event [{event_type}] {format_event_fields(fields)}")
