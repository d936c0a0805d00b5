"""
Logging configuration for CareerBridge API.

Provides structured logging without exposing secrets.
"""
import logging
import re
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = "logs"):
    """
    Configure application logging.
    
    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for the rotating log file. Falsy disables file logging.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()
    
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    logger.addHandler(console_handler)
    
    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path / "careerbridge.log",
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        logger.addHandler(file_handler)
    
    # Quiet chatty third-party loggers
    logging.getLogger("uvicorn").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


_KEY_PARAM = re.compile(r"([?&]key=)[^&]+")


def redact_url(url: str) -> str:
    """Mask the `key` query parameter of a provider URL."""
    return _KEY_PARAM.sub(r"\1***REDACTED***", url)


_SENSITIVE_KEYS = ("password", "token", "secret", "key", "database_url")


def sanitize_log_data(data: dict) -> dict:
    """Copy of `data` with values of secret-looking keys masked."""
    return {
        key: "***REDACTED***" if any(s in key.lower() for s in _SENSITIVE_KEYS) else value
        for key, value in data.items()
    }
