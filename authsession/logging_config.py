"""
Logging configuration with credential redaction
"""

import logging
import logging.config
import re
from typing import Any, Dict

_BEARER_RE = re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE)
_FIELD_RE = re.compile(r"""(["']?(?:token|password)["']?\s*[:=]\s*["']?)[^"',\s}]+""", re.IGNORECASE)

REDACTED = "***"


class TokenRedactionFilter(logging.Filter):
    """Filter masking bearer tokens and password/token fields in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrite the record message with secrets masked. Never drops records."""
        message = record.getMessage()
        redacted = redact(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def redact(text: str) -> str:
    """Mask credential material in ``text``."""
    text = _BEARER_RE.sub(rf"\g<1>{REDACTED}", text)
    return _FIELD_RE.sub(rf"\g<1>{REDACTED}", text)


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with credential redaction."""
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "redaction_filter": {
                "()": TokenRedactionFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            },
            "access": {
                "format": "%(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["redaction_filter"]
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["redaction_filter"]  # Authorization headers can show up in access logs
            }
        },
        "loggers": {
            "uvicorn": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.error": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn.access": {
                "handlers": ["access"],
                "level": level,
                "propagate": False
            },
            "httpx": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            },
            "authsession": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the package logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
