"""
Logging configuration for the nodebatch CLI.

Logs go to stderr so that stdout carries nothing but script console output.
"""

import logging
import logging.config
from typing import Any, Dict


def get_logging_config(level: str = "WARNING") -> Dict[str, Any]:
    """Get logging configuration for the given nodebatch log level."""
    level = level.upper()
    # httpx logs every request at INFO; only surface it when debugging
    http_level = "DEBUG" if level == "DEBUG" else "WARNING"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stderr"
            }
        },
        "loggers": {
            "nodebatch": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "httpx": {
                "handlers": ["default"],
                "level": http_level,
                "propagate": False
            },
            "httpcore": {
                "handlers": ["default"],
                "level": http_level,
                "propagate": False
            }
        },
        "root": {
            "level": "WARNING",
            "handlers": ["default"]
        }
    }


def setup_logging(level: str = "WARNING") -> None:
    """Apply the nodebatch logging configuration."""
    if not isinstance(logging.getLevelName(level.upper()), int):
        raise ValueError(f"Unknown log level '{level}'")
    logging.config.dictConfig(get_logging_config(level))
