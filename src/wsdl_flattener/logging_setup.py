"""Console logging configuration for command line runs."""

from __future__ import annotations

import logging
import logging.config

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route package logs to stderr at the requested level.

    Records always propagate. When the root logger already has handlers, the
    host owns output and no console handler is attached here, so nothing is
    printed twice.
    """
    level_name = level.upper()
    if level_name not in LOG_LEVELS:
        raise ValueError(f"Unsupported log level: {level}")
    handlers = [] if logging.getLogger().handlers else ["console"]
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "console",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "wsdl_flattener": {
                    "handlers": handlers,
                    "level": level_name,
                    "propagate": True,
                },
            },
        }
    )
