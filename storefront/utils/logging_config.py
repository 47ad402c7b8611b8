# storefront/utils/logging_config.py

"""
Logging setup driven by the monitoring configuration.

The migration reports its progress through the Flask app logger, so the
console handler is what operators watch during a run.
"""

import json
import logging
import os
from logging.handlers import RotatingFileHandler

from flask.logging import default_handler

_HANDLER_MARKER = "_storefront_handler"

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record for log shippers"""

    def format(self, record):
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def _build_formatter(app):
    if app.config.get("LOG_FORMAT", "text") == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(app):
    """
    (Re)configure the app and migration loggers from ``app.config``.

    Safe to call repeatedly; handlers installed by an earlier call are
    replaced.
    """
    level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = _build_formatter(app)

    handlers = []
    if app.config.get("ENABLE_CONSOLE_LOGGING", True):
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        handlers.append(console)

    if app.config.get("ENABLE_FILE_LOGGING", False):
        log_dir = app.config.get("LOG_DIR", "logs")
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, app.config.get("LOG_FILE", "migration.log")),
            maxBytes=app.config.get("LOG_FILE_MAX_BYTES", 10485760),
            backupCount=app.config.get("LOG_FILE_BACKUP_COUNT", 10),
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if app.config.get("ENABLE_CONSOLE_LOGGING", True):
        app.logger.removeHandler(default_handler)

    for logger in (app.logger, logging.getLogger("storefront")):
        for handler in list(logger.handlers):
            if getattr(handler, _HANDLER_MARKER, False):
                logger.removeHandler(handler)
                handler.close()
        for handler in handlers:
            setattr(handler, _HANDLER_MARKER, True)
            logger.addHandler(handler)
        logger.setLevel(level)

    app.logger.debug("Logging configured (level=%s, handlers=%d)", level_name, len(handlers))
