from __future__ import annotations

import datetime as dt
import json
import logging
import os

_LOGGER_INITIALIZED = False


class JsonFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "ts": dt.datetime.fromtimestamp(record.created, dt.timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str | None = None) -> None:
    """Install a single stderr handler on the root logger.

    The level comes from ``level`` if given, otherwise from ``LOG_LEVEL``
    (default WARNING). ``LOG_JSON=true`` switches to one JSON object per line.
    Calling this again only adjusts the level.
    """
    global _LOGGER_INITIALIZED

    level = (level or os.getenv("LOG_LEVEL", "WARNING")).upper()
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, level, logging.WARNING))

    if _LOGGER_INITIALIZED:
        return

    json_mode = os.getenv("LOG_JSON", "false").lower() == "true"

    ch = logging.StreamHandler()
    if json_mode:
        ch.setFormatter(JsonFormatter())
    else:
        ch.setFormatter(logging.Formatter("%(levelname)s [%(name)s] %(message)s"))
    logger.addHandler(ch)

    _LOGGER_INITIALIZED = True


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(name if name else __name__)
