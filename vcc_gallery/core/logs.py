# vcc_gallery/core/logs.py
# Console + optional rotating file logging for the gallery server.

from __future__ import annotations
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
import json
import logging
import logging.handlers

LOGGER_NAME = "vcc_gallery"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "msg": record.getMessage(),
            "name": record.name,
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str = "INFO", logs_dir: Optional[Path] = None,
                  json_logs: bool = False) -> logging.Logger:
    """
    Console always; file only when logs_dir is set.
      - console: "%(levelname)s %(name)s: %(message)s"
      - file:    timestamped text, or one JSON object per line with json_logs
    Re-running replaces the handlers, so tests and the CLI can call it freely.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(ch)

    if logs_dir:
        logs_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.handlers.TimedRotatingFileHandler(
            logs_dir / "gallery.log", when="midnight", backupCount=14, encoding="utf-8"
        )
        if json_logs:
            fh.setFormatter(JsonFormatter())
        else:
            fh.setFormatter(logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            ))
        logger.addHandler(fh)
        logger.debug(f"Log file: {logs_dir / 'gallery.log'}")

    return logger
