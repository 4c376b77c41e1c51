import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from cssprite_config import cssprite_home

_DEFAULT_LEVEL = os.getenv("CSSPRITE_LOG_LEVEL", "INFO").upper()
_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def log_file() -> Path:
    return cssprite_home() / "logs" / "cssprite.log"


def configure_logging(level: Optional[str] = None) -> Path:
    desired_level = getattr(logging, (level or _DEFAULT_LEVEL).upper(), logging.INFO)
    root = logging.getLogger()
    path = log_file()
    if getattr(configure_logging, "_configured", None) == path:
        root.setLevel(desired_level)
        return path

    path.parent.mkdir(parents=True, exist_ok=True)

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(desired_level)
    formatter = logging.Formatter(_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    file_handler = RotatingFileHandler(path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    configure_logging._configured = path  # type: ignore[attr-defined]
    root.debug("Logging configured. Log file: %s", path)
    return path
