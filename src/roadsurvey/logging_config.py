from __future__ import annotations

import logging.config
import os
from pathlib import Path
from typing import Any

import yaml

from roadsurvey.settings import project_root

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _console_config(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"standard": {"format": LOG_FORMAT}},
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def configure_logging(
    logging_config_path: str | Path | None = None,
    *,
    level: str | None = None,
) -> None:
    """Configure logging from `configs/logging.yaml`, or a console default.

    `level` (or ROADSURVEY_LOG_LEVEL) overrides the level of the package logger,
    e.g. DEBUG to see every skipped log entry.
    """

    root = project_root()
    candidate = logging_config_path or os.getenv(
        "ROADSURVEY_LOGGING_CONFIG", "configs/logging.yaml"
    )
    override = (level or os.getenv("ROADSURVEY_LOG_LEVEL") or "").upper() or None

    path = Path(candidate)
    if not path.is_absolute():
        path = root / path
    if not path.exists():
        logging.config.dictConfig(_console_config(override or "INFO"))
        return

    config: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    logging.config.dictConfig(config)
    if override:
        logging.getLogger("roadsurvey").setLevel(override)
        for handler in logging.getLogger("roadsurvey").handlers:
            handler.setLevel(override)
