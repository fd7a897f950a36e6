from __future__ import annotations

import logging.config
import os
from pathlib import Path
from typing import Any, Optional

import yaml

from trafficcams.settings import project_root


def _console_config(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s"}
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "stream": "ext://sys.stderr",
            }
        },
        "root": {"level": level, "handlers": ["console"]},
    }


def configure_logging(
    logging_config_path: str | Path | None = None, level: Optional[str] = None
) -> None:
    """Configure logging from YAML (or a stderr console fallback).

    `level` (or TRAFFICCAMS_LOG_LEVEL) overrides the root level from either source.
    """

    root = project_root()
    candidate = logging_config_path or os.getenv(
        "TRAFFICCAMS_LOGGING_CONFIG", "configs/logging.yaml"
    )
    override = (level or os.getenv("TRAFFICCAMS_LOG_LEVEL") or "").strip().upper() or None

    path = Path(candidate)
    if not path.is_absolute():
        path = root / path
    if not path.exists():
        config = _console_config(override or "INFO")
    else:
        config = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        if override:
            config.setdefault("root", {})["level"] = override

    logging.config.dictConfig(config)
