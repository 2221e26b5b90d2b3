"""Root logger setup for the nutrilog service.

Format and console/file handler layout adapted from AlenaManagerBot's
``event_planner_api/app/core/logging_config.py``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    # No-op once the root logger has handlers; create_app() runs once per test.
    if logging.getLogger().handlers:
        return

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=handlers,
    )
