"""Run the nutrilog API with uvicorn.

Usage:
    python -m nutrilog

Host and port come from ``NUTRILOG_HOST`` / ``NUTRILOG_PORT``
(defaults ``0.0.0.0`` and ``5000``).
"""

import logging

import uvicorn

from .config import settings
from .logging_config import setup_logging


def main() -> None:
    setup_logging(settings.log_level, settings.log_file)
    logging.getLogger(__name__).info("Server starting on port %s", settings.port)
    uvicorn.run(
        "nutrilog.api:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
