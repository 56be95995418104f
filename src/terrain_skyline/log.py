"""structlog configuration shared by the CLI and the API."""

from __future__ import annotations

import logging
import sys

import structlog

from terrain_skyline.config import LoggingConfig


def configure_logging(cfg: LoggingConfig | None = None) -> None:
    """Route structlog through stdlib logging with a console or JSON renderer."""
    cfg = cfg or LoggingConfig()
    level = getattr(logging, cfg.level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level, force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if cfg.fmt == "json"
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
