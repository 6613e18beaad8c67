"""Logging setup for the cloudback-sync command line."""

from __future__ import annotations

import logging

# Request-level chatter from the HTTP stack, only shown with --verbose.
HTTP_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Send log records to stderr as ``time LEVEL [logger] message``.

    At DEBUG every upsert is traced by the lifecycle, and the HTTP client
    loggers are left alone; at any other level they are held at WARNING.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    http_level = logging.NOTSET if level <= logging.DEBUG else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
