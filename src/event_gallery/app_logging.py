"""Logging configuration helpers."""

import logging

_QUIET_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the package logger and mute SDK chatter.

    Supabase and the extractor client both go through httpx, which logs every
    request at INFO.
    """
    logger = logging.getLogger("event_gallery")
    logger.setLevel(level.upper())
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
