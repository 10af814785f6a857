"""Logging configuration helpers."""

import logging

# The supabase client logs every HTTP round trip at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(debug: bool = False) -> None:
    """Configure the diet_planner logger with a single stream handler.

    Safe to call more than once; later calls only adjust the level.
    """
    logger = logging.getLogger("diet_planner")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False
