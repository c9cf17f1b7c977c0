"""
Basic logging configuration for the application.

``setup_logging`` configures the root logger with a console handler.
Log format includes the timestamp, logger name, log level and message.
Calling it more than once is a no-op, so ``create_app`` can run
repeatedly (tests) without stacking handlers.
"""

import logging


def setup_logging(level: str = "INFO") -> None:
    """Configure root logger once.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    """
    logger = logging.getLogger()
    if logger.handlers:
        return

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
