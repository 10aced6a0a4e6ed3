"""Logging helpers for the raw mailer."""

import logging

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str = "RawMailer") -> logging.Logger:
    """Return a :class:`logging.Logger` instance.

    Note: handlers are configured once by :func:`configure_logging` in the
    command line entry point, never here, to avoid duplicate output.
    """
    return logging.getLogger(name)


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger for command line use."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        force=True,
    )
