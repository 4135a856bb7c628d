"""
Logging Configuration
"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# Chatty third-party loggers
QUIET_LOGGERS = ("urllib3", "werkzeug")


def configure_logging(level: str = "INFO") -> None:
    """
    Install a stream handler on the root logger and set its level.

    Handlers already installed on the root logger are left alone, so the
    call is safe to repeat.

    Args:
        level: Log level name for the application loggers
    """
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
