"""Console logging for the gateway process."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

PACKAGE_LOGGER = "resource_gateway"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the package logger.

    Safe to call more than once: an existing handler is reused.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    if not any(getattr(h, "_resource_gateway", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._resource_gateway = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    logger.debug("Logging is set up.", extra={"level": level})
    return logger
