"""
Logging configuration.

Importing this module configures the root logger for the whole process.
Modules obtain their own loggers with logging.getLogger(__name__).
"""

import logging
import sys

from transit_gateway.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Send log records to stdout at the given level."""
    logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout)
    logging.getLogger().setLevel(level.upper())

    # Requests are logged by the gateway's own middleware
    logging.getLogger("uvicorn.access").propagate = False


configure_logging()
