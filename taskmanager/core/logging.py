"""Process-wide logging setup shared by the API and the CLI scripts."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taskmanager.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%SZ"


def configure_logging(settings: "Settings") -> None:
    """Configure the root logger once from LOG_LEVEL; later calls are no-ops."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
