"""Logging setup for the API process."""

import logging

from kiosk.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # SQL echo is controlled by the engine, keep the driver loggers quiet
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
