"""Logging setup shared by the API and the CLI."""

import logging

from trading_journal.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | None = None):
    """Configure the root logger once from settings.log_level."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
        force=True,
    )
    # SQL echo is controlled by the engine, keep sqlalchemy quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
