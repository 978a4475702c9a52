import logging
import os


def configure_logging(level=None):
    """Configure root logging; the level defaults to $DATEINPUT_LOG_LEVEL or INFO."""
    if level is None:
        level_name = os.getenv("DATEINPUT_LOG_LEVEL", "INFO").upper()
        level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
