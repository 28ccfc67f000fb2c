"""
Process-wide logging setup.

Stdout only; Gunicorn / the platform captures it. Called once from main.
"""
import logging

from reading_tracker.core.config import settings

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging() -> None:
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=_FORMAT)
    logging.getLogger("reading_tracker").setLevel(level)
