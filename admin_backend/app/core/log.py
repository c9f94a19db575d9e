# app/core/log.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Root logging setup, called once from the app factory."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("admin").setLevel(level.upper())
