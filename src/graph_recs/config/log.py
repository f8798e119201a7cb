"""
Logging setup shared by the API host and scripts.
"""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with the service format."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger("gensim").setLevel(logging.WARNING)
