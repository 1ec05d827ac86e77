import logging

from library_api.core.config import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    logging.basicConfig(level=level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    return logging.getLogger("library_api")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"library_api.{name}")
