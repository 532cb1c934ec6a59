"""
Logging setup. Modules log through logging.getLogger(__name__); this configures
the "storefront" logger tree once at startup from settings.LOG_LEVEL.
"""
import logging
import sys

from storefront.core.config import settings

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s | %(message)s"


def setup_logging(level: str | None = None) -> logging.Logger:
    logger = logging.getLogger("storefront")
    level_name = (level or settings.LOG_LEVEL).upper()
    if settings.ENV.lower() == "development" and level is None:
        level_name = "DEBUG"
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.propagate = False
    return logger
