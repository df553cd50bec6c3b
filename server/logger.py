import logging

from config import LOG_LEVEL

logger = logging.getLogger("tennis-pong")

if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)

logger.setLevel(LOG_LEVEL)
