import logging

logger = logging.getLogger("threadrite")
logger.setLevel(logging.INFO)
