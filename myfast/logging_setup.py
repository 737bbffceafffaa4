import os
import sys

from loguru import logger


def setup_logging(config=None) -> None:
    if config is None:
        from myfast.config import settings as config

    log_dir = os.path.dirname(config.log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, level=config.log_level)
    logger.add(config.log_path, rotation="10 MB", level=config.log_level)
