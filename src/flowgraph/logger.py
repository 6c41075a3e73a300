import sys
from typing import Optional, TextIO

from loguru import logger as loguru_logger

logger = loguru_logger


def setup_logger(service: str, log_file: Optional[str] = None, level: str = "DEBUG", stream: TextIO = sys.stdout):
    global logger

    logger.remove()
    if log_file:
        logger.add(
            log_file,
            rotation="500 MB",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message} | {extra}",
            level=level
        )

    logger.add(
        stream,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level}</level> | <blue>{message}</blue> | {extra}",
        level=level
    )

    logger = logger.bind(service=service)
    return logger
