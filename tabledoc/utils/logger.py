"""
Logging setup shared by the documentation pipeline
"""

import logging
import os


def get_logger(name: str) -> logging.Logger:
    """Return a named logger with a single stream handler"""
    logger = logging.getLogger(name)
    logger.setLevel(os.getenv('TABLEDOC_LOG_LEVEL', 'INFO').upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
