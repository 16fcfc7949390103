"""
Configuration du logging de l'application.
"""
import logging
import sys
from typing import Optional

from config import SETTINGS

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str = "dpe_hub", level: Optional[str] = None) -> logging.Logger:
    """
    Configure le logger racine de l'application (sortie console).

    Streamlit ré-exécute le script à chaque interaction : si le logger a déjà
    des handlers, il est renvoyé tel quel.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    lvl = getattr(logging, (level or SETTINGS.LOG_LEVEL).upper(), logging.INFO)
    logger.setLevel(lvl)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger
