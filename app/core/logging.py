"""
Process-wide logging setup
"""
import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = {
    "uvicorn.access": logging.WARNING,
    "sqlalchemy.engine": logging.WARNING,
    "botocore": logging.WARNING,
    "boto3": logging.WARNING,
}


def setup_logging() -> None:
    """
    Send every log record to stdout at settings.LOG_LEVEL

    Modules log through logging.getLogger(__name__); nothing else needs
    configuring per module.
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name, level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).info(
        "Logging configured: level=%s, env=%s", settings.LOG_LEVEL, settings.APP_ENV
    )
