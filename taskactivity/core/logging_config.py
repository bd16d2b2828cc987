import logging

from taskactivity.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = None) -> None:
    """Configure the root logger from LOG_LEVEL"""
    level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
    # SQL echo is noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
