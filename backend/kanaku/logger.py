"""
Logging setup for Kanaku360.

Console logging is always on; file logging (one file per day) is enabled
with ENABLE_FILE_LOGGING.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from kanaku.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(enable_file: Optional[bool] = None, level: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``kanaku`` logger hierarchy.

    Args:
        enable_file: Log to a dated file under LOG_DIR. None means use settings.
        level: Logging level name. None means use settings.LOG_LEVEL.
    """
    if enable_file is None:
        enable_file = settings.ENABLE_FILE_LOGGING
    level_name = (level or settings.LOG_LEVEL).upper()

    logger = logging.getLogger("kanaku")
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT)

    # Avoid duplicate handlers if setup_logging() is called again (reload, tests)
    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
               for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if enable_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"kanaku_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
