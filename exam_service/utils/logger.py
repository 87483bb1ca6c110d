import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from exam_service.core.config import settings

AUDIT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str, log_file: Optional[str] = None) -> logging.Logger:
    """Standalone audit logger, e.g. one line per exam paper upload.

    Writes to stdout and, when ``log_file`` is given, to a rotating file under
    ``settings.LOG_DIR``. Calling it twice for the same name reuses the
    handlers already attached.
    """
    logger = logging.getLogger(name)
    logger.setLevel(settings.LOG_LEVEL)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(AUDIT_FORMAT)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(log_dir / log_file, maxBytes=10485760, backupCount=5))

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger
