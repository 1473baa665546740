"""
Logging configuration for the FXBank services.

<FXBANK_LOG_DIR>/fxbank.log      everything under the "fxbank" logger
<FXBANK_LOG_DIR>/transfers.log   balance mutations and transfer outcomes only

Warnings and above are mirrored to the console.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional, Union

from . import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5

# logger name -> file it additionally writes to
AUDIT_LOGGERS: Dict[str, str] = {
    "fxbank.transfer.service": "transfers.log",
    "fxbank.db.store": "transfers.log",
}


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, DATE_FORMAT)


def _rotating_handler(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(_formatter())
    return handler


def setup_logging(log_dir: Optional[Union[str, Path]] = None, level: Optional[str] = None) -> None:
    """
    Configure the fxbank logger tree. Safe to call more than once; handlers
    from a previous call are replaced.
    """
    numeric_level = getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO)

    target_dir = Path(log_dir or config.LOG_DIR)
    target_dir.mkdir(parents=True, exist_ok=True)

    logging.getLogger().setLevel(numeric_level)

    app_logger = logging.getLogger("fxbank")
    app_logger.setLevel(numeric_level)
    app_logger.handlers = []
    app_logger.addHandler(_rotating_handler(target_dir / "fxbank.log", numeric_level))

    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(_formatter())
    app_logger.addHandler(console)

    audit_handlers: Dict[str, RotatingFileHandler] = {}
    for name, filename in AUDIT_LOGGERS.items():
        if filename not in audit_handlers:
            audit_handlers[filename] = _rotating_handler(target_dir / filename, numeric_level)
        audit_logger = logging.getLogger(name)
        audit_logger.handlers = [audit_handlers[filename]]

    app_logger.debug("Logging configured dir=%s level=%s", target_dir, logging.getLevelName(numeric_level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
