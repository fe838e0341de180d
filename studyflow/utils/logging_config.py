"""Logging configuration."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import colorlog


CONSOLE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-12s | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Configure the root logger from the `logging` config section."""
    config = config or {}
    level = getattr(logging, str(config.get('level', 'INFO')).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove default handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    if config.get('console_color', True):
        console_handler.setFormatter(colorlog.ColoredFormatter(
            fmt='%(log_color)s' + CONSOLE_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            },
        ))
    else:
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    log_file = config.get('log_file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=int(config.get('max_file_size_mb', 5)) * 1024 * 1024,
            backupCount=int(config.get('backup_count', 3)),
            encoding='utf-8',
        )
        file_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    return root_logger
