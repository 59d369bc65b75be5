"""Run log files for the feedsmith CLI."""

import logging
from datetime import datetime
from pathlib import Path

from feedsmith.utils.files import get_logs_path

RUN_LOG_HANDLER = 'feedsmith.run_log'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Chatty at DEBUG and never useful for feed debugging
QUIET_LOGGERS = ('urllib3', 'charset_normalizer')


def _level_from_name(level: str) -> int:
    if level.upper() == 'ALL':
        return logging.NOTSET
    return getattr(logging, level.upper(), logging.DEBUG)


def _run_log_handler(root_logger: logging.Logger) -> logging.FileHandler | None:
    for handler in root_logger.handlers:
        if handler.get_name() == RUN_LOG_HANDLER:
            return handler
    return None


def setup_local_logging(level: str = 'DEBUG') -> Path:
    """Send the root logger to a run log under .feedsmith/logs/.

    Console output stays with the CLI's rich console. Calling this again in
    the same process reuses the open run log and only changes its level.

    Args:
        level: Level name such as 'INFO', or 'ALL' for everything

    Returns:
        Path of the run log.

    """
    numeric_level = _level_from_name(level)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    handler = _run_log_handler(root_logger)
    if handler is None:
        logs_dir = get_logs_path()
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / f'run_{datetime.now():%Y%m%d_%H%M%S}.log'

        handler = logging.FileHandler(log_file, encoding='utf-8')
        handler.set_name(RUN_LOG_HANDLER)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root_logger.addHandler(handler)

        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    handler.setLevel(numeric_level)
    return Path(handler.baseFilename)
