"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path


def setup_file_logging(log_dir: Path, level: str = 'DEBUG') -> Path:
    """Configure file-based logging for the `dc` logger tree. Returns the log file path.

    Repeated calls for the same directory reuse the handler but still apply *level*.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / 'deepcure_debug.log'
    root = logging.getLogger('dc')
    root.setLevel(level.upper())
    for existing in root.handlers:
        if isinstance(existing, logging.FileHandler) and Path(existing.baseFilename) == log_path.resolve():
            return log_path
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
    root.addHandler(handler)
    logging.getLogger('dc.app').info('Debug logging started → %s', log_path)
    return log_path
