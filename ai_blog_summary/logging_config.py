"""
Logging setup shared by the API server and command-line entry point.
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

from .config.settings import LogLevel

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: Union[LogLevel, str] = LogLevel.INFO,
                  log_file: Optional[str] = None) -> None:
    """Configure root logging.

    Always logs to stdout. The file handler is optional: if the path is not
    writable, logging continues on stdout only.

    Args:
        level: Log level name or LogLevel
        log_file: Optional path of a log file
    """
    if isinstance(level, LogLevel):
        level = level.value

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(str(log_path)))
        except (OSError, PermissionError):
            # File logging not available, use stdout only
            pass

    logging.basicConfig(
        level=str(level).upper(),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def mask_api_key(api_key: Optional[str]) -> str:
    """Keep only a short prefix and suffix of a key for log output."""
    if not api_key:
        return "<not set>"
    if len(api_key) <= 10:
        return "*" * len(api_key)
    return f"{api_key[:5]}...{api_key[-4:]}"
