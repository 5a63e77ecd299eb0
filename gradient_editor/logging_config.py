from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

_LOGGING_INITIALIZED = False

LOG_FILE_PREFIX = "gradient_editor_"


class _SuppressPointerChatterFilter(logging.Filter):
    """Filter out per-event pointer messages that flood the log during a drag."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        return not (
            message.startswith("Dropped pointer-")
            or message.startswith("Ignored pointer-down")
            or "ignored unknown stop" in message
        )


def _cleanup_old_logs(log_dir: Path, keep_count: int = 5) -> None:
    """Delete old log files, keeping the most recent keep_count."""
    log_files = sorted(log_dir.glob(f"{LOG_FILE_PREFIX}*.log"),
                       key=lambda path: path.stat().st_mtime, reverse=True)

    for old_log in log_files[keep_count:]:
        try:
            old_log.unlink()
        except OSError as e:
            logging.getLogger(__name__).warning(f"Failed to delete old log file {old_log.name}: {e}")


def init_logging(log_dir: Optional[Path] = None,
                 file_level: str = "INFO",
                 console_level: str = "WARNING",
                 keep_count: int = 5) -> Optional[Path]:
    """
    Initialize process-wide logging:
    - log directory: logs/ under the working directory unless given
    - log file: gradient_editor_YYYYMMDD_HHMMSS.log
    - levels: INFO to the file, WARNING to the console by default

    Returns:
        Path of the log file, or None when logging was already initialized
    """
    global _LOGGING_INITIALIZED
    if _LOGGING_INITIALIZED:
        return None

    log_dir = Path(log_dir) if log_dir is not None else Path.cwd() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    _cleanup_old_logs(log_dir, keep_count=keep_count)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"{LOG_FILE_PREFIX}{timestamp}.log"

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(log_file, encoding="utf-8", mode='a')
    file_handler.setLevel(file_level.upper())
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_level.upper())
    console_handler.setFormatter(formatter)

    chatter_filter = _SuppressPointerChatterFilter()
    file_handler.addFilter(chatter_filter)
    console_handler.addFilter(chatter_filter)

    root_logger = logging.getLogger()
    root_logger.setLevel(min(file_handler.level, console_handler.level))
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # matplotlib font and backend discovery is noisy at INFO
    logging.getLogger("matplotlib").setLevel(logging.WARNING)

    _LOGGING_INITIALIZED = True
    logging.getLogger(__name__).info(f"Logging initialized: {log_file}")
    return log_file
