import logging
import os
import time
from logging.handlers import RotatingFileHandler

from scheduler.core.config import GetBoolEnv, GetEnv, GetIntEnv


class LocalTimeFormatter(logging.Formatter):
    converter = time.localtime


def setup_logging() -> None:
    log_level = (GetEnv("LOG_LEVEL", "INFO") or "INFO").upper()
    log_file_path = GetEnv("LOG_FILE_PATH", "logs/backend.log")
    max_bytes = GetIntEnv("LOG_MAX_BYTES", 5000000)
    backup_count = GetIntEnv("LOG_BACKUP_COUNT", 5)
    file_enabled = GetBoolEnv("LOG_FILE_ENABLED", True)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    formatter = LocalTimeFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if file_enabled:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file_path, maxBytes=max_bytes, backupCount=backup_count
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Request lines come from our own middleware.
    logging.getLogger("uvicorn.access").handlers.clear()
