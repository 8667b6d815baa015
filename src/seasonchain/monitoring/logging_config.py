# File: src/seasonchain/monitoring/logging_config.py

import logging
import logging.handlers
import os
from datetime import datetime
from typing import List, Optional

class LogConfig:
    """Rotating file log plus console output for a season node.

    Calling :meth:`setup_logging` again replaces the handlers it installed
    earlier instead of stacking duplicates on the root logger.
    """

    def __init__(
        self,
        log_dir: str = "logs",
        max_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
        level: str = "INFO",
        file_prefix: str = "seasonchain",
        access_log_level: Optional[str] = "WARNING"
    ):
        self.log_dir = log_dir
        self.max_size = max_size
        self.backup_count = backup_count
        self.level = self._level(level)
        self.file_prefix = file_prefix
        self.access_log_level = self._level(access_log_level) if access_log_level else None
        self._handlers: List[logging.Handler] = []

        os.makedirs(log_dir, exist_ok=True)

    @staticmethod
    def _level(level) -> int:
        if isinstance(level, str):
            value = logging.getLevelName(level.upper())
            if not isinstance(value, int):
                raise ValueError(f"Unknown log level: {level}")
            return value
        return level

    def log_file(self) -> str:
        return os.path.join(
            self.log_dir,
            f'{self.file_prefix}_{datetime.now().strftime("%Y%m%d")}.log'
        )

    def setup_logging(self) -> str:
        """Install handlers on the root logger and return the log file path"""
        root_logger = logging.getLogger()
        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()

        log_file = self.log_file()
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=self.max_size,
            backupCount=self.backup_count
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - %(message)s'))
        console_handler.setLevel(self.level)

        root_logger.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)
        self._handlers = [file_handler, console_handler]

        # Per-request lines from the HTTP server drown out block logs
        if self.access_log_level is not None:
            logging.getLogger("uvicorn.access").setLevel(self.access_log_level)

        return log_file
