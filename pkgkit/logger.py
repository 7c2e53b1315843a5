"""
Unified Logging System

Provides centralized logging for PkgKit with:
- Console output split by level (status on stdout, failures on stderr)
- Optional rotating log file
- Configurable log levels and formats
- Colorized console output
"""

import sys
import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Dict

from colorama import Fore, Style

from .env import env


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for console output"""

    COLORS = {
        'DEBUG': Fore.CYAN,
        'INFO': '',  # No color for INFO logs (black/default)
        'WARNING': Fore.YELLOW,
        'ERROR': Fore.RED,
        'CRITICAL': Fore.RED + Style.BRIGHT,
    }

    def format(self, record):
        formatted = super().format(record)

        color = self.COLORS.get(record.levelname, '')
        if not color:
            return formatted
        return f"{color}{formatted}{Style.RESET_ALL}"


class ConsoleHandler(logging.StreamHandler):
    """
    Stream handler bound to sys.stdout or sys.stderr at emit time.

    Looking the stream up lazily keeps output capture (pytest, click's
    CliRunner) working for loggers created before the capture started.
    """

    def __init__(self, use_stderr: bool = False):
        self._use_stderr = use_stderr
        super().__init__()

    @property
    def stream(self):
        return sys.stderr if self._use_stderr else sys.stdout

    @stream.setter
    def stream(self, value):
        pass


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record):
        return record.levelno < self.level


class PkgKitLogger:
    """Unified logger for PkgKit"""

    _loggers: Dict[str, logging.Logger] = {}
    _initialized: bool = False
    _log_dir: Optional[Path] = None

    @classmethod
    def _parse_size(cls, size_str: str) -> int:
        """Parse size string like '10MB' to bytes"""
        size_str = size_str.upper().strip()
        multipliers = {
            'KB': 1024,
            'MB': 1024 * 1024,
            'GB': 1024 * 1024 * 1024,
            'B': 1,
        }

        for suffix, multiplier in multipliers.items():
            if size_str.endswith(suffix):
                number_str = size_str[:-len(suffix)].strip()
                try:
                    return int(float(number_str) * multiplier)
                except ValueError:
                    pass

        # Default to 10MB if parsing fails
        return 10 * 1024 * 1024

    @classmethod
    def initialize(cls, log_dir: Optional[str] = None,
                   console_level: Optional[str] = None,
                   file_level: Optional[str] = None,
                   console_simple_format: Optional[bool] = None,
                   file_enabled: Optional[bool] = None) -> None:
        """Initialize the logging system with environment variable support"""
        if cls._initialized:
            return

        cls._log_dir = Path(log_dir) if log_dir else Path(env.logs_dir)

        cls._console_level = getattr(logging, (console_level or env.log_level).upper())
        cls._file_level = getattr(logging, (file_level or env.log_file_level).upper())
        cls._console_simple_format = (console_simple_format
            if console_simple_format is not None else env.log_simple_format)
        cls._file_enabled = file_enabled if file_enabled is not None else env.log_file_enabled

        cls._initialized = True

    @classmethod
    def reset(cls) -> None:
        """Forget cached loggers so the next call re-reads configuration"""
        cls._loggers.clear()
        cls._initialized = False
        cls._log_dir = None

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        """
        Get or create a logger instance

        Args:
            name: Logger name (usually module name)

        Returns:
            Configured logger instance
        """
        if not cls._initialized:
            cls.initialize()

        if name in cls._loggers:
            return cls._loggers[name]

        logger = logging.getLogger(name)
        logger.handlers.clear()

        if cls._console_simple_format:
            console_formatter = ColoredFormatter('%(message)s')
        else:
            console_formatter = ColoredFormatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                datefmt='%H:%M:%S'
            )

        stdout_handler = ConsoleHandler()
        stdout_handler.setLevel(cls._console_level)
        stdout_handler.addFilter(_BelowLevelFilter(logging.WARNING))
        stdout_handler.setFormatter(console_formatter)
        logger.addHandler(stdout_handler)

        stderr_handler = ConsoleHandler(use_stderr=True)
        stderr_handler.setLevel(max(cls._console_level, logging.WARNING))
        stderr_handler.setFormatter(console_formatter)
        logger.addHandler(stderr_handler)

        if cls._file_enabled:
            cls._log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                cls._log_dir / 'pkgkit.log',
                maxBytes=cls._parse_size(env.log_max_size),
                backupCount=env.log_max_files,
                encoding='utf-8'
            )
            file_handler.setLevel(cls._file_level)
            file_handler.setFormatter(logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
            ))
            logger.addHandler(file_handler)

        # Lowest level any handler accepts; isEnabledFor() is false below it
        logger.setLevel(min(handler.level for handler in logger.handlers))

        # Prevent propagation to avoid duplicate logs
        logger.propagate = False

        cls._loggers[name] = logger
        return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance

    Example:
        logger = get_logger(__name__)
    """
    return PkgKitLogger.get_logger(name)


def setup_logging(log_dir: Optional[str] = None,
                  console_level: Optional[str] = None,
                  file_level: Optional[str] = None,
                  console_simple_format: Optional[bool] = None,
                  file_enabled: Optional[bool] = None) -> None:
    """
    Initialize the logging system with environment variable support

    Example:
        setup_logging()  # Use all environment defaults
        setup_logging(console_level='DEBUG')
    """
    PkgKitLogger.initialize(log_dir, console_level, file_level, console_simple_format, file_enabled)
