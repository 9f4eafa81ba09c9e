import logging
import sys
from pathlib import Path
from datetime import datetime
from logging.handlers import RotatingFileHandler
from typing import Optional

from app.core.config import settings


def get_logs_dir() -> Path:
    log_dir = Path(settings.log_dir)
    if not log_dir.is_absolute():
        log_dir = Path(__file__).parent.parent.parent / log_dir
    return log_dir


def setup_logging(level: Optional[str] = None):
    """
    Configure logging for the application.
    Logs are saved to the configured logs/ directory with rotation.
    """
    log_dir = get_logs_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    root_level = logging.getLevelName((level or settings.log_level).upper())
    if not isinstance(root_level, int):
        root_level = logging.INFO

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    simple_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(root_level)
    root_logger.handlers.clear()

    # Console handler (simple format)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(root_level)
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    all_logs_handler = RotatingFileHandler(
        log_dir / "app.log",
        maxBytes=10_000_000,  # 10MB
        backupCount=5
    )
    all_logs_handler.setLevel(root_level)
    all_logs_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(all_logs_handler)

    # Fetch cycles get their own file
    analytics_logger = logging.getLogger("analytics")
    analytics_logger.setLevel(logging.DEBUG)
    analytics_logger.handlers.clear()

    analytics_handler = RotatingFileHandler(
        log_dir / f"analytics_{datetime.now().strftime('%Y%m%d')}.log",
        maxBytes=10_000_000,  # 10MB
        backupCount=10
    )
    analytics_handler.setLevel(logging.DEBUG)
    analytics_handler.setFormatter(detailed_formatter)
    analytics_logger.addHandler(analytics_handler)

    error_handler = RotatingFileHandler(
        log_dir / "errors.log",
        maxBytes=10_000_000,  # 10MB
        backupCount=5
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(detailed_formatter)
    root_logger.addHandler(error_handler)

    logging.info("Logging configured successfully")
    logging.info(f"Logs directory: {log_dir}")

    return root_logger
