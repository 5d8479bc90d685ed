"""Logging setup for create-poly-app."""

import logging
from datetime import datetime
from pathlib import Path

from create_poly_app.config.settings import LoggingSettings

PACKAGE_LOGGER = "create_poly_app"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"


def configure_logging(settings: LoggingSettings, base_dir: Path | None = None) -> logging.Logger:
    """Configure the package logger from settings.

    Args:
        settings: Logging settings (level and enabled sinks).
        base_dir: Directory a relative log file path is resolved against
            (defaults to the current directory).

    Returns:
        The configured package logger.
    """
    level = getattr(logging, settings.level.upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = False

    # Reconfiguring must not stack handlers
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    if settings.file:
        log_path = Path(settings.file_path)
        if not log_path.is_absolute():
            log_path = (base_dir or Path.cwd()) / log_path
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)
        package_logger.info("=" * 20 + f" session {datetime.now().isoformat()} " + "=" * 20)

    if settings.console:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)

    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())

    return package_logger
