"""Logging setup shared by the API process and the CLI scripts."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from evalboard.core.config import settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] {service} %(name)s: %(message)s"

_configured = False


def setup_logging(to_file: bool = None) -> None:
    """Configure root logging with console and rotating file handlers."""
    global _configured
    if _configured:
        return

    if to_file is None:
        to_file = settings.LOG_TO_FILE

    formatter = logging.Formatter(LOG_FORMAT.format(service=settings.SERVICE_NAME))
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if to_file:
        log_dir = Path(settings.LOG_DIRECTORY)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / f"{settings.SERVICE_NAME}.log",
            maxBytes=settings.LOG_MAX_BYTES,
            backupCount=settings.LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # SQL echo is controlled by SQL_ECHO; keep the engine logger quiet otherwise
    if not settings.SQL_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).info(f"Logging configured for {settings.SERVICE_NAME}")
