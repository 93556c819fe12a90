"""Configuration du système de logging centralisé."""

import logging
import logging.handlers
from pathlib import Path
from typing import NamedTuple, Optional

from rich.logging import RichHandler

from app.core.settings import Settings, get_settings

GENERIC_LOGGER = "tasks.generic"
ERROR_LOGGER = "tasks.errors"
ACCESS_LOGGER = "tasks.access"


class Loggers(NamedTuple):
    generic: logging.Logger
    errors: logging.Logger
    access: logging.Logger


def _daily_file_handler(path: Path, retention_days: int, formatter: logging.Formatter) -> logging.Handler:
    """Handler fichier avec rotation à minuit (suffixe `%Y-%m-%d`)."""
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=path,
        when="midnight",
        interval=1,
        backupCount=retention_days,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setFormatter(formatter)
    return handler


def setup_logging(settings: Settings) -> Loggers:
    """Configure le logging selon l'environnement.

    Description:
        - production : fichiers `app.log`, `errors.log`, `access.log` dans `log_dir`,
          rotation quotidienne, conservation `log_retention_days` jours
        - sinon : console via `RichHandler`

    Returns:
        Loggers: (generic, errors, access)
    """
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.DEBUG

    generic_logger = logging.getLogger(GENERIC_LOGGER)
    error_logger = logging.getLogger(ERROR_LOGGER)
    access_logger = logging.getLogger(ACCESS_LOGGER)

    generic_logger.setLevel(level)
    error_logger.setLevel(logging.ERROR)
    access_logger.setLevel(logging.INFO)

    if settings.is_production:
        logs_dir = Path(settings.log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        targets = [
            (generic_logger, "app.log"),
            (error_logger, "errors.log"),
            (access_logger, "access.log"),
        ]
        for logger, filename in targets:
            if not logger.handlers:  # Éviter les doublons
                logger.addHandler(_daily_file_handler(logs_dir / filename, settings.log_retention_days, formatter))
            logger.propagate = False
    else:
        for logger in (generic_logger, error_logger, access_logger):
            if not logger.handlers:
                logger.addHandler(RichHandler(rich_tracebacks=True, show_path=False))
            logger.propagate = False

    return Loggers(generic_logger, error_logger, access_logger)


# Instance globale (lazy initialization)
_loggers: Optional[Loggers] = None


def get_loggers() -> Loggers:
    """Retourne les loggers configurés (singleton)."""
    global _loggers
    if _loggers is None:
        _loggers = setup_logging(get_settings())
    return _loggers
