"""
Structured logging setup.

Библиотека никогда не настраивает handlers при импорте:
модули получают logger через get_logger, а приложение
вызывает setup_logging один раз при старте.
"""

import logging
import sys
from typing import Final, Optional

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO", format_string: Optional[str] = None) -> None:
    """
    Настройка логирования для приложения.

    Args:
        level: Уровень логирования (DEBUG, INFO, WARNING, ERROR)
        format_string: Свой формат (если None - DEFAULT_LOG_FORMAT)

    Raises:
        ValueError: Если уровень не известен модулю logging
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format=format_string or DEFAULT_LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def get_logger(name: str) -> logging.Logger:
    """Logger для модуля (обычно name=__name__)."""
    return logging.getLogger(name)
