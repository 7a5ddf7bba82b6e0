"""
Base Logger Factory - Generische Logger-Erstellung
Wird von Modul-spezifischen Loggern verwendet (bank_registry, etc.)
Funktioniert auch ohne DB-Verbindung.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from config.settings import LOG_DIR


def create_module_logger(
    module_name: str,
    log_subdir: str,
    console_level: int = logging.ERROR,
    file_level: int = logging.INFO,
    file_name: str = None,
    log_dir: Optional[Path] = None
) -> logging.Logger:
    """
    Generische Logger Factory für Module

    Args:
        module_name: Name des Loggers (z.B. 'BANK_REGISTRY')
        log_subdir: Unterverzeichnis in logs/ (z.B. 'bank_registry')
        console_level: Log Level für Console (default: ERROR)
        file_level: Log Level für File (default: INFO)
        file_name: Optional - Name der Log-Datei (default: {log_subdir}.log)
        log_dir: Optional - Basisverzeichnis (default: LOG_DIR aus settings)

    Returns:
        Konfigurierter Logger mit Console + File Handler
    """
    logger = logging.getLogger(module_name)
    logger.setLevel(logging.DEBUG)  # Niedrigster Level, Handler filtern dann

    # Verhindere doppelte Handler (nur eigene, nicht die des Root-Loggers)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
        datefmt='%d.%m.%Y %H:%M:%S'
    )

    # 1. Console Handler (stderr, default nur ERROR+)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 2. File Handler (logs/{log_subdir}/{file_name})
    target_dir = Path(log_dir or LOG_DIR) / log_subdir
    target_dir.mkdir(parents=True, exist_ok=True)

    log_file = file_name or f"{log_subdir}.log"
    file_handler = logging.FileHandler(target_dir / log_file, encoding='utf-8')
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger


def set_console_level(logger: logging.Logger, level: int) -> None:
    """Setzt das Level aller Console Handler (z.B. für --verbose)"""
    for handler in logger.handlers:
        if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)
