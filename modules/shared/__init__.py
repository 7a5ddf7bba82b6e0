"""
Shared Module - Zentrale Infrastruktur für alle Module

Dieses Modul bietet gemeinsame Funktionen für Database, Logging und Config.
Alle Module importieren von hier, nicht direkt von den Untermodulen.

Verwendung in neuen Modulen:
    from modules.shared import Database, BaseRepository, create_module_logger
    from modules.shared.config import TABLE_GERMAN_BANKS
"""

# Database (lokale Imports aus modules/shared/database/)
from .database import Database, BaseRepository, build_connection_url, default_connection_url

# Logging (lokale Imports aus modules/shared/logging/)
from .logging import create_module_logger, set_console_level, app_logger

# Config (Re-Export von config/settings.py)
from .config import (
    POSTGRES_HOST,
    POSTGRES_PORT,
    POSTGRES_DB,
    POSTGRES_USER,
    POSTGRES_PASSWORD,
    DATABASE_URL,
    TABLE_GERMAN_BANKS,
    BANK_IMPORT_FILE,
    BANK_IMPORT_ENCODING,
    BANK_IMPORT_ERROR_LOG_LIMIT,
    BANK_IMPORT_PROGRESS_INTERVAL,
    LOG_DIR
)

# Public API
__all__ = [
    # Database
    "Database",
    "BaseRepository",
    "build_connection_url",
    "default_connection_url",

    # Logging
    "create_module_logger",
    "set_console_level",
    "app_logger",

    # Config - PostgreSQL
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "DATABASE_URL",

    # Config - Tables
    "TABLE_GERMAN_BANKS",

    # Config - Bundesbank Import
    "BANK_IMPORT_FILE",
    "BANK_IMPORT_ENCODING",
    "BANK_IMPORT_ERROR_LOG_LIMIT",
    "BANK_IMPORT_PROGRESS_INTERVAL",

    # Config - Logging
    "LOG_DIR"
]

# Version
__version__ = "1.0.0"
