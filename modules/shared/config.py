"""
Configuration - Re-Export Layer

Stellt die zentrale Konfiguration aus config/settings.py bereit.
Alle Werte werden aus der .env Datei geladen.
"""

from config.settings import (
    # PostgreSQL Connection
    POSTGRES_HOST,
    POSTGRES_PORT,
    POSTGRES_DB,
    POSTGRES_USER,
    POSTGRES_PASSWORD,
    DATABASE_URL,

    # Table Names
    TABLE_GERMAN_BANKS,

    # Bundesbank Import
    BANK_IMPORT_FILE,
    BANK_IMPORT_ENCODING,
    BANK_IMPORT_ERROR_LOG_LIMIT,
    BANK_IMPORT_PROGRESS_INTERVAL,

    # Logging
    LOG_DIR
)

__all__ = [
    # PostgreSQL
    "POSTGRES_HOST",
    "POSTGRES_PORT",
    "POSTGRES_DB",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "DATABASE_URL",

    # Tables
    "TABLE_GERMAN_BANKS",

    # Bundesbank Import
    "BANK_IMPORT_FILE",
    "BANK_IMPORT_ENCODING",
    "BANK_IMPORT_ERROR_LOG_LIMIT",
    "BANK_IMPORT_PROGRESS_INTERVAL",

    # Logging
    "LOG_DIR"
]
