"""
Database Module Initialization
Exportiert die wichtigsten DB-Funktionen für einfacheren Zugriff.
"""
from .connection import (
    Database,
    build_connection_url,
    default_connection_url
)
from .repositories.base import BaseRepository

__all__ = ["Database", "build_connection_url", "default_connection_url", "BaseRepository"]
