"""
modules/shared/database/repositories/base.py
Basis-Klasse für alle Repositories (DRY Prinzip)
"""

from typing import Union
from sqlalchemy import text
from sqlalchemy.engine import Connection
from sqlalchemy.sql.elements import TextClause


class BaseRepository:
    """
    Abstrakte Basisklasse für Repositories.
    Arbeitet immer auf einer vom Aufrufer verwalteten Connection
    (Transaktion liegt beim Database-Handle, nicht beim Repository).
    """

    def __init__(self, connection: Connection):
        self._conn = connection

    @property
    def dialect_name(self) -> str:
        return self._conn.dialect.name

    def _prepare_statement(self, sql: Union[str, TextClause]):
        """Helper: Wandelt Strings in TextClause um, lässt Objekte unverändert."""
        if isinstance(sql, str):
            return text(sql)
        return sql

    def _execute_stmt(self, sql: Union[str, TextClause], params: dict = None):
        """Helper für UPDATE/DELETE/INSERT (ohne Return Value)"""
        params = params or {}
        return self._conn.execute(self._prepare_statement(sql), params)

    def _fetch_one(self, sql: Union[str, TextClause], params: dict = None):
        """Helper für SELECT Single Row"""
        params = params or {}
        return self._conn.execute(self._prepare_statement(sql), params).mappings().first()

    def _fetch_all(self, sql: Union[str, TextClause], params: dict = None):
        """Helper für SELECT Multi Row"""
        params = params or {}
        return self._conn.execute(self._prepare_statement(sql), params).mappings().all()
