"""
German Bank Repository - SQLAlchemy + Raw SQL
Data Access Layer für die Bundesbank-Bankleitzahlentabelle
"""

from typing import Any, Dict, List, Optional

from modules.shared.config import TABLE_GERMAN_BANKS
from modules.shared.logging import app_logger
from ..base import BaseRepository

# Spaltenreihenfolge = Feldreihenfolge der Bundesbank-Datei
BANK_COLUMNS = (
    'bankleitzahl',
    'merkmal',
    'bezeichnung',
    'plz',
    'ort',
    'kurzbezeichnung',
    'pan',
    'bic',
    'pruefzifferberechnungsmethode',
    'datensatznummer',
    'aenderungskennzeichen',
    'bankleitzahllöschung',
    'nachfolge_bankleitzahl',
)

# Bei Konflikt werden nur diese Spalten überschrieben
UPSERT_UPDATE_COLUMNS = ('bezeichnung', 'bic', 'ort')

LOOKUP_COLUMNS = 'bankleitzahl, bezeichnung, bic, ort, kurzbezeichnung'


def _bind_name(column: str) -> str:
    """ASCII-Parametername (Spalte bankleitzahllöschung enthält einen Umlaut)"""
    return column.replace('ö', 'oe')


# bezeichnung: TEXT wie im bestehenden Schema; SQL Server kann TEXT nicht indizieren
_DATA_COLUMNS_DDL = """
    bankleitzahl VARCHAR(8) NOT NULL UNIQUE,
    merkmal VARCHAR(1),
    bezeichnung {name_type} NOT NULL,
    plz VARCHAR(5),
    ort VARCHAR(100),
    kurzbezeichnung VARCHAR(100),
    pan VARCHAR(5),
    bic VARCHAR(11),
    pruefzifferberechnungsmethode VARCHAR(2),
    datensatznummer VARCHAR(10),
    aenderungskennzeichen VARCHAR(1),
    bankleitzahllöschung VARCHAR(1),
    nachfolge_bankleitzahl VARCHAR(8),
"""


class GermanBankRepository(BaseRepository):
    """
    Data Access Layer - ONLY DB Operations.
    Dialekte: postgresql, sqlite (ON CONFLICT) und mssql (MERGE).
    """

    def __init__(self, connection, table: str = TABLE_GERMAN_BANKS):
        super().__init__(connection)
        self.table = table

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def ensure_table_exists(self) -> None:
        """Erstelle Bank-Tabelle + Indizes wenn nicht vorhanden"""
        if self.dialect_name == 'mssql':
            self._execute_stmt(f"""
                IF OBJECT_ID('dbo.{self.table}', 'U') IS NULL
                BEGIN
                    CREATE TABLE [dbo].[{self.table}] (
                        id INT PRIMARY KEY IDENTITY(1,1),
                        {_DATA_COLUMNS_DDL.format(name_type='NVARCHAR(450)')}
                        created_at DATETIME2 NOT NULL DEFAULT GETDATE(),
                        updated_at DATETIME2 NOT NULL DEFAULT GETDATE(),
                        INDEX idx_{self.table}_bic (bic),
                        INDEX idx_{self.table}_bezeichnung (bezeichnung)
                    );
                END
            """)
            return

        id_column = 'id SERIAL PRIMARY KEY' if self.dialect_name == 'postgresql' \
            else 'id INTEGER PRIMARY KEY AUTOINCREMENT'
        self._execute_stmt(f"""
            CREATE TABLE IF NOT EXISTS {self.table} (
                {id_column},
                {_DATA_COLUMNS_DDL.format(name_type='TEXT')}
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        self._execute_stmt(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_bic ON {self.table} (bic)")
        self._execute_stmt(
            f"CREATE INDEX IF NOT EXISTS idx_{self.table}_bezeichnung ON {self.table} (bezeichnung)"
        )

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    def try_import_lock(self, lock_key: int) -> bool:
        """Transaktionsgebundener Advisory Lock (nur PostgreSQL, sonst immer True)"""
        if self.dialect_name != 'postgresql':
            return True
        row = self._fetch_one("SELECT pg_try_advisory_xact_lock(:key) AS locked", {"key": lock_key})
        return bool(row["locked"])

    def delete_all(self) -> int:
        """Lösche alle Banken"""
        result = self._execute_stmt(f"DELETE FROM {self.table}")
        return result.rowcount

    def upsert_bank(self, values: Dict[str, str]) -> None:
        """
        INSERT oder partielles UPDATE (bezeichnung, bic, ort, updated_at) per bankleitzahl.
        Fehler werden NICHT abgefangen - der Aufrufer entscheidet (Savepoint).
        """
        params = {_bind_name(column): values.get(column, '') for column in BANK_COLUMNS}
        self._execute_stmt(self._upsert_sql(), params)

    def _upsert_sql(self) -> str:
        columns = ", ".join(BANK_COLUMNS)
        placeholders = ", ".join(f":{_bind_name(c)}" for c in BANK_COLUMNS)

        if self.dialect_name == 'mssql':
            source = ", ".join(f":{_bind_name(c)} AS {c}" for c in BANK_COLUMNS)
            updates = ", ".join(f"{c} = src.{c}" for c in UPSERT_UPDATE_COLUMNS)
            src_values = ", ".join(f"src.{c}" for c in BANK_COLUMNS)
            return f"""
                MERGE {self.table} AS target
                USING (SELECT {source}) AS src
                ON target.bankleitzahl = src.bankleitzahl
                WHEN MATCHED THEN UPDATE SET
                    {updates},
                    updated_at = GETDATE()
                WHEN NOT MATCHED THEN INSERT ({columns})
                    VALUES ({src_values});
            """

        updates = ", ".join(f"{c} = EXCLUDED.{c}" for c in UPSERT_UPDATE_COLUMNS)
        return f"""
            INSERT INTO {self.table} ({columns})
            VALUES ({placeholders})
            ON CONFLICT (bankleitzahl) DO UPDATE SET
                {updates},
                updated_at = CURRENT_TIMESTAMP
        """

    def get_statistics(self) -> Dict[str, int]:
        """Anzahl Banken, eindeutige BICs (ohne leere) und Banken mit BIC"""
        row = self._fetch_one(f"""
            SELECT
                COUNT(*) AS total_banks,
                COUNT(DISTINCT CASE WHEN bic IS NOT NULL AND bic <> '' THEN bic END) AS unique_bics,
                COUNT(CASE WHEN bic IS NOT NULL AND bic <> '' THEN 1 END) AS banks_with_bic
            FROM {self.table}
        """)
        return {
            "total_banks": int(row["total_banks"] or 0),
            "unique_bics": int(row["unique_bics"] or 0),
            "banks_with_bic": int(row["banks_with_bic"] or 0),
        }

    # ------------------------------------------------------------------
    # Lookups (Read-Only)
    # ------------------------------------------------------------------

    def _limited(self, select_sql: str, limit_param: str = ":limit") -> str:
        """Hängt LIMIT an bzw. nutzt TOP für SQL Server"""
        if self.dialect_name == 'mssql':
            return select_sql.replace("SELECT", f"SELECT TOP ({limit_param})", 1)
        return f"{select_sql} LIMIT {limit_param}"

    def find_by_routing_code(self, routing_code: str) -> Optional[Dict[str, Any]]:
        """Hole Bank mit BIC per Bankleitzahl"""
        try:
            sql = self._limited(f"""
                SELECT {LOOKUP_COLUMNS}
                FROM {self.table}
                WHERE bankleitzahl = :bankleitzahl
                  AND bic IS NOT NULL
                  AND bic <> ''
            """)
            row = self._fetch_one(sql, {"bankleitzahl": routing_code, "limit": 1})
            return dict(row) if row else None
        except Exception as e:
            app_logger.error(f"GermanBankRepository find_by_routing_code: {e}", exc_info=True)
            return None

    def find_by_bic(self, bic: str) -> Optional[Dict[str, Any]]:
        """Hole Bank per BIC"""
        try:
            sql = self._limited(f"""
                SELECT {LOOKUP_COLUMNS}
                FROM {self.table}
                WHERE bic = :bic
            """)
            row = self._fetch_one(sql, {"bic": bic, "limit": 1})
            return dict(row) if row else None
        except Exception as e:
            app_logger.error(f"GermanBankRepository find_by_bic: {e}", exc_info=True)
            return None

    def search_by_name(self, search_term: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Suche per Bezeichnung, Kurzbezeichnung oder Ort (Autocomplete)"""
        try:
            sql = self._limited(f"""
                SELECT {LOOKUP_COLUMNS}
                FROM {self.table}
                WHERE (
                    LOWER(bezeichnung) LIKE LOWER(:search_pattern)
                    OR LOWER(kurzbezeichnung) LIKE LOWER(:search_pattern)
                    OR LOWER(ort) LIKE LOWER(:search_pattern)
                )
                AND bic IS NOT NULL
                AND bic <> ''
                ORDER BY
                    CASE
                        WHEN LOWER(kurzbezeichnung) LIKE LOWER(:exact_pattern) THEN 1
                        WHEN LOWER(bezeichnung) LIKE LOWER(:exact_pattern) THEN 2
                        ELSE 3
                    END,
                    bezeichnung
            """)
            rows = self._fetch_all(sql, {
                "search_pattern": f"%{search_term}%",
                "exact_pattern": f"{search_term}%",
                "limit": limit,
            })
            return [dict(row) for row in rows]
        except Exception as e:
            app_logger.error(f"GermanBankRepository search_by_name: {e}", exc_info=True)
            return []

    def get_status_row(self) -> Dict[str, Any]:
        """Anzahl, eindeutige BICs und letzte Aktualisierung (Fehler propagieren)"""
        row = self._fetch_one(f"""
            SELECT
                COUNT(*) AS total_banks,
                COUNT(DISTINCT CASE WHEN bic IS NOT NULL AND bic <> '' THEN bic END) AS unique_bics,
                MAX(updated_at) AS last_update
            FROM {self.table}
        """)
        return dict(row)
