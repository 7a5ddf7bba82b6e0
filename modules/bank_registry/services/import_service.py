"""
Bank Import Service - Bundesbank-Datei → german_banks

Ablauf (eine Transaktion, alles oder nichts):
1. Datei komplett lesen und als Latin-1 dekodieren (vor jeder DB-Änderung)
2. Tabelle anlegen falls nötig, alle Zeilen löschen
3. Zeile für Zeile upserten - jeder Datensatz in eigenem SAVEPOINT,
   damit ein fehlerhafter Datensatz die Transaktion nicht abbricht
4. Commit, danach Statistiken in neuer Connection (noch unter dem Guard)
"""

import threading
import time
import zlib
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Callable, Dict, Optional, Union

from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from modules.shared import Database, app_logger
from modules.shared.config import (
    TABLE_GERMAN_BANKS, BANK_IMPORT_FILE, BANK_IMPORT_ENCODING,
    BANK_IMPORT_ERROR_LOG_LIMIT, BANK_IMPORT_PROGRESS_INTERVAL
)
from modules.shared.database.repositories.bank import GermanBankRepository
from ..errors import BankFileError, BankRegistryError, ImportInProgressError, ImportTransactionError
from ..logger import bank_logger
from .record_parser import ParsedLine, iter_records

# Fehler eines einzelnen Datensatzes - alles andere bricht den Import ab
RECORD_WRITE_ERRORS = (IntegrityError, DataError)

# Single-Flight innerhalb des Prozesses (zusätzlich Advisory Lock bei PostgreSQL)
_import_guard = threading.Lock()


@dataclass
class ImportResult:
    """Zähler eines Import-Laufs"""
    imported: int = 0
    errors: int = 0
    skipped: int = 0
    deleted: int = 0
    stats: Dict[str, int] = field(default_factory=dict)
    duration_seconds: float = 0.0

    def to_dict(self) -> Dict:
        return asdict(self)


class BankImportService:
    """Importiert die Bundesbank-Bankleitzahlendatei in die Datenbank"""

    def __init__(
        self,
        database: Database,
        table: str = TABLE_GERMAN_BANKS,
        encoding: str = BANK_IMPORT_ENCODING,
        error_log_limit: int = BANK_IMPORT_ERROR_LOG_LIMIT,
        progress_interval: int = BANK_IMPORT_PROGRESS_INTERVAL,
        on_progress: Optional[Callable[[int], None]] = None
    ):
        self.database = database
        self.table = table
        self.encoding = encoding
        self.error_log_limit = error_log_limit
        self.progress_interval = progress_interval
        self.on_progress = on_progress
        self.lock_key = zlib.crc32(table.encode('utf-8'))

    def read_source(self, source_path: Union[str, Path]) -> str:
        """Liest die komplette Datei und dekodiert sie (Standard: ISO-8859-1)."""
        path = Path(source_path)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise BankFileError(f"Bundesbank-Datei nicht lesbar: {path} ({e.strerror or e})") from e

        try:
            return raw.decode(self.encoding)
        except (UnicodeDecodeError, LookupError) as e:
            raise BankFileError(f"Bundesbank-Datei nicht dekodierbar ({self.encoding}): {path}") from e

    def import_file(self, source_path: Union[str, Path, None] = None) -> ImportResult:
        """
        Importiert die Datei und gibt die Zähler + Statistiken zurück.

        Raises:
            BankFileError: Datei fehlt / nicht lesbar (keine DB-Änderung)
            ImportInProgressError: paralleler Import läuft (keine DB-Änderung)
            ImportTransactionError: Commit/Verbindung fehlgeschlagen (Rollback)
        """
        path = Path(source_path or BANK_IMPORT_FILE)
        start_time = time.monotonic()

        bank_logger.info(f"🏦 Starte Bundesbank-Import: {path}")
        content = self.read_source(path)

        if not _import_guard.acquire(blocking=False):
            raise ImportInProgressError(f"Import für '{self.table}' läuft bereits in diesem Prozess")
        try:
            result = self._run_import(content)
            # Statistik vor Freigabe des Guards lesen
            result.stats = self.get_statistics()
        finally:
            _import_guard.release()

        result.duration_seconds = round(time.monotonic() - start_time, 3)

        bank_logger.info(
            f"✅ Import abgeschlossen: {result.imported} Banken ({result.errors} Fehler, "
            f"{result.skipped} übersprungen) in {result.duration_seconds}s"
        )
        bank_logger.info(f"📈 Statistik: {result.stats}")
        return result

    def _run_import(self, content: str) -> ImportResult:
        result = ImportResult()
        try:
            with self.database.transaction() as conn:
                repo = GermanBankRepository(conn, self.table)
                if not repo.try_import_lock(self.lock_key):
                    raise ImportInProgressError(f"Import für '{self.table}' läuft bereits (Advisory Lock)")

                repo.ensure_table_exists()
                result.deleted = repo.delete_all()
                bank_logger.info(f"🗑️ Bestehende Bankdaten gelöscht ({result.deleted} Zeilen)")

                for parsed in iter_records(content):
                    if not parsed.is_record:
                        result.skipped += 1
                        continue
                    self._write_record(conn, repo, parsed, result)
        except BankRegistryError:
            raise
        except SQLAlchemyError as e:
            bank_logger.error(f"❌ Import fehlgeschlagen, Rollback: {e}", exc_info=True)
            raise ImportTransactionError(f"Bundesbank-Import zurückgerollt: {e}") from e

        return result

    def _write_record(self, conn, repo: GermanBankRepository, parsed: ParsedLine, result: ImportResult) -> None:
        try:
            with conn.begin_nested():
                repo.upsert_bank(parsed.record.to_row())
        except RECORD_WRITE_ERRORS as e:
            result.errors += 1
            if result.errors <= self.error_log_limit:
                bank_logger.warning(f"Fehler in Zeile {parsed.line_number}: {getattr(e, 'orig', None) or e}")
                bank_logger.warning(f"Felder: {list(parsed.fields)}")
            return

        result.imported += 1
        if self.progress_interval and result.imported % self.progress_interval == 0:
            bank_logger.info(f"📥 {result.imported} Banken importiert...")
            if self.on_progress:
                self.on_progress(result.imported)

    def get_statistics(self) -> Dict[str, int]:
        """Statistiken nach dem Commit (eigene Connection)"""
        try:
            with self.database.connect() as conn:
                return GermanBankRepository(conn, self.table).get_statistics()
        except SQLAlchemyError as e:
            app_logger.error(f"BankImportService get_statistics: {e}", exc_info=True)
            return {}
