"""Workflow: Bundesbank CSV → Datenbank"""

from pathlib import Path
from typing import Optional, Union

from modules.shared import Database
from modules.bank_registry import BankImportService, ImportResult


def run_csv_to_db(
    file_path: Union[str, Path, None] = None,
    database_url: Optional[str] = None,
    **service_options
) -> ImportResult:
    """Importiert die Bankleitzahlendatei; Database-Handle lebt genau einen Lauf."""
    with Database(database_url) as database:
        service = BankImportService(database, **service_options)
        return service.import_file(file_path)


if __name__ == "__main__":
    run_csv_to_db()
