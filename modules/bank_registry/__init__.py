"""
Bank Registry Module

Bundesbank-Bankleitzahlen:
- Import der Bankleitzahlendatei (Latin-1, Semikolon) in german_banks
- Lookups per Bankleitzahl, IBAN, BIC und Name
- IBAN-Validierung

Module-Struktur:
- services/record_parser.py: Zeile → BankRecord
- services/import_service.py: Transaktionaler Import (Upsert je Datensatz)
- services/lookup_service.py: Read-Only Abfragen
- services/iban_utils.py: IBAN Prüfung/Formatierung
"""

from .errors import BankRegistryError, BankFileError, ImportTransactionError, ImportInProgressError
from .services import BankImportService, BankLookupService, ImportResult

__all__ = [
    "BankRegistryError",
    "BankFileError",
    "ImportTransactionError",
    "ImportInProgressError",
    "BankImportService",
    "BankLookupService",
    "ImportResult"
]
__version__ = "1.0.0"
