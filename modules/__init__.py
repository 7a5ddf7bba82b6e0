"""
Modules Package - Alle Anwendungsmodule

Dieses Package enthält alle Anwendungsmodule:
- shared: Gemeinsame Funktionen (Database, Logging, Config)
- bank_registry: Bundesbank-Bankleitzahlen (Import + Lookups)

Verwendung:
    from modules.shared import Database, create_module_logger
    from modules.bank_registry import BankImportService, BankLookupService
"""

__version__ = "1.0.0"
