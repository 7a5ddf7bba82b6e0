"""Fehlerklassen für den Bankleitzahlen-Import"""


class BankRegistryError(Exception):
    """Basisklasse aller fatalen Import-Fehler"""


class BankFileError(BankRegistryError, OSError):
    """Quelldatei fehlt oder ist nicht lesbar - es wurde nichts verändert"""


class ImportTransactionError(BankRegistryError):
    """Commit oder Verbindung fehlgeschlagen - alle Änderungen zurückgerollt"""


class ImportInProgressError(BankRegistryError):
    """Ein anderer Import auf dieselbe Tabelle läuft bereits"""
