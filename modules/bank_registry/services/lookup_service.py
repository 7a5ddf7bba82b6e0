"""
Bank Lookup Service - BIC/Bankname zu Bankleitzahl, IBAN oder BIC ermitteln
Business Logic über GermanBankRepository (Read-Only)
"""

import re
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from modules.shared import Database, app_logger
from modules.shared.config import TABLE_GERMAN_BANKS
from modules.shared.database.repositories.bank import GermanBankRepository

MAX_SEARCH_LIMIT = 50


def _bank_view(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'name': row['bezeichnung'],
        'short_name': row['kurzbezeichnung'],
        'bic': row['bic'],
        'city': row['ort'],
    }


class BankLookupService:
    """Sucht Banken in der importierten Bundesbank-Tabelle"""

    def __init__(self, database: Database, table: str = TABLE_GERMAN_BANKS):
        self.database = database
        self.table = table

    def find_by_routing_code(self, routing_code: str) -> Optional[Dict[str, Any]]:
        """Bank mit BIC per 8-stelliger Bankleitzahl"""
        if not routing_code or len(routing_code) != 8:
            return None
        with self.database.connect() as conn:
            return GermanBankRepository(conn, self.table).find_by_routing_code(routing_code)

    def find_by_iban(self, iban: str) -> Optional[Dict[str, Any]]:
        """Deutsche IBAN: DE + 2 Prüfziffern + 8 BLZ + 10 Kontonummer"""
        if not iban or not iban.startswith('DE'):
            return None
        clean_iban = re.sub(r'\s', '', iban)
        if len(clean_iban) != 22:
            return None
        return self.find_by_routing_code(clean_iban[4:12])

    def find_by_bic(self, bic: str) -> Optional[Dict[str, Any]]:
        if not bic:
            return None
        with self.database.connect() as conn:
            return GermanBankRepository(conn, self.table).find_by_bic(bic.upper())

    def search_by_name(self, search_term: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Autocomplete - mindestens 2 Zeichen, maximal 50 Treffer"""
        if not search_term or len(search_term) < 2:
            return []
        limit = min(max(int(limit or 10), 1), MAX_SEARCH_LIMIT)
        with self.database.connect() as conn:
            return GermanBankRepository(conn, self.table).search_by_name(search_term, limit)

    def get_extended_bank_info(self, iban: str) -> Dict[str, Any]:
        bank = self.find_by_iban(iban)
        if not bank:
            return {'found': False, 'iban': iban, 'routing_code': None, 'bank': None}

        return {
            'found': True,
            'iban': iban,
            'routing_code': bank['bankleitzahl'],
            'bank': _bank_view(bank),
        }

    def get_status(self) -> Dict[str, Any]:
        """Ist die Banktabelle verfügbar? Anzahl, BICs, letzte Aktualisierung"""
        try:
            with self.database.connect() as conn:
                row = GermanBankRepository(conn, self.table).get_status_row()
            return {
                'available': True,
                'total_banks': int(row['total_banks'] or 0),
                'unique_bics': int(row['unique_bics'] or 0),
                'last_update': row['last_update'],
            }
        except SQLAlchemyError as e:
            app_logger.error(f"BankLookupService get_status: {e}", exc_info=True)
            return {'available': False, 'error': str(e)}
