"""Bank Repositories"""

from .german_bank_repository import GermanBankRepository, BANK_COLUMNS, UPSERT_UPDATE_COLUMNS

__all__ = ["GermanBankRepository", "BANK_COLUMNS", "UPSERT_UPDATE_COLUMNS"]
