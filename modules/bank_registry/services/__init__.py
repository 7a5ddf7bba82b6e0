"""Bank Registry Services - Core Business Logic"""

from .record_parser import BankRecord, ParsedLine, SkipReason, parse_line, iter_records
from .import_service import BankImportService, ImportResult
from .lookup_service import BankLookupService
from .iban_utils import validate_iban, is_valid_iban, format_iban, extract_bank_code

__all__ = [
    'BankRecord',
    'ParsedLine',
    'SkipReason',
    'parse_line',
    'iter_records',
    'BankImportService',
    'ImportResult',
    'BankLookupService',
    'validate_iban',
    'is_valid_iban',
    'format_iban',
    'extract_bank_code'
]
