"""
IBAN Utilities - Validierung, Formatierung, Bankleitzahl-Extraktion
"""

import re
from typing import Dict, Optional

IBAN_CODE_LENGTHS = {
    'AD': 24, 'AE': 23, 'AT': 20, 'AZ': 28, 'BA': 20, 'BE': 16, 'BG': 22, 'BH': 22, 'BR': 29,
    'CH': 21, 'CR': 21, 'CY': 28, 'CZ': 24, 'DE': 22, 'DK': 18, 'DO': 28, 'EE': 20, 'ES': 24,
    'FI': 18, 'FO': 18, 'FR': 27, 'GB': 22, 'GI': 23, 'GL': 18, 'GR': 27, 'GT': 28, 'HR': 21,
    'HU': 28, 'IE': 22, 'IL': 23, 'IS': 26, 'IT': 27, 'JO': 30, 'KW': 30, 'KZ': 20, 'LB': 28,
    'LI': 21, 'LT': 20, 'LU': 20, 'LV': 21, 'MC': 27, 'MD': 24, 'ME': 22, 'MK': 19, 'MR': 27,
    'MT': 31, 'MU': 30, 'NL': 18, 'NO': 15, 'PK': 24, 'PL': 28, 'PS': 29, 'PT': 25, 'QA': 29,
    'RO': 24, 'RS': 22, 'SA': 24, 'SE': 24, 'SI': 19, 'SK': 24, 'SM': 27, 'TN': 24, 'TR': 26,
    'AL': 28, 'BY': 28, 'EG': 29, 'GE': 22, 'IQ': 23, 'LC': 32, 'SC': 31, 'ST': 25,
    'SV': 28, 'TL': 23, 'UA': 29, 'VA': 22, 'VG': 24, 'XK': 20,
}

# (start, länge) der Bankleitzahl innerhalb der IBAN
BANK_CODE_POSITIONS = {
    'DE': (4, 8),
    'AT': (4, 5),
    'CH': (4, 5),
    'FR': (4, 5),
    'IT': (5, 5),
    'ES': (4, 4),
    'NL': (4, 4),
}

_IBAN_PATTERN = re.compile(r'^([A-Z]{2})(\d{2})([A-Z\d]+)$')


def mod97(digits: str) -> int:
    """Mod-97 über eine (beliebig lange) Ziffernfolge"""
    return int(digits) % 97 if digits else 0


def format_iban(iban: str) -> str:
    """Gruppiert in 4er-Blöcke: DE89 3704 0044 0532 0130 00"""
    if not iban:
        return ''
    clean = re.sub(r'\s', '', iban).upper()
    return ' '.join(clean[i:i + 4] for i in range(0, len(clean), 4))


def extract_bank_code(iban: str, country_code: str) -> Optional[str]:
    position = BANK_CODE_POSITIONS.get(country_code)
    if position and len(iban) >= position[0] + position[1]:
        start, length = position
        return iban[start:start + length]
    return None


def _result(is_valid: bool, error: Optional[str], formatted: str,
            country_code: Optional[str] = None, bank_code: Optional[str] = None) -> Dict:
    return {
        'is_valid': is_valid,
        'error': error,
        'formatted': formatted,
        'country_code': country_code,
        'bank_code': bank_code,
    }


def validate_iban(value: Optional[str]) -> Dict:
    """
    Validiert eine IBAN vollständig (Format, Ländercode, Länge, Prüfsumme).

    Eine leere IBAN gilt als gültig (optionales Feld).
    """
    if not value:
        return _result(True, None, '')

    iban = re.sub(r'[^A-Z0-9]', '', str(value).upper())
    match = _IBAN_PATTERN.match(iban)
    if not match:
        return _result(False, 'Ungültiges IBAN-Format. IBAN muss mit 2 Buchstaben (Ländercode) '
                              'und 2 Ziffern (Prüfziffern) beginnen.', value)

    country_code, check_digits, rest = match.groups()

    expected_length = IBAN_CODE_LENGTHS.get(country_code)
    if not expected_length:
        return _result(False, f'Unbekannter Ländercode: {country_code}', value, country_code)

    if len(iban) != expected_length:
        return _result(False, f'Falsche IBAN-Länge für {country_code}. Erwartet: {expected_length} '
                              f'Zeichen, erhalten: {len(iban)}', value, country_code)

    # A=10 ... Z=35
    digits = ''.join(str(int(ch, 36)) for ch in rest + country_code + check_digits)
    if mod97(digits) != 1:
        return _result(False, 'IBAN-Prüfsumme ist ungültig. Bitte überprüfen Sie die eingegebene IBAN.',
                       value, country_code, extract_bank_code(iban, country_code))

    return _result(True, None, format_iban(iban), country_code, extract_bank_code(iban, country_code))


def is_valid_iban(value: Optional[str]) -> bool:
    return validate_iban(value)['is_valid']
