"""
Record Parser - Bundesbank Bankleitzahlendatei (BLZ) → BankRecord

Format: Latin-1, Semikolon-getrennt, Felder optional in "..." gesetzt,
erste Zeile = Header. Eingebettete Semikolons werden NICHT unterstützt.
"""

import re
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

FIELD_DELIMITER = ';'
FIELD_COUNT = 13

_LINE_SPLIT = re.compile(r'\r?\n')


class SkipReason(Enum):
    """Warum eine Zeile ohne Fehler verworfen wurde"""
    EMPTY_LINE = "empty_line"
    TOO_FEW_FIELDS = "too_few_fields"
    MISSING_ROUTING_CODE = "missing_routing_code"


@dataclass(frozen=True)
class BankRecord:
    """Ein Datensatz der Bankleitzahlendatei (eine Bankfiliale)"""
    routing_code: str
    record_marker: str
    name: str
    postal_code: str
    city: str
    short_name: str
    pan: str
    bic: str
    checksum_method: str
    record_sequence: str
    change_flag: str
    deleted_routing_code: str
    successor_routing_code: str

    @classmethod
    def from_fields(cls, fields: List[str]) -> 'BankRecord':
        """Positionsbasierte Zuordnung Feld 0..12 → Attribute; weitere Felder werden ignoriert."""
        if len(fields) < FIELD_COUNT:
            raise ValueError(f"Expected at least {FIELD_COUNT} fields, got {len(fields)}")
        return cls(*(field or '' for field in fields[:FIELD_COUNT]))

    def to_row(self) -> Dict[str, str]:
        """Spaltennamen der german_banks Tabelle"""
        return {
            'bankleitzahl': self.routing_code,
            'merkmal': self.record_marker,
            'bezeichnung': self.name,
            'plz': self.postal_code,
            'ort': self.city,
            'kurzbezeichnung': self.short_name,
            'pan': self.pan,
            'bic': self.bic,
            'pruefzifferberechnungsmethode': self.checksum_method,
            'datensatznummer': self.record_sequence,
            'aenderungskennzeichen': self.change_flag,
            'bankleitzahllöschung': self.deleted_routing_code,
            'nachfolge_bankleitzahl': self.successor_routing_code,
        }

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class ParsedLine:
    """Ergebnis einer Zeile: entweder record oder skip_reason"""
    line_number: int
    record: Optional[BankRecord] = None
    skip_reason: Optional[SkipReason] = None
    fields: Tuple[str, ...] = ()

    @property
    def is_record(self) -> bool:
        return self.record is not None


def clean_field(raw: str) -> str:
    """Entfernt genau ein führendes und ein abschließendes Anführungszeichen, dann trim."""
    if raw.startswith('"'):
        raw = raw[1:]
    if raw.endswith('"'):
        raw = raw[:-1]
    return raw.strip()


def split_fields(line: str) -> List[str]:
    return [clean_field(field) for field in line.split(FIELD_DELIMITER)]


def parse_line(line: str, line_number: int = 0) -> ParsedLine:
    """Normalisiert eine Datenzeile (Header muss vorher entfernt sein)."""
    stripped = line.strip()
    if not stripped:
        return ParsedLine(line_number, skip_reason=SkipReason.EMPTY_LINE)

    fields = split_fields(stripped)
    if len(fields) < FIELD_COUNT:
        return ParsedLine(line_number, skip_reason=SkipReason.TOO_FEW_FIELDS, fields=tuple(fields))
    if not fields[0]:
        return ParsedLine(line_number, skip_reason=SkipReason.MISSING_ROUTING_CODE, fields=tuple(fields))

    return ParsedLine(line_number, record=BankRecord.from_fields(fields), fields=tuple(fields))


def split_lines(content: str) -> List[str]:
    """Nur \\r\\n und \\n trennen (Latin-1 \\x85 ist ein Zeichen, kein Umbruch)."""
    return _LINE_SPLIT.split(content)


def iter_records(content: str) -> Iterator[ParsedLine]:
    """
    Iteriert alle Datenzeilen eines dekodierten Dateiinhalts.
    Die erste Zeile (Header) wird immer übersprungen; line_number ist 0-basiert
    bezogen auf die Datei, d.h. die erste Datenzeile hat Nummer 1.
    """
    lines = split_lines(content)
    for index in range(1, len(lines)):
        yield parse_line(lines[index], index)
