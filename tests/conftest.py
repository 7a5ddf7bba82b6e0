"""
pytest configuration and fixtures for Bank-Registry tests.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Logs nicht ins Projektverzeichnis schreiben
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='bank_registry_logs_'))

# Füge root zum Path hinzu
root = Path(__file__).parent.parent
sys.path.insert(0, str(root))

from modules.shared import Database

HEADER = (
    "Bankleitzahl;Merkmal;Bezeichnung;PLZ;Ort;Kurzbezeichnung;PAN;BIC;"
    "Prüfzifferberechnungsmethode;Datensatznummer;Änderungskennzeichen;"
    "Bankleitzahllöschung;Nachfolge-Bankleitzahl"
)


def bank_line(routing_code, name='Testbank', city='Berlin', bic='', postal_code='10591',
              short_name=None, record_marker='1', quoted=True, field_count=13):
    """Baut eine Datenzeile im Bundesbank-Format"""
    fields = [
        routing_code, record_marker, name, postal_code, city,
        short_name if short_name is not None else name,
        '', bic, '09', '000001', 'U', '0', '00000000',
    ]
    fields = (fields + [''] * field_count)[:field_count]
    if quoted:
        fields = [f'"{f}"' for f in fields]
    return ';'.join(fields)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'banks.db'}"


@pytest.fixture
def database(database_url):
    """File-backed SQLite Database-Handle pro Test"""
    db = Database(database_url)
    yield db
    db.close()


@pytest.fixture
def write_bank_file(tmp_path):
    """Schreibt eine Latin-1 Bundesbank-Datei; Header wird automatisch vorangestellt."""
    counter = {'n': 0}

    def _write(lines, header=HEADER, newline='\r\n', encoding='iso-8859-1'):
        counter['n'] += 1
        path = tmp_path / f"bundesbank_{counter['n']}.csv"
        path.write_bytes(newline.join([header] + list(lines)).encode(encoding))
        return path

    return _write


@pytest.fixture
def fetch_banks(database):
    """Alle Zeilen der Banktabelle als Dicts (ohne id/Zeitstempel)"""
    from sqlalchemy import text

    def _fetch():
        with database.connect() as conn:
            rows = conn.execute(text("""
                SELECT bankleitzahl, merkmal, bezeichnung, plz, ort, kurzbezeichnung, pan, bic,
                       pruefzifferberechnungsmethode, datensatznummer, aenderungskennzeichen,
                       bankleitzahllöschung, nachfolge_bankleitzahl
                FROM german_banks
                ORDER BY bankleitzahl
            """)).mappings().all()
        return [dict(row) for row in rows]

    return _fetch
