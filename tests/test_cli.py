"""Test: CLI Entry Point (main.py)"""

import json

from main import main
from conftest import bank_line


def test_import_command_exit_code_zero(database_url, write_bank_file, capsys):
    path = write_bank_file([
        bank_line('10000000', name='Deutsche Bundesbank', bic='MARKDEF1100'),
        bank_line('20000000', field_count=12),
    ])

    exit_code = main(['--database-url', database_url, 'import', '--file', str(path)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert 'Successfully imported 1 banks (0 errors)' in out
    assert "'total_banks': 1" in out


def test_import_missing_file_exit_code_one(database_url, tmp_path, capsys):
    exit_code = main(['--database-url', database_url, 'import', '--file', str(tmp_path / 'fehlt.csv')])

    assert exit_code == 1
    assert 'Import failed' in capsys.readouterr().err


def test_status_and_lookup_commands(database_url, write_bank_file, capsys):
    path = write_bank_file([bank_line('37040044', name='Commerzbank', city='Köln', bic='COBADEFFXXX')])
    main(['--database-url', database_url, 'import', '--file', str(path)])
    capsys.readouterr()

    assert main(['--database-url', database_url, 'status']) == 0
    assert json.loads(capsys.readouterr().out)['total_banks'] == 1

    assert main(['--database-url', database_url, 'lookup', '37040044']) == 0
    assert json.loads(capsys.readouterr().out)['bic'] == 'COBADEFFXXX'

    assert main(['--database-url', database_url, 'lookup', 'DE89 3704 0044 0532 0130 00']) == 0
    assert json.loads(capsys.readouterr().out)['bank']['name'] == 'Commerzbank'

    assert main(['--database-url', database_url, 'lookup', 'cobadeffxxx']) == 0
    assert json.loads(capsys.readouterr().out)['bankleitzahl'] == '37040044'

    assert main(['--database-url', database_url, 'lookup', '99999999']) == 1


def test_lookup_with_unreachable_database_exit_code_one(tmp_path, capsys):
    url = f"sqlite:///{tmp_path / 'fehlt' / 'banks.db'}"

    assert main(['--database-url', url, 'lookup', '37040044']) == 1
    assert 'Datenbank nicht erreichbar' in capsys.readouterr().err

    assert main(['--database-url', url, 'status']) == 1


def test_lookup_rejects_invalid_iban_before_query(database_url, capsys):
    assert main(['--database-url', database_url, 'lookup', 'DE88 3704 0044 0532 0130 00']) == 1
    assert 'Prüfsumme' in capsys.readouterr().err
