"""Test: Bank-Lookups auf der importierten Tabelle"""

import pytest

from modules.bank_registry import BankImportService, BankLookupService
from conftest import bank_line


@pytest.fixture
def lookup(database, write_bank_file):
    path = write_bank_file([
        bank_line('37040044', name='Commerzbank', short_name='Commerzbank Köln', city='Köln',
                  bic='COBADEFFXXX'),
        bank_line('10000000', name='Deutsche Bundesbank', short_name='BBk Berlin', city='Berlin',
                  bic='MARKDEF1100'),
        bank_line('70150000', name='Stadtsparkasse München', short_name='St Sparkasse München',
                  city='München', bic='SSKMDEMMXXX'),
        bank_line('37050198', name='Sparkasse KölnBonn', short_name='Spk KölnBonn', city='Köln',
                  bic='COLSDE33XXX'),
        bank_line('37050299', name='Kreissparkasse Köln', short_name='Sparkasse Kreis Köln',
                  city='Köln', bic='COKSDE33XXX'),
        bank_line('12345678', name='Sparkasse ohne BIC', city='Hamburg', bic=''),
    ])
    BankImportService(database).import_file(path)
    return BankLookupService(database)


def test_find_by_routing_code(lookup):
    bank = lookup.find_by_routing_code('37040044')

    assert bank['bezeichnung'] == 'Commerzbank'
    assert bank['bic'] == 'COBADEFFXXX'


def test_find_by_routing_code_requires_bic_and_eight_digits(lookup):
    assert lookup.find_by_routing_code('12345678') is None
    assert lookup.find_by_routing_code('3704004') is None
    assert lookup.find_by_routing_code('') is None


def test_find_by_iban(lookup):
    bank = lookup.find_by_iban('DE89 3704 0044 0532 0130 00')

    assert bank['bankleitzahl'] == '37040044'


def test_find_by_iban_rejects_foreign_or_malformed(lookup):
    assert lookup.find_by_iban('AT611904300234573201') is None
    assert lookup.find_by_iban('DE8937040044053201300') is None


def test_find_by_bic_is_case_insensitive(lookup):
    bank = lookup.find_by_bic('markdef1100')

    assert bank['bankleitzahl'] == '10000000'
    assert lookup.find_by_bic('') is None


def test_search_by_name_orders_short_name_then_name_prefix(lookup):
    results = lookup.search_by_name('sparkasse')

    assert [r['bankleitzahl'] for r in results] == ['37050299', '37050198', '70150000']


def test_search_by_name_limit_and_minimum_length(lookup):
    assert lookup.search_by_name('s') == []
    assert len(lookup.search_by_name('sparkasse', limit=1)) == 1


def test_extended_bank_info(lookup):
    info = lookup.get_extended_bank_info('DE89370400440532013000')

    assert info['found'] is True
    assert info['routing_code'] == '37040044'
    assert info['bank'] == {
        'name': 'Commerzbank',
        'short_name': 'Commerzbank Köln',
        'bic': 'COBADEFFXXX',
        'city': 'Köln',
    }


def test_extended_bank_info_not_found(lookup):
    info = lookup.get_extended_bank_info('DE02120300000000202051')

    assert info == {'found': False, 'iban': 'DE02120300000000202051', 'routing_code': None, 'bank': None}


def test_status(lookup):
    status = lookup.get_status()

    assert status['available'] is True
    assert status['total_banks'] == 6
    assert status['unique_bics'] == 5
    assert status['last_update'] is not None


def test_status_without_table(database):
    status = BankLookupService(database).get_status()

    assert status['available'] is False
    assert 'error' in status
