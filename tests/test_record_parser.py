"""Test: Bundesbank-Zeilen → BankRecord"""

import pytest

from modules.bank_registry.services.record_parser import (
    BankRecord, SkipReason, clean_field, iter_records, parse_line, split_lines
)
from conftest import HEADER, bank_line


def test_quoted_line_is_normalized():
    line = '"10000000";"1";"Deutsche Bundesbank";"10591";"Berlin";"";"";"";"";"";"";"";""'

    parsed = parse_line(line, 1)

    assert parsed.is_record
    record = parsed.record
    assert record.routing_code == '10000000'
    assert record.record_marker == '1'
    assert record.name == 'Deutsche Bundesbank'
    assert record.postal_code == '10591'
    assert record.city == 'Berlin'
    assert record.bic == ''
    assert record.successor_routing_code == ''


def test_unquoted_fields_are_trimmed():
    parsed = parse_line(' 37040044 ;1; Commerzbank ;50447;Köln ;Commerzbank Köln;;COBADEFFXXX;09;1;U;0;0 ')

    assert parsed.record.routing_code == '37040044'
    assert parsed.record.name == 'Commerzbank'
    assert parsed.record.city == 'Köln'
    assert parsed.record.bic == 'COBADEFFXXX'


def test_line_with_twelve_fields_is_skipped():
    parsed = parse_line(bank_line('10000000', field_count=12))

    assert not parsed.is_record
    assert parsed.skip_reason is SkipReason.TOO_FEW_FIELDS


def test_empty_routing_code_is_skipped():
    parsed = parse_line(bank_line(''))

    assert parsed.skip_reason is SkipReason.MISSING_ROUTING_CODE


@pytest.mark.parametrize('line', ['', '   ', '\t'])
def test_blank_line_is_skipped(line):
    assert parse_line(line).skip_reason is SkipReason.EMPTY_LINE


def test_extra_fields_are_ignored():
    parsed = parse_line(bank_line('10000000', field_count=13) + ';"extra";"more"')

    assert parsed.is_record
    assert parsed.record.successor_routing_code == '00000000'


def test_clean_field_strips_only_one_quote_per_side():
    assert clean_field('""x""') == '"x"'
    assert clean_field('" Berlin "') == 'Berlin'
    assert clean_field('"') == ''


def test_from_fields_checks_arity():
    with pytest.raises(ValueError):
        BankRecord.from_fields(['1'] * 12)


def test_to_row_maps_positional_fields_to_columns():
    record = parse_line(bank_line('70150000', name='Stadtsparkasse München', city='München',
                                  bic='SSKMDEMMXXX')).record

    row = record.to_row()

    assert row['bankleitzahl'] == '70150000'
    assert row['bezeichnung'] == 'Stadtsparkasse München'
    assert row['ort'] == 'München'
    assert row['bic'] == 'SSKMDEMMXXX'
    assert row['bankleitzahllöschung'] == '0'
    assert row['nachfolge_bankleitzahl'] == '00000000'
    assert len(row) == 13


def test_header_is_always_skipped_even_if_it_looks_like_data():
    content = '\n'.join([bank_line('99999999'), bank_line('10000000')])

    parsed = list(iter_records(content))

    assert [p.record.routing_code for p in parsed] == ['10000000']
    assert parsed[0].line_number == 1


def test_iter_records_handles_crlf_and_trailing_newline():
    content = '\r\n'.join([HEADER, bank_line('10000000'), bank_line('10010010'), ''])

    parsed = list(iter_records(content))

    assert [p.record.routing_code for p in parsed if p.is_record] == ['10000000', '10010010']
    assert parsed[-1].skip_reason is SkipReason.EMPTY_LINE


def test_split_lines_keeps_latin1_control_characters():
    # \x85 (NEL) ist in Latin-1 ein Zeichen und darf keine Zeile beenden
    assert split_lines('a\x85b\r\nc\nd') == ['a\x85b', 'c', 'd']
