import pytest

from shifttrades.columns import (
    FIELD_SYNONYMS,
    ColumnMode,
    HeaderColumnResolver,
    PositionalColumnResolver,
    make_resolver,
    match_header,
)
from shifttrades.errors import MissingRequiredColumns

from conftest import positional_row

SYNONYMS = dict(FIELD_SYNONYMS)


def test_positional_resolver_reads_columns_e_f_g_h_k():
    row = positional_row('ALICE', '1/2/2024', '9:00 AM', '5:00 PM', 'BOB')
    fields = PositionalColumnResolver().resolve(row)
    assert fields.person_a == 'ALICE'
    assert fields.date == '1/2/2024'
    assert fields.start == '9:00 AM'
    assert fields.end == '5:00 PM'
    assert fields.person_b == 'BOB'
    assert fields.hours == ''


def test_positional_resolver_short_row_yields_blanks():
    fields = PositionalColumnResolver().resolve(['a', 'b', 'c', 'd', 'ALICE', '1/2/2024'])
    assert fields.person_a == 'ALICE'
    assert fields.start == ''
    assert fields.person_b == ''


def test_header_resolver_canonical_headers():
    headers = ['Person 1', 'Trade Date', 'Trade Start Time', 'Trade End Time', 'Person 2']
    resolver = HeaderColumnResolver.from_headers(headers)
    assert resolver.columns == {
        'person_a': 0,
        'person_b': 4,
        'date': 1,
        'start': 2,
        'end': 3,
        'hours': None,
    }


def test_header_match_is_case_and_substring_tolerant():
    headers = ['employee 1 name', 'shift date']
    assert match_header(headers, SYNONYMS['person_a']) == 0
    assert match_header(headers, SYNONYMS['date']) == 1


def test_header_resolver_fuzzy_headers():
    resolver = HeaderColumnResolver.from_headers(
        ['  Employee 1 Name', 'SHIFT DATE', 'Start', 'End', 'Partner'])
    fields = resolver.resolve(['Alice', '2024-01-02', '08:00', '16:00', 'Bob'])
    assert (fields.person_a, fields.date, fields.start, fields.end, fields.person_b) == \
        ('Alice', '2024-01-02', '08:00', '16:00', 'Bob')


def test_header_resolver_synonym_priority_beats_column_order():
    # 'person 1' outranks 'employee' even though the Employee column comes first
    resolver = HeaderColumnResolver.from_headers(['Employee', 'Person 1', 'Date', 'Person 2'])
    assert resolver.columns['person_a'] == 1


def test_header_resolver_hours_fallback_column():
    resolver = HeaderColumnResolver.from_headers(['From', 'To', 'Date', 'Duration'])
    fields = resolver.resolve(['a', 'b', '2024-01-02', '6'])
    assert fields.hours == '6'
    assert fields.start == ''


def test_header_resolver_missing_required_columns():
    with pytest.raises(MissingRequiredColumns) as exc:
        HeaderColumnResolver.from_headers(['Name', 'Date', 'Hours'])
    assert exc.value.missing == ['Person 1', 'Person 2']
    assert 'Person 1' in exc.value.message


def test_column_mode_parse():
    assert ColumnMode.parse('HEADER') is ColumnMode.HEADER
    assert ColumnMode.parse(ColumnMode.POSITIONAL) is ColumnMode.POSITIONAL
    with pytest.raises(ValueError):
        ColumnMode.parse('bogus')


def test_make_resolver():
    assert isinstance(make_resolver('positional'), PositionalColumnResolver)
    assert isinstance(make_resolver('header', ['from', 'to', 'date']), HeaderColumnResolver)
