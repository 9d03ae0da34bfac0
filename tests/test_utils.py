from datetime import date, datetime, time, timedelta, timezone

import pandas as pd
import pytest

from shifttrades.errors import InvalidTime
from shifttrades.utils import (
    elapsed_hours,
    format_us_date,
    is_blank,
    normalize_date,
    normalize_name,
    parse_hours_value,
    parse_time_fraction,
    shift_hours,
)


def test_normalize_name_trims_and_uppercases():
    assert normalize_name('  alice smith ') == 'ALICE SMITH'
    assert normalize_name(None) == ''
    assert normalize_name(float('nan')) == ''


def test_normalize_name_is_idempotent():
    once = normalize_name(' Bob ')
    assert normalize_name(once) == once


def test_is_blank():
    assert is_blank(None)
    assert is_blank('   ')
    assert is_blank(float('nan'))
    assert is_blank(pd.NaT)
    assert not is_blank(0)
    assert not is_blank('x')


@pytest.mark.parametrize('text,hours', [
    ('12:00', 12),
    ('0:00', 0),
    ('9:00 AM', 9),
    ('9:00 pm', 21),
    ('12:00 AM', 0),
    ('12:30 PM', 12.5),
    ('17:45', 17.75),
    ('6:00:36', 6.01),
    ('1/2/2024 9:00 PM', 21),
    ('2024-01-02 21:00:00', 21),
    ('2024-01-02T06:30', 6.5),
    ('0.25', 6),
])
def test_parse_time_text(text, hours):
    assert parse_time_fraction(text) * 24 == pytest.approx(hours)


def test_parse_time_numeric_drops_date_part():
    assert parse_time_fraction(0.5) == pytest.approx(0.5)
    assert parse_time_fraction(45292.75) == pytest.approx(0.75)
    assert parse_time_fraction(1) == 0


def test_parse_time_from_time_objects():
    assert parse_time_fraction(time(18, 0)) == pytest.approx(0.75)
    assert parse_time_fraction(datetime(2024, 1, 2, 6, 0)) == pytest.approx(0.25)
    assert parse_time_fraction(pd.Timestamp('2024-01-02 12:00')) == pytest.approx(0.5)


@pytest.mark.parametrize('value', [
    '25:00', '13:00 PM', '9:60', '9:00:75', '', '   ', None, 'noon', '1.5', '-0.2',
    True, float('nan'), [9, 0],
])
def test_parse_time_rejects(value):
    with pytest.raises(InvalidTime):
        parse_time_fraction(value)


def test_elapsed_hours_simple_and_overnight():
    assert elapsed_hours(9 / 24, 17 / 24) == pytest.approx(8)
    assert elapsed_hours(22 / 24, 2 / 24) == pytest.approx(4)


def test_elapsed_hours_same_time_is_zero():
    assert elapsed_hours(0.5, 0.5) == 0


def test_elapsed_hours_caps_at_24():
    assert elapsed_hours(0, 1.5) == 24


def test_shift_hours_overnight():
    assert shift_hours('22:00', '02:00') == pytest.approx(4)
    assert shift_hours('10:00 PM', '6:00 AM') == pytest.approx(8)


def test_shift_hours_unreadable_time_is_zero():
    assert shift_hours('later', '02:00') == 0
    assert shift_hours('22:00', '') == 0


@pytest.mark.parametrize('value,expected', [
    ('8', 8.0),
    ('7.5 hrs', 7.5),
    ('12h', 12.0),
    (' 4.25 ', 4.25),
    (6, 6.0),
    ('-3', -3.0),
    ('abc', None),
    ('', None),
    (None, None),
])
def test_parse_hours_value(value, expected):
    assert parse_hours_value(value) == expected


@pytest.mark.parametrize('serial,expected', [
    (45658, '2025-01-01'),
    (45292, '2024-01-01'),
    (45292.9, '2024-01-01'),
    (60, '1900-02-28'),
    (1, '1899-12-31'),
])
def test_normalize_date_serial(serial, expected):
    assert normalize_date(serial) == expected


@pytest.mark.parametrize('text,expected', [
    ('1/2/2024', '2024-01-02'),
    ('2024-01-02', '2024-01-02'),
    ('January 5, 2024', '2024-01-05'),
    ('2024-01-02T23:30:00-05:00', '2024-01-03'),
    (' 03/15/2024 ', '2024-03-15'),
])
def test_normalize_date_text(text, expected):
    assert normalize_date(text) == expected


def test_normalize_date_passes_through_unparseable_text():
    assert normalize_date('unknown') == 'unknown'


def test_normalize_date_datetime_objects():
    assert normalize_date(datetime(2024, 3, 5, 14, 0)) == '2024-03-05'
    assert normalize_date(date(2024, 3, 5)) == '2024-03-05'
    assert normalize_date(pd.Timestamp('2024-03-05')) == '2024-03-05'
    aware = datetime(2024, 3, 5, 22, 0, tzinfo=timezone(timedelta(hours=-5)))
    assert normalize_date(aware) == '2024-03-06'


def test_normalize_date_other_types_are_stringified():
    assert normalize_date(True) == 'True'
    assert normalize_date(None) == ''


def test_format_us_date():
    assert format_us_date('2024-01-02') == '1/2/2024'
    assert format_us_date('sometime') == 'sometime'
