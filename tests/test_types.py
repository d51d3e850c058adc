import math

from paanini.types import (
    NULL, BoolVal, ListVal, NumberVal, StrVal, format_number, to_string,
    truncate_count, type_name,
)


def test_integral_numbers_have_no_fraction():
    assert format_number(15.0) == '15'
    assert format_number(-3.0) == '-3'
    assert format_number(0.0) == '0'


def test_fractions_use_shortest_digits():
    assert format_number(2.5) == '2.5'
    assert format_number(0.1 + 0.2) == '0.30000000000000004'


def test_numbers_never_use_exponent_notation():
    assert format_number(1e21) == '1000000000000000000000'
    assert format_number(1e-7) == '0.0000001'


def test_non_finite_numbers():
    assert format_number(math.inf) == 'inf'
    assert format_number(-math.inf) == '-inf'
    assert format_number(math.nan) == 'NaN'


def test_display_forms():
    assert to_string(StrVal('नमस्ते')) == 'नमस्ते'
    assert to_string(BoolVal(True)) == 'सत्य'
    assert to_string(BoolVal(False)) == 'असत्य'
    assert to_string(NULL) == 'null'
    items = (NumberVal(0.0), StrVal('a'), BoolVal(True), NULL)
    assert to_string(ListVal(items)) == '[0, a, सत्य, null]'
    assert to_string(ListVal()) == '[]'


def test_type_names():
    assert type_name(NumberVal(1.0)) == 'Number'
    assert type_name(StrVal('')) == 'Str'
    assert type_name(ListVal()) == 'List'
    assert type_name(NULL) == 'Null'


def test_truncate_count():
    assert truncate_count(2.9) == 2
    assert truncate_count(-1.5) == -1
    assert truncate_count(math.nan) == 0
    assert truncate_count(math.inf) > 10 ** 9
