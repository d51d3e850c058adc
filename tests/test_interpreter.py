import io

from paanini.interpreter import PRINT_USAGE, Interpreter, RunResult, run_program
from paanini.keywords import HELP_TEXT


def test_assignment_then_print():
    output, errors = run_program('x = 2 + 3\nदर्श(x)')
    assert output == '5\n'
    assert errors == []


def test_string_concatenation_is_left_to_right():
    output, errors = run_program('दर्श("x" + "y" + "z")')
    assert output == 'xyz\n'
    assert errors == []


def test_mixed_concatenation():
    output, _ = run_program('दर्श(1 + "a")\nदर्श("a" + 1 + 2)\nदर्श(1 + 2 + "a")')
    assert output == '1a\na12\n3a\n'


def test_number_addition_is_double_precision():
    output, _ = run_program('दर्श(0.1 + 0.2)\nदर्श(1e+5 + 1)\nदर्श(-2 + 0.5)')
    assert output == '0.30000000000000004\n100001\n-1.5\n'


def test_literals_and_grouping():
    output, errors = run_program('दर्श(सत्य)\nदर्श(असत्य)\nदर्श((1 + 2))\nदर्श("a, b")')
    assert output == 'सत्य\nअसत्य\n3\na, b\n'
    assert errors == []


def test_range_is_a_list_value():
    output, _ = run_program('दर्श(परिधि(3))\nदर्श("r" + परिधि(2))')
    assert output == '[0, 1, 2]\nr[0, 1]\n'


def test_empty_print_shows_null():
    assert run_program('दर्श()').output == 'null\n'


def test_unaddable_values_print_nothing():
    output, errors = run_program('दर्श(सत्य + 1)')
    assert output == ''
    assert errors == ['Line 1: त्रुटिः: अभिव्यक्ति न संगृहीता -> सत्य + 1']


def test_undefined_variable_keeps_previous_value():
    output, errors = run_program('x = 1\nx = y\nदर्श(x)')
    assert output == '1\n'
    assert errors == ['Line 2: त्रुटिः: अभिव्यक्ति न संगृहीता -> y']


def test_print_is_not_an_expression():
    _, errors = run_program('x = दर्श(1)')
    assert errors == [f'Line 1: {PRINT_USAGE}']


def test_equals_inside_strings_is_not_assignment():
    output, errors = run_program('s = "a=b"\nदर्श(s)\nदर्श("x = 1")\nदर्श(s + "==")')
    assert output == 'a=b\nx = 1\na=b==\n'
    assert errors == []


def test_invalid_assignment_target():
    _, errors = run_program('a b = 2')
    assert errors == ['Line 1: त्रुटिः: असाइनस्य नाम अवैधम्']


def test_unknown_command_is_isolated():
    output, errors = run_program('x = 1\nfoo bar\nदर्श(x)')
    assert output == '1\n'
    assert errors == ['Line 2: अज्ञाता आज्ञा: foo bar']


def test_comments_and_blank_lines_are_skipped():
    output, errors = run_program('!! टिप्पणी\n# comment\n\nदर्श(1)')
    assert output == '1\n'
    assert errors == []


def test_help_is_stable_across_context_state():
    interp = Interpreter()
    assert interp.run('help') == RunResult(HELP_TEXT, [])
    interp.run('x = 1\nकार्य f():\n    दर्श(x)')
    output, errors = interp.run('help')
    assert output == HELP_TEXT
    assert errors == []


def test_context_persists_between_runs():
    interp = Interpreter()
    interp.run('x = 41')
    assert interp.run('दर्श(x + 1)').output == '42\n'


def test_copy_is_independent():
    base = Interpreter()
    base.run('x = 1')
    child = base.copy()
    child.run('x = 2\nकार्य f():\n    दर्श("f")')
    assert child.run('दर्श(x)').output == '2\n'
    assert base.run('दर्श(x)').output == '1\n'
    assert base.run('f()').errors == ['Line 1: त्रुटिः: अज्ञातः कार्यः: f']


def test_debug_trace():
    trace = io.StringIO()
    interp = Interpreter(debug_level=2, debug_fp=trace)
    interp.run('x = 5\nकार्य f():\n    दर्श(x)')
    text = trace.getvalue()
    assert 'line 1: SimpleStmt' in text
    assert 'assign x: Number = 5' in text
    assert 'define function f()' in text


def test_debug_file(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    interp = Interpreter(debug_level=1, debug_file=str(debug_file))
    interp.run('oops')
    interp.close()
    assert 'line 1: SyntaxError: अज्ञाता आज्ञा: oops' in debug_file.read_text(encoding='utf-8')
