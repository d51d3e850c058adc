from pathlib import Path

from paanini.__main__ import EXAMPLE_PROGRAM
from paanini.interpreter import Interpreter, run_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def run_example(name):
    source = (EXAMPLES / name).read_text(encoding='utf-8')
    return Interpreter().run(source)


def test_program_hello():
    output, errors = run_example('hello.panini')
    assert errors == []
    assert output.splitlines() == [
        'नमस्ते विश्व',
        'योग: 15',
        'x छोटा है',
        '5', '6', '7', '8', '9', '10',
        'i = 0', 'i = 1', 'i = 2',
        'नमस्ते भारत',
    ]


def test_program_loops():
    output, errors = run_example('loops.panini')
    assert errors == []
    assert output.splitlines() == [
        'सम 0', '1', '2',
        '1', 'सम 1', '3',
        '2', '3', 'सम 2',
        'कुल = 10',
    ]


def test_program_functions():
    output, errors = run_example('functions.panini')
    assert errors == []
    assert output.splitlines() == [
        'नाम: पाणिनि',
        'आयु: 2500',
        'अन्तः x = 100',
        'बहिः x = 1',
    ]


def test_program_errors():
    output, errors = run_example('errors.panini')
    assert output == 'अन्तिम 1\n'
    assert errors == [
        'Line 3: अज्ञाता आज्ञा: अज्ञात पंक्ति',
        'Line 4: त्रुटिः: अभिव्यक्ति न संगृहीता -> y',
        'Line 7: त्रुटिः: कार्य तर्कसंख्या न समा',
    ]


def test_builtin_example_program_runs_cleanly():
    output, errors = run_program(EXAMPLE_PROGRAM)
    assert errors == []
    assert run_example('hello.panini').output == output
