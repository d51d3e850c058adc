from paanini.interpreter import RECURSION_TOO_DEEP, run_program


def test_function_prints_reach_the_caller():
    source = 'कार्य greet(नाम):\n    दर्श("नमस्ते " + नाम)\ngreet("भारत")\ngreet("विश्व")\n'
    output, errors = run_program(source)
    assert output == 'नमस्ते भारत\nनमस्ते विश्व\n'
    assert errors == []


def test_arity_mismatch_has_no_side_effects():
    source = 'कार्य f(a):\n    दर्श("called")\nf(1, 2)\n'
    output, errors = run_program(source)
    assert output == ''
    assert errors == ['Line 3: त्रुटिः: कार्य तर्कसंख्या न समा']


def test_unknown_function():
    _, errors = run_program('g(1)')
    assert errors == ['Line 1: त्रुटिः: अज्ञातः कार्यः: g']


def test_function_reads_but_never_writes_caller_variables():
    source = (
        'x = 1\n'
        'कार्य f():\n'
        '    दर्श(x)\n'
        '    x = 2\n'
        '    दर्श(x)\n'
        'f()\n'
        'दर्श(x)\n'
    )
    assert run_program(source).output == '1\n2\n1\n'


def test_parameters_do_not_leak():
    output, errors = run_program('कार्य f(a):\n    दर्श(a)\nf(3)\nदर्श(a)\n')
    assert output == '3\n'
    assert errors == ['Line 4: त्रुटिः: अभिव्यक्ति न संगृहीता -> a']


def test_function_call_value_is_null():
    source = 'कार्य f():\n    दर्श("in")\nx = f()\nदर्श(x)\n'
    assert run_program(source).output == 'in\nnull\n'


def test_errors_in_function_bodies_use_body_lines():
    output, errors = run_program('कार्य f():\n    oops\n    दर्श("after")\nf()\n')
    assert output == 'after\n'
    assert errors == ['Line 2: अज्ञाता आज्ञा: oops']


def test_redefinition_replaces_function():
    source = 'कार्य f():\n    दर्श(1)\nकार्य f():\n    दर्श(2)\nf()\n'
    assert run_program(source).output == '2\n'


def test_functions_see_later_caller_state():
    source = 'कार्य show():\n    दर्श(v)\nv = "पहला"\nshow()\nv = "दूसरा"\nshow()\n'
    assert run_program(source).output == 'पहला\nदूसरा\n'


def test_runaway_recursion_is_reported():
    output, errors = run_program('कार्य f():\n    f()\nf()\nदर्श("done")\n')
    assert output == 'done\n'
    assert errors == [f'Line 3: {RECURSION_TOO_DEEP}']


def test_branching_recursion_stops_at_the_first_overflow():
    source = 'कार्य f():\n    f()\n    f()\nf()\nदर्श("done")\n'
    output, errors = run_program(source)
    assert output == 'done\n'
    assert errors == [f'Line 4: {RECURSION_TOO_DEEP}']


def test_recursion_inside_a_loop_stops():
    source = 'कार्य f():\n    परिभ्रमण i in परिधि(3):\n        f()\nf()\n'
    assert run_program(source).errors == [f'Line 4: {RECURSION_TOO_DEEP}']
