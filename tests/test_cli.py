import builtins
from pathlib import Path

import pytest

from paanini.__main__ import FAREWELL, main

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def feed_input(monkeypatch, lines):
    pending = iter(lines)

    def fake_input(prompt=''):
        try:
            return next(pending)
        except StopIteration:
            raise EOFError
    monkeypatch.setattr(builtins, 'input', fake_input)


def test_run_file(capsys):
    main(['run', str(EXAMPLES / 'functions.panini')])
    out = capsys.readouterr().out
    assert out.startswith('नाम: पाणिनि\n')


def test_run_file_with_errors_exits_1(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['run', str(EXAMPLES / 'errors.panini')])
    assert exc.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == 'अन्तिम 1\n'
    assert 'त्रुटि: Line 3: अज्ञाता आज्ञा: अज्ञात पंक्ति' in captured.err


def test_run_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(['run', str(tmp_path / 'missing.panini')])
    assert exc.value.code == 1
    assert 'File not found' in capsys.readouterr().err


def test_run_warns_about_extension(tmp_path, capsys):
    program = tmp_path / 'prog.txt'
    program.write_text('दर्श(1)\n', encoding='utf-8')
    main(['run', '--verbose', str(program)])
    captured = capsys.readouterr()
    assert 'चेतावनी' in captured.err
    assert '1\n' in captured.out
    assert 'Execution completed successfully' in captured.out


def test_verbosity_writes_debug_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    main(['-v', 'run', str(EXAMPLES / 'hello.panini')])
    trace = (tmp_path / 'debug.txt').read_text(encoding='utf-8')
    assert 'line 2: SimpleStmt' in trace


def test_build(tmp_path, capsys):
    target = tmp_path / 'hello'
    main(['build', str(EXAMPLES / 'hello.panini'), '-o', str(target), '--check'])
    generated = tmp_path / 'hello.py'
    assert generated.exists()
    code = generated.read_text(encoding='utf-8')
    assert "print('नमस्ते विश्व')" in code
    assert 'def greet(नाम):' in code
    assert 'Compiled' in capsys.readouterr().out


def test_build_rejects_untranslatable_source(tmp_path, capsys):
    program = tmp_path / 'bad.panini'
    program.write_text('दर्श(\n', encoding='utf-8')
    with pytest.raises(SystemExit) as exc:
        main(['build', str(program), '-o', str(tmp_path / 'out')])
    assert exc.value.code == 1
    assert 'Transpilation failed' in capsys.readouterr().err


def test_example(capsys):
    main(['example'])
    out = capsys.readouterr().out
    assert 'परिभ्रमण i in परिधि(3):' in out
    assert 'paanini run hello.panini' in out


def test_repl_keeps_context(monkeypatch, capsys):
    feed_input(monkeypatch, ['x = 5', 'दर्श(x + 1)', 'oops', 'exit'])
    main([])
    out = capsys.readouterr().out
    assert '6\n' in out
    assert 'त्रुटि: Line 1: अज्ञाता आज्ञा: oops' in out
    assert out.rstrip().endswith(FAREWELL)


def test_repl_reads_blocks(monkeypatch, capsys):
    feed_input(monkeypatch, ['यदि 1 < 2:', '    दर्श("हाँ")', '', 'help'])
    main(['repl'])
    out = capsys.readouterr().out
    assert 'हाँ\n' in out
    assert 'REPL Commands' in out
    assert out.rstrip().endswith(FAREWELL)
