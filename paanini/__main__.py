"""CLI entry point for the Paanini interpreter.

Usage:
    python -m paanini [-v...]                     start the interactive REPL
    python -m paanini [-v...] run <file> [--verbose]
    python -m paanini build <file> [-o OUTPUT] [--check]
    python -m paanini serve [--host HOST] [--port PORT] [--quiet]
    python -m paanini example

Options:
  -v            Increase debug verbosity (can be repeated)

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import py_compile
import sys
from pathlib import Path

from .errors import TranspileError
from .interpreter import Interpreter
from .keywords import (
    ELSE_KEYWORD, FOR_KEYWORD, FUNCTION_KEYWORD, IF_KEYWORD, PRINT_KEYWORD,
    VERSION, WHILE_KEYWORD, BLOCK_INTRODUCER,
)
from .server import DEFAULT_PORT, start_server
from .transpiler import transpile_to_python

PROMPT = 'panini> '
CONTINUATION_PROMPT = '...     '
FAREWELL = 'धन्यवाद! Namaste! 🙏'
ERROR_LABEL = 'त्रुटि:'
WARNING_LABEL = 'चेतावनी:'
EXIT_COMMANDS = ('exit', 'quit', 'बाहर')
HELP_COMMANDS = ('help', 'सहायता')
CLEAR_COMMANDS = ('clear', 'स्पष्ट')
SOURCE_SUFFIX = '.panini'

EXAMPLE_PROGRAM = """\
!! नमस्ते विश्व - Hello World
दर्श("नमस्ते विश्व")

!! चर और गणना - Variables and Math
x = 5
y = 10
योग = x + y
दर्श("योग: " + योग)

!! शर्त - Conditionals
यदि x < y:
    दर्श("x छोटा है")
अन्यथा:
    दर्श("x बड़ा है")

!! लूप - Loops
यावत् x <= y:
    दर्श(x)
    x = x + 1

परिभ्रमण i in परिधि(3):
    दर्श("i = " + i)

!! फंक्शन - Functions
कार्य greet(नाम):
    दर्श("नमस्ते " + नाम)

greet("भारत")
"""


def print_welcome():
    print("🕉️  Panini REPL प्रारम्भः")
    print(f"Sanskrit Programming Language v{VERSION}")
    print("Type 'help' for commands, 'exit' to quit.")
    print()


def print_repl_help():
    print("📖 REPL Commands:")
    print(f"  {'/'.join(EXIT_COMMANDS)} - Exit REPL")
    print(f"  {'/'.join(HELP_COMMANDS)} - Show this help")
    print(f"  {'/'.join(CLEAR_COMMANDS)} - Clear screen")
    print("  A line ending in ':' starts a block; finish it with an empty line.")
    print()
    print("🎯 Sanskrit Keywords:")
    print(f"  {PRINT_KEYWORD}() darsh() - Print/Display")
    print(f"  {IF_KEYWORD} yadi - If condition")
    print(f"  {ELSE_KEYWORD} anyatha - Else")
    print(f"  {WHILE_KEYWORD} yavat - While loop")
    print(f"  {FOR_KEYWORD} paribhraman - For loop")
    print(f"  {FUNCTION_KEYWORD} karya - Function")
    print("  !! - Comments")
    print()


def report(result, stream=None):
    if result.output:
        print(result.output, end='')
    for error in result.errors:
        print(f"{ERROR_LABEL} {error}", file=stream or sys.stdout)


def read_block(first: str) -> str:
    """Read continuation lines after a block header until an empty line."""
    lines = [first]
    while True:
        try:
            line = input(CONTINUATION_PROMPT)
        except EOFError:
            break
        if not line.strip():
            break
        lines.append(line)
    return '\n'.join(lines)


def start_repl(interpreter: Interpreter) -> None:
    print_welcome()
    while True:
        try:
            raw = input(PROMPT)
        except EOFError:
            print(f"\n{FAREWELL}")
            break
        line = raw.strip()
        if not line:
            continue
        if line in EXIT_COMMANDS:
            print(FAREWELL)
            break
        if line in HELP_COMMANDS:
            print_repl_help()
            continue
        if line in CLEAR_COMMANDS:
            print("\x1b[2J\x1b[1;1H", end='')
            print_welcome()
            continue
        source = read_block(raw) if line.endswith(BLOCK_INTRODUCER) else line
        report(interpreter.run(source))


def run_file(file_path: str, verbose: bool = False, debug_level: int = 0) -> None:
    program_file = Path(file_path)
    if not program_file.exists():
        print(f"{ERROR_LABEL} File not found: {file_path}", file=sys.stderr)
        sys.exit(1)
    if program_file.suffix != SOURCE_SUFFIX:
        print(f"{WARNING_LABEL} File should have {SOURCE_SUFFIX} extension", file=sys.stderr)
    if verbose:
        print(f"▶️  Executing: {file_path}")
    try:
        source = program_file.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        print(f"{ERROR_LABEL} Cannot read file {file_path}: {e}", file=sys.stderr)
        sys.exit(1)
    if verbose:
        print(f"📄 Source: {len(source.splitlines())} lines")
    interpreter = Interpreter(debug_level=debug_level)
    try:
        result = interpreter.run(source)
    finally:
        interpreter.close()
    report(result, stream=sys.stderr)
    if result.errors:
        sys.exit(1)
    if verbose:
        print("\n✅ Execution completed successfully")


def build_file(file_path: str, output: str = 'output', check: bool = False) -> Path:
    program_file = Path(file_path)
    if not program_file.exists():
        print(f"{ERROR_LABEL} File not found: {file_path}", file=sys.stderr)
        sys.exit(1)
    print(f"🔧 Building: {file_path}")
    source = program_file.read_text(encoding='utf-8')
    try:
        python_code = transpile_to_python(source)
    except TranspileError as e:
        print(f"{ERROR_LABEL} Transpilation failed: {e}", file=sys.stderr)
        sys.exit(1)
    out_path = Path(output if output.endswith('.py') else output + '.py')
    out_path.write_text(python_code, encoding='utf-8')
    print(f"✅ Generated: {out_path}")
    if check:
        try:
            py_compile.compile(str(out_path), doraise=True)
        except py_compile.PyCompileError as e:
            print(f"{ERROR_LABEL} Build failed: {e.msg}", file=sys.stderr)
            sys.exit(1)
        print(f"🎉 Compiled: {out_path}")
    return out_path


def show_example() -> None:
    print("📚 Panini Sanskrit Programming Examples")
    print()
    print(EXAMPLE_PROGRAM)
    print("💡 Usage:")
    print("  1. Save the above code as 'hello.panini'")
    print("  2. Run with: paanini run hello.panini")
    print("  3. Build with: paanini build hello.panini")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog='paanini',
        description="Panini - Sanskrit programming language with Python-like syntax",
    )
    parser.add_argument('--version', action='version', version=f"paanini {VERSION}")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    sub = parser.add_subparsers(dest='command')
    sub.add_parser('repl', help='start the interactive REPL (default)')
    run_p = sub.add_parser('run', help='execute a .panini source file')
    run_p.add_argument('file', help='path to the .panini file to execute')
    run_p.add_argument('--verbose', action='store_true', help='print execution details')
    build_p = sub.add_parser('build', help='translate a .panini file to Python')
    build_p.add_argument('file', help='path to the .panini file to build')
    build_p.add_argument('-o', '--output', default='output', help='name of the generated Python file')
    build_p.add_argument('--check', action='store_true', help='byte-compile the generated file')
    serve_p = sub.add_parser('serve', help='start the HTTP service')
    serve_p.add_argument('--host', default='0.0.0.0', help='interface to bind')
    serve_p.add_argument('-p', '--port', type=int, default=DEFAULT_PORT, help='port number for the server')
    serve_p.add_argument('--quiet', action='store_true', help='do not log requests')
    sub.add_parser('example', help='show an example program')
    args = parser.parse_args(argv)

    if args.command == 'run':
        run_file(args.file, verbose=args.verbose, debug_level=args.v)
        return
    if args.command == 'build':
        build_file(args.file, output=args.output, check=args.check)
        return
    if args.command == 'serve':
        start_server(args.host, args.port, quiet=args.quiet)
        return
    if args.command == 'example':
        show_example()
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        start_repl(interpreter)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
