"""Source rewriter used by ``paanini build``.

Paanini and Python share the same block shape (headers ending in ``:``
followed by indented bodies), so the rewriter works line by line: each
source line is parsed on its own with a Lark grammar for the statement
forms and re-emitted as Python with the original indentation. The
translation is best-effort. It knows nothing about runtime values, so a
program that mixes strings and numbers in ``+`` or relies on Paanini's
number display can behave differently once translated.

Both the Devanagari keywords and their Latin transliterations
(``darsh``, ``yadi``, ``anyatha``, ``yavat``, ``paribhraman``, ``karya``,
``paridhi``) are accepted. Any identifier may be assigned to, since an
assignment is recognized before the grammar runs. Elsewhere the Latin words
and ``help`` are keywords wherever the grammar allows a statement keyword,
so a call like ``darsh(1)`` is always a print and ``x = paridhi`` without
parentheses does not translate.
"""

from __future__ import annotations

from typing import List
import keyword

from lark import Lark, Transformer, UnexpectedInput

from .errors import TranspileError
from .keywords import COMMENT_PREFIXES, HELP_TEXT
from .scanning import find_assignment, is_valid_identifier


PAANINI_LINE_GRAMMAR = r"""
    ?line: print_stmt
         | if_head
         | else_head
         | while_head
         | for_head
         | func_head
         | call_stmt
         | help_stmt

    print_stmt: _print "(" [expr] ")"
    if_head: _if cond ":"
    else_head: _else ":"
    while_head: _while cond ":"
    for_head: _for NAME "in" _range "(" expr ")" ":"
    func_head: _func NAME "(" [params] ")" ":"
    params: NAME ("," NAME)*
    call_stmt: call
    help_stmt: "help"

    ?cond: expr COMP_OP expr -> compare
         | "(" cond ")"

    ?expr: atom ("+" atom)*
    ?atom: NUMBER -> number
         | STRING -> string
         | "सत्य" -> true
         | "असत्य" -> false
         | _range "(" expr ")" -> range_call
         | call
         | NAME -> var
         | "(" expr ")" -> group
    call: NAME "(" [args] ")"
    args: expr ("," expr)*

    _print: "दर्श" | "darsh"
    _if: "यदि" | "yadi"
    _else: "अन्यथा" | "anyatha"
    _while: "यावत्" | "yavat"
    _for: "परिभ्रमण" | "paribhraman"
    _func: "कार्य" | "karya"
    _range: "परिधि" | "paridhi"

    COMP_OP: "==" | "!=" | ">=" | "<=" | ">" | "<"
    NUMBER: /-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?/
    STRING: /"[^"]*"/
    NAME: /(?!\d)(?:\w|[^\x00-\x7F])+/

    %import common.WS_INLINE
    %ignore WS_INLINE
"""


LINE_PARSER = Lark(
    PAANINI_LINE_GRAMMAR,
    start=['line', 'expr'],
    parser='lalr',
    lexer='contextual',
    maybe_placeholders=False,
)


def python_name(name: str) -> str:
    """Map a Paanini identifier to a usable Python identifier."""
    name = str(name)
    if keyword.iskeyword(name):
        return name + '_'
    return name


class PythonEmitter(Transformer):
    """Transforms the parse tree of one line into a line of Python."""

    def print_stmt(self, items):
        arg = items[0] if items else ''
        return f"print({arg})"

    def if_head(self, items):
        return f"if {items[0]}:"

    def else_head(self, items):
        return "else:"

    def while_head(self, items):
        return f"while {items[0]}:"

    def for_head(self, items):
        var, count = items
        return f"for {python_name(var)} in range(int({count})):"

    def func_head(self, items):
        name = python_name(items[0])
        params = items[1] if len(items) > 1 else []
        return f"def {name}({', '.join(params)}):"

    def params(self, items):
        return [python_name(item) for item in items]

    def call_stmt(self, items):
        return items[0]

    def help_stmt(self, items):
        return f"print({HELP_TEXT!r}, end='')"

    def compare(self, items):
        left, op, right = items
        return f"{left} {op} {right}"

    def expr(self, items):
        return ' + '.join(items)

    def number(self, items):
        return str(items[0])

    def string(self, items):
        return repr(str(items[0])[1:-1])

    def true(self, items):
        return "True"

    def false(self, items):
        return "False"

    def range_call(self, items):
        return f"list(range(int({items[0]})))"

    def var(self, items):
        return python_name(items[0])

    def group(self, items):
        return f"({items[0]})"

    def call(self, items):
        name = python_name(items[0])
        args = items[1] if len(items) > 1 else []
        return f"{name}({', '.join(args)})"

    def args(self, items):
        return list(items)


def _parse(text: str, start: str, line: int, source: str):
    try:
        tree = LINE_PARSER.parse(text, start=start)
    except UnexpectedInput as exc:
        raise TranspileError(line, source, f"column {exc.column}")
    return PythonEmitter().transform(tree)


def transpile_line(text: str, line: int = 0) -> str:
    """Translate one stripped, non-comment source line."""
    eq = find_assignment(text)
    if eq is not None:
        name = text[:eq].strip()
        if not is_valid_identifier(name) or name[0].isdigit():
            raise TranspileError(line, text, "invalid assignment target")
        return f"{python_name(name)} = {_parse(text[eq + 1:], 'expr', line, text)}"
    return _parse(text, 'line', line, text)


def transpile_to_python(source: str) -> str:
    """Translate a whole Paanini program into Python source."""
    out: List[str] = ["# Generated by paanini build", ""]
    for number, raw in enumerate(source.splitlines(), start=1):
        stripped = raw.strip()
        if not stripped:
            out.append('')
            continue
        indent = raw[:len(raw) - len(raw.lstrip())]
        if stripped.startswith(COMMENT_PREFIXES):
            comment = stripped.lstrip('!#').strip()
            out.append(f"{indent}# {comment}".rstrip())
            continue
        out.append(indent + transpile_line(stripped, number))
    return '\n'.join(out) + '\n'
