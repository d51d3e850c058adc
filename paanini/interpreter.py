"""Interpreter for the Paanini language.

Source text is normalized and split into statement nodes by
:mod:`paanini.parser`; this module executes those nodes. Expressions and
conditions are never tokenized: they are evaluated directly over their
text, locating operators with the quote and parenthesis aware scanner in
:mod:`paanini.scanning`.

Execution is resilient. Every statement either succeeds or contributes one
``Line N: message`` entry to the run's error list, and the next statement
always runs. :meth:`Interpreter.run` never raises.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, TextIO
import operator
import re

from .ast import Block, ForStmt, FuncDecl, IfStmt, InvalidStmt, Node, SimpleStmt, WhileStmt
from .builtin_function import BuiltinFunction
from .environment import Environment, FunctionDef
from .errors import PaaniniError, evaluation_error, runtime_error, syntax_error
from .keywords import (
    FALSE_KEYWORD, HELP_COMMAND, HELP_TEXT, LOOP_GUARD, PRINT_KEYWORD,
    RANGE_KEYWORD, TRUE_KEYWORD,
)
from .parser import parse_program
from .scanning import (
    find_assignment, find_last_top_level, find_top_level, is_enclosed, is_exponent_sign,
    is_string_literal, is_valid_identifier, split_args, split_call,
    starts_with_keyword,
)
from .types import (
    NULL, BoolVal, ErrorVal, ListVal, NumberVal, StrVal, Value,
    to_string, truncate_count, type_name,
)

NUMBER_RE = re.compile(
    r'[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)',
    re.IGNORECASE,
)

# Checked in this order; the first operator found at top level wins.
COMPARISONS = (
    ('==', operator.eq),
    ('!=', operator.ne),
    ('>=', operator.ge),
    ('<=', operator.le),
    ('>', operator.gt),
    ('<', operator.lt),
)

PRINT_USAGE = f"त्रुटिः: {PRINT_KEYWORD} प्रयोगः केवलं {PRINT_KEYWORD}(expr) स्वरूपेण भवेत्"
RANGE_NOT_NUMBER = f"त्रुटिः: {RANGE_KEYWORD}(n) मध्ये n संख्या भवेत्"
RECURSION_TOO_DEEP = "त्रुटिः: कार्य आह्वानानि अतिगभीराणि"
NESTING_TOO_DEEP = "त्रुटिः: खण्डाः अतिगभीराः"


@dataclass
class RunResult:
    """Output and errors accumulated by one run.

    Unpacks as ``output, errors``.
    """
    output: str = ''
    errors: List[str] = field(default_factory=list)

    def write(self, text: str):
        self.output += text
        if not text.endswith('\n'):
            self.output += '\n'

    def add_error(self, line: int, message: str):
        self.errors.append(f"Line {line}: {message}")

    def __iter__(self) -> Iterator:
        yield self.output
        yield self.errors


def parse_number(text: str) -> Optional[float]:
    if NUMBER_RE.fullmatch(text):
        return float(text)
    return None


def add_values(a: Value, b: Value) -> Optional[Value]:
    if isinstance(a, NumberVal) and isinstance(b, NumberVal):
        return NumberVal(a.value + b.value)
    if isinstance(a, StrVal) and isinstance(b, StrVal):
        return StrVal(a.value + b.value)
    if isinstance(a, StrVal):
        return StrVal(a.value + to_string(b))
    if isinstance(b, StrVal):
        return StrVal(to_string(a) + b.value)
    return None


class Interpreter:
    """Executes Paanini source against one long-lived execution context.

    The same instance may run many sources (a REPL feeds it line by line);
    variables and functions persist between runs. Use :meth:`copy` to hand
    an independent context to another owner.
    """
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt',
                 env: Optional[Environment] = None, debug_fp: Optional[TextIO] = None):
        self.global_env = env if env is not None else Environment()
        self.builtins: Dict[str, BuiltinFunction] = {}
        self.debug_level = debug_level
        if debug_fp is None and debug_level > 0:
            debug_fp = open(debug_file, 'w', encoding='utf-8')
        self.debug_fp = debug_fp
        self.load_builtins()

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def copy(self) -> 'Interpreter':
        """Return an interpreter with a private copy of this context."""
        return Interpreter(self.debug_level, env=self.global_env.copy(), debug_fp=self.debug_fp)

    def load_builtins(self):
        def std_range(args: List[Value]) -> Value:
            n = args[0]
            if not isinstance(n, NumberVal):
                raise syntax_error(RANGE_NOT_NUMBER)
            return ListVal(tuple(NumberVal(float(i)) for i in range(truncate_count(n.value))))

        def std_print(args: List[Value]) -> Value:
            # printing is a statement, never a value
            raise syntax_error(PRINT_USAGE)

        self.builtins[RANGE_KEYWORD] = BuiltinFunction(
            RANGE_KEYWORD, 1, std_range, f"त्रुटिः: {RANGE_KEYWORD}(n) एकः एव तर्कः")
        self.builtins[PRINT_KEYWORD] = BuiltinFunction(PRINT_KEYWORD, None, std_print)

    # Public API
    def run(self, source: str) -> RunResult:
        """Execute *source* and return everything it printed and every error."""
        result = RunResult()
        try:
            program = parse_program(source)
        except RecursionError:
            result.add_error(1, NESTING_TOO_DEEP)
            return result
        self.execute_block(program, self.global_env, result, top_level=True)
        return result

    def execute_block(self, block: Block, env: Environment, result: RunResult, top_level: bool = False):
        for stmt in block.statements:
            try:
                self.execute(stmt, env, result)
            except PaaniniError as ex:
                if self.debug_level >= 1:
                    self.debug(f"line {stmt.line}: {ex.err.name}: {ex.message}")
                result.add_error(stmt.line, ex.message)
            except RecursionError:
                # unwinds the whole call chain; only a top-level statement reports it
                if not top_level:
                    raise
                result.add_error(stmt.line, RECURSION_TOO_DEEP)

    def execute(self, node: Node, env: Environment, result: RunResult):
        if self.debug_level >= 1:
            self.debug(f"line {node.line}: {type(node).__name__}")
        if isinstance(node, SimpleStmt):
            self.exec_line(node.text, env, result)
            return
        if isinstance(node, IfStmt):
            truthy = self.eval_condition(node.condition, env, result)
            if self.debug_level >= 3:
                self.debug(f"if condition {node.condition} -> {truthy}")
            if truthy:
                self.execute_block(node.then_block, env, result)
            elif node.else_block is not None:
                self.execute_block(node.else_block, env, result)
            return
        if isinstance(node, WhileStmt):
            guard = 0
            while guard < LOOP_GUARD:
                guard += 1
                if not self.eval_condition(node.condition, env, result):
                    break
                self.execute_block(node.body, env, result)
            if self.debug_level >= 3:
                self.debug(f"while condition {node.condition} checked {guard} times")
            return
        if isinstance(node, ForStmt):
            count = self.evaluate(node.count, env, result)
            if not isinstance(count, NumberVal):
                raise syntax_error(RANGE_NOT_NUMBER)
            for i in range(truncate_count(count.value)):
                env.set(node.var, NumberVal(float(i)))
                self.execute_block(node.body, env, result)
            return
        if isinstance(node, FuncDecl):
            env.define(FunctionDef(node.name, node.params, node.body))
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.params)})")
            return
        if isinstance(node, InvalidStmt):
            raise PaaniniError(ErrorVal(node.kind, node.message))
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def exec_line(self, line: str, env: Environment, result: RunResult):
        """Execute an assignment, print, bare call or ``help`` line."""
        text = line.strip()

        eq = find_assignment(text)
        if eq is not None:
            left = text[:eq].strip()
            right = text[eq + 1:].strip()
            if not is_valid_identifier(left):
                raise syntax_error("त्रुटिः: असाइनस्य नाम अवैधम्")
            value = self.evaluate(right, env, result)
            if value is None:
                raise evaluation_error(f"त्रुटिः: अभिव्यक्ति न संगृहीता -> {right}")
            env.set(left, value)
            if self.debug_level >= 2:
                self.debug(f"assign {left}: {type_name(value)} = {to_string(value)}")
            return

        if starts_with_keyword(text, PRINT_KEYWORD):
            rest = text[len(PRINT_KEYWORD):].lstrip()
            if not rest.startswith('(') or not text.endswith(')'):
                raise syntax_error(PRINT_USAGE)
            inner = text[text.find('(') + 1:text.rfind(')')]
            value = self.evaluate(inner, env, result)
            if value is None:
                raise evaluation_error(f"त्रुटिः: अभिव्यक्ति न संगृहीता -> {inner.strip()}")
            result.write(to_string(value))
            return

        call = split_call(text)
        if call is not None:
            name, args_text = call
            args = self.evaluate_args(args_text, env, result)
            if args is None:
                raise evaluation_error("त्रुटिः: तर्काः न संगृहीताः")
            self.call_function(name, args, env, result)
            return

        if text == HELP_COMMAND:
            result.write(HELP_TEXT)
            return

        raise syntax_error(f"अज्ञाता आज्ञा: {text}")

    def evaluate_args(self, args_text: str, env: Environment, result: RunResult) -> Optional[List[Value]]:
        values: List[Value] = []
        for arg in split_args(args_text):
            value = self.evaluate(arg, env, result)
            if value is None:
                return None
            values.append(value)
        return values

    def evaluate(self, expr: str, env: Environment, result: RunResult) -> Optional[Value]:
        """Evaluate expression text; ``None`` means it is not a valid expression.

        Recognized forms, in order: a fully parenthesized expression, a
        string literal, the boolean words, a call, a number, a top-level
        ``+`` (left associative) and finally a variable name.
        """
        s = expr.strip()
        if not s:
            return NULL
        if is_enclosed(s):
            return self.evaluate(s[1:-1], env, result)
        if is_string_literal(s):
            return StrVal(s[1:-1])
        if s == TRUE_KEYWORD:
            return BoolVal(True)
        if s == FALSE_KEYWORD:
            return BoolVal(False)
        call = split_call(s)
        if call is not None:
            name, args_text = call
            args = self.evaluate_args(args_text, env, result)
            if args is None:
                return None
            return self.call_function(name, args, env, result)
        number = parse_number(s)
        if number is not None:
            return NumberVal(number)
        plus = find_last_top_level(s, '+', skip=is_exponent_sign)
        if plus is not None:
            left = self.evaluate(s[:plus], env, result)
            if left is None:
                return None
            right = self.evaluate(s[plus + 1:], env, result)
            if right is None:
                return None
            return add_values(left, right)
        if is_valid_identifier(s):
            return env.get(s)
        return None

    def eval_condition(self, cond: str, env: Environment, result: RunResult) -> bool:
        """Evaluate a single numeric comparison."""
        for op, compare in COMPARISONS:
            pos = find_top_level(cond, op)
            if pos is None:
                continue
            left = self.evaluate(cond[:pos], env, result)
            right = self.evaluate(cond[pos + len(op):], env, result)
            if left is None or right is None:
                raise evaluation_error("त्रुटिः: यदि शर्ता अपठिता")
            if isinstance(left, NumberVal) and isinstance(right, NumberVal):
                return compare(left.value, right.value)
            raise evaluation_error("त्रुटिः: यदि शर्ते संख्यायाः तुलनाः एव समर्थिताः")
        raise syntax_error("त्रुटिः: यदि शर्ता अवैध")

    def call_function(self, name: str, args: List[Value], env: Environment, result: RunResult) -> Value:
        builtin = self.builtins.get(name)
        if builtin is not None:
            if builtin.arity is not None and len(args) != builtin.arity:
                raise runtime_error(builtin.arity_message)
            return builtin.fn(args)
        func = env.lookup_function(name)
        if func is None:
            raise runtime_error(f"त्रुटिः: अज्ञातः कार्यः: {name}")
        if len(args) != len(func.params):
            raise runtime_error("त्रुटिः: कार्य तर्कसंख्या न समा")
        if self.debug_level >= 3:
            self.debug(f"call {name}({', '.join(to_string(a) for a in args)})")
        self.execute_block(func.body, env.bind(func, args), result)
        # functions have no return values
        return NULL


def run_program(source: str, debug_level: int = 0) -> RunResult:
    """Convenience function to run Paanini source in a fresh context."""
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(source)
    finally:
        interpreter.close()
