# Paanini language package
# This package provides an interpreter, a Python source rewriter and an HTTP
# front end for Paanini, a Sanskrit-keyword language with Python-like syntax.
from .interpreter import run_program, Interpreter, RunResult
from .errors import PaaniniError, TranspileError
from .parser import parse_program, normalize_indentation
from .transpiler import transpile_to_python

__all__ = [
    'run_program',
    'Interpreter',
    'RunResult',
    'PaaniniError',
    'TranspileError',
    'parse_program',
    'normalize_indentation',
    'transpile_to_python',
]
