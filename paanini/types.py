"""Value definitions and helpers for Paanini.

This module defines the runtime value model used by the Paanini
interpreter. Values form a closed set of variants: numbers (always
double precision), strings, booleans, lists of values and null. All
variants are immutable, so copying a variable mapping is enough to give
value semantics on assignment and on function-call binding.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple, Union
import math
import sys

from .keywords import TRUE_KEYWORD, FALSE_KEYWORD, NULL_DISPLAY


@dataclass(frozen=True)
class NumberVal:
    """A Paanini number. Every number is a double-precision float."""
    value: float

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True)
class StrVal:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BoolVal:
    value: bool

    def __str__(self) -> str:
        return TRUE_KEYWORD if self.value else FALSE_KEYWORD


@dataclass(frozen=True)
class ListVal:
    """An ordered sequence of values, displayed as ``[a, b, c]``."""
    items: Tuple['Value', ...] = ()

    def __str__(self) -> str:
        return '[' + ', '.join(to_string(item) for item in self.items) + ']'


@dataclass(frozen=True)
class NullVal:
    """Marker object for the Paanini null value."""

    def __str__(self) -> str:
        return NULL_DISPLAY


Value = Union[NumberVal, StrVal, BoolVal, ListVal, NullVal]


@dataclass(frozen=True)
class ErrorVal:
    """Describes a Paanini error: a kind and a human-readable message.

    The kind is one of ``StructuralError``, ``SyntaxError``,
    ``EvaluationError`` or ``RuntimeError``. Only the message is shown to
    users; the kind lets callers and tests tell the failure classes apart.
    """
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


def format_number(x: float) -> str:
    """Render a float the way Paanini displays numbers.

    Integral values print without a fractional part and no value is ever
    shown in exponent notation; otherwise the shortest round-trip digits
    are used.
    """
    if math.isnan(x):
        return 'NaN'
    if math.isinf(x):
        return 'inf' if x > 0 else '-inf'
    if x == 0:
        return '-0' if math.copysign(1.0, x) < 0 else '0'
    if x.is_integer():
        return str(int(x))
    return format(Decimal(repr(x)), 'f')


def to_string(value: Value) -> str:
    """Return the display form of a value."""
    return str(value)


def type_name(value: Value) -> str:
    if isinstance(value, NumberVal):
        return 'Number'
    if isinstance(value, StrVal):
        return 'Str'
    if isinstance(value, BoolVal):
        return 'Bool'
    if isinstance(value, ListVal):
        return 'List'
    if isinstance(value, NullVal):
        return 'Null'
    return type(value).__name__


def truncate_count(x: float) -> int:
    """Truncate a float toward zero for use as an iteration count.

    NaN counts as zero and infinities saturate, so the result is always a
    usable int.
    """
    if math.isnan(x):
        return 0
    if math.isinf(x):
        return sys.maxsize if x > 0 else -sys.maxsize
    return int(x)


NULL = NullVal()
