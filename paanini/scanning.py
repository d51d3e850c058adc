"""Quote and parenthesis aware scanning over source text.

Paanini evaluates statements directly over substrings, so operators and
delimiters have to be located without a tokenizer. Every search in the
interpreter goes through :func:`iter_top_level`, which walks a string and
reports only the positions that are outside double-quoted string literals
and not nested inside parentheses opened within the scanned text.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple

DIGITS = '0123456789'


def iter_top_level(text: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(index, char)`` for every top-level character of *text*.

    Quote characters and parentheses themselves are never yielded. String
    literals have no escapes: every ``"`` toggles the in-string state.
    """
    in_string = False
    depth = 0
    for i, c in enumerate(text):
        if c == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if c == '(':
            depth += 1
            continue
        if c == ')':
            if depth > 0:
                depth -= 1
            continue
        if depth == 0:
            yield i, c


def find_top_level(text: str, target: str) -> Optional[int]:
    """Return the index of the first top-level occurrence of *target*."""
    for i, _ in iter_top_level(text):
        if text.startswith(target, i):
            return i
    return None


def find_last_top_level(text: str, target: str,
                        skip: Optional[Callable[[str, int], bool]] = None) -> Optional[int]:
    found = None
    for i, _ in iter_top_level(text):
        if text.startswith(target, i) and not (skip and skip(text, i)):
            found = i
    return found


def split_args(text: str) -> List[str]:
    """Split an argument list at top-level commas.

    Pieces are stripped and empty pieces are dropped, so ``""`` yields no
    arguments at all.
    """
    pieces: List[str] = []
    start = 0
    for i, c in iter_top_level(text):
        if c == ',':
            pieces.append(text[start:i].strip())
            start = i + 1
    pieces.append(text[start:].strip())
    return [p for p in pieces if p]


def matching_paren(text: str, open_index: int) -> Optional[int]:
    """Return the index of the ``)`` closing the ``(`` at *open_index*."""
    in_string = False
    depth = 0
    for i in range(open_index, len(text)):
        c = text[i]
        if c == '"':
            in_string = not in_string
        elif in_string:
            continue
        elif c == '(':
            depth += 1
        elif c == ')':
            depth -= 1
            if depth == 0:
                return i
    return None


def is_enclosed(text: str) -> bool:
    """True when *text* is wrapped by a single matching pair of parentheses."""
    if not (text.startswith('(') and text.endswith(')')):
        return False
    return matching_paren(text, 0) == len(text) - 1


def is_string_literal(text: str) -> bool:
    """True for ``"..."`` with no quote inside the literal."""
    return len(text) >= 2 and text[0] == '"' and text.find('"', 1) == len(text) - 1


def is_identifier_char(c: str) -> bool:
    return c.isalnum() or c == '_' or ord(c) > 127


def is_valid_identifier(text: str) -> bool:
    if not text:
        return False
    return all(is_identifier_char(c) for c in text)


def starts_with_keyword(text: str, keyword: str) -> bool:
    """True when *text* begins with *keyword* at a word boundary."""
    if not text.startswith(keyword):
        return False
    rest = text[len(keyword):]
    return not rest or not is_identifier_char(rest[0])


def split_call(text: str) -> Optional[Tuple[str, str]]:
    """Split ``name(args)`` into ``(name, args)``.

    The name must be a valid identifier and the parenthesis after it must
    be the one closing the whole text; anything else is not a call.
    """
    lp = text.find('(')
    if lp <= 0 or not text.endswith(')'):
        return None
    name = text[:lp].strip()
    if not is_valid_identifier(name):
        return None
    if matching_paren(text, lp) != len(text) - 1:
        return None
    return name, text[lp + 1:-1]


def is_exponent_sign(text: str, index: int) -> bool:
    """True when the sign at *index* belongs to a numeric exponent (``1e+5``)."""
    if index < 2 or text[index - 1] not in 'eE':
        return False
    k = index - 1
    while k > 0 and (text[k - 1] in DIGITS or text[k - 1] == '.'):
        k -= 1
    if k == index - 1:
        return False
    return k == 0 or not is_identifier_char(text[k - 1])


def is_comparison_equals(text: str, eq: int) -> bool:
    """True when the ``=`` at *eq* is part of ``==``, ``!=``, ``>=`` or ``<=``."""
    before = text[eq - 1] if eq > 0 else ''
    after = text[eq + 1] if eq + 1 < len(text) else ''
    return before in ('=', '!', '>', '<') or after == '='


def find_assignment(text: str) -> Optional[int]:
    """Index of the top-level ``=`` that makes *text* an assignment, if any."""
    eq = find_top_level(text, '=')
    if eq is None or is_comparison_equals(text, eq):
        return None
    return eq
