"""Block structure for the Paanini language.

This module turns source text into statement nodes in three stages:

1. **Normalization**: indentation is replaced by explicit ``{`` and ``}``
   marker lines. A marker is only opened when a line is indented deeper
   than the previous line *and* that previous line ended with the block
   introducer ``:``. The introducer is stripped, bare ``यदि``/``यावत्``
   conditions are wrapped in parentheses and ``अन्यथा`` headers are reduced
   to the bare keyword. Comment and blank lines pass through untouched.
   Inconsistent indentation is not an error; it only changes which lines
   end up in which block.

2. **Block extraction**: :func:`collect_block` finds the first explicit
   block at or after a header line and returns its body lines together
   with the number of lines consumed.

3. **Statement building**: :func:`parse_lines` walks the normalized lines
   once, recognizes compound statements by their leading keyword and
   builds nodes whose bodies are already parsed.

Every line keeps the 1-based number of the source line it came from, so
errors can name the line the user wrote. The public entry point is
:func:`parse_program`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .ast import Block, FuncDecl, ForStmt, IfStmt, InvalidStmt, Node, SimpleStmt, WhileStmt
from .errors import PaaniniError, structural_error, syntax_error
from .keywords import (
    BLOCK_CLOSE, BLOCK_INTRODUCER, BLOCK_OPEN, ELSE_KEYWORD, FOR_KEYWORD,
    FUNCTION_KEYWORD, IF_KEYWORD, IN_KEYWORD, RANGE_KEYWORD, WHILE_KEYWORD,
    is_comment_or_blank,
)
from .scanning import (
    find_top_level, is_enclosed, is_valid_identifier, iter_top_level,
    split_call, starts_with_keyword,
)
from .types import ErrorVal


@dataclass(frozen=True)
class SourceLine:
    number: int
    text: str


class ParseError(Exception):
    """A compound statement could not be built.

    ``consumed`` is how many lines the broken statement covers, so the
    statement builder can skip it as a whole when its block was found.
    """
    def __init__(self, err: ErrorVal, consumed: int):
        super().__init__(err.message)
        self.err = err
        self.consumed = consumed


###############################################################################
# Indentation normalizer
###############################################################################


def _indent_width(raw: str) -> int:
    return len(raw) - len(raw.lstrip(' '))


def rewrite_header(line: str) -> str:
    """Canonicalize a block header whose trailing ``:`` was removed."""
    line = line.rstrip()
    for keyword in (IF_KEYWORD, WHILE_KEYWORD):
        if starts_with_keyword(line, keyword):
            condition = line[len(keyword):].strip()
            if not is_enclosed(condition):
                return f"{keyword} ({condition})"
            return line
    if starts_with_keyword(line, ELSE_KEYWORD):
        return ELSE_KEYWORD
    return line


def normalize_lines(source: str) -> List[SourceLine]:
    """Replace indentation with explicit block marker lines."""
    out: List[SourceLine] = []
    stack: List[int] = [0]
    prev_ended_colon = False
    number = 0
    for number, orig in enumerate(source.splitlines(), start=1):
        raw = orig.replace('\t', '  ')
        trimmed = raw.strip()
        if is_comment_or_blank(trimmed):
            out.append(SourceLine(number, orig))
            continue
        indent = _indent_width(raw)
        if indent > stack[-1]:
            if prev_ended_colon:
                out.append(SourceLine(number, BLOCK_OPEN))
                stack.append(indent)
        else:
            while indent < stack[-1]:
                stack.pop()
                out.append(SourceLine(number, BLOCK_CLOSE))
        line = trimmed
        if line.endswith(BLOCK_INTRODUCER):
            line = rewrite_header(line[:-1])
            prev_ended_colon = True
        else:
            prev_ended_colon = False
        out.append(SourceLine(number, line))
    while len(stack) > 1:
        stack.pop()
        out.append(SourceLine(number, BLOCK_CLOSE))
    return out


def normalize_indentation(source: str) -> str:
    """Return *source* with indentation replaced by ``{``/``}`` lines."""
    lines = normalize_lines(source)
    if not lines:
        return ''
    return '\n'.join(line.text for line in lines) + '\n'


###############################################################################
# Block extractor
###############################################################################


def collect_block(lines: Sequence[SourceLine], start: int) -> Tuple[List[SourceLine], int]:
    """Return the body of the first block at or after ``lines[start]``.

    The result is the list of body lines and the number of lines consumed
    from the header through the line holding the closing marker. A block
    opened and closed on one line yields a single body line. Markers inside
    string literals and comment lines do not count.
    """
    open_idx: Optional[int] = None
    open_pos = 0
    for i in range(start, len(lines)):
        text = lines[i].text.strip()
        if is_comment_or_blank(text):
            continue
        pos = find_top_level(text, BLOCK_OPEN)
        if pos is not None:
            open_idx, open_pos = i, pos
            break
    if open_idx is None:
        raise structural_error("त्रुटिः: अपेक्षितम् '{'")

    depth = 0
    for i in range(open_idx, len(lines)):
        text = lines[i].text.strip()
        if i != open_idx and is_comment_or_blank(text):
            continue
        offset = open_pos if i == open_idx else 0
        for pos, c in iter_top_level(text):
            if pos < offset:
                continue
            if c == BLOCK_OPEN:
                depth += 1
            elif c == BLOCK_CLOSE:
                depth -= 1
                if depth == 0:
                    return _block_body(lines, open_idx, open_pos, i, pos), i + 1 - start
    raise structural_error("त्रुटिः: '}' न लब्धम्")


def _block_body(lines: Sequence[SourceLine], open_idx: int, open_pos: int,
                close_idx: int, close_pos: int) -> List[SourceLine]:
    first = lines[open_idx]
    first_text = first.text.strip()
    if open_idx == close_idx:
        inner = first_text[open_pos + 1:close_pos].strip()
        return [SourceLine(first.number, inner)] if inner else []
    body: List[SourceLine] = []
    after_open = first_text[open_pos + 1:].strip()
    if after_open:
        body.append(SourceLine(first.number, after_open))
    for line in lines[open_idx + 1:close_idx]:
        body.append(SourceLine(line.number, line.text.strip()))
    last = lines[close_idx]
    before_close = last.text.strip()[:close_pos].strip()
    if before_close:
        body.append(SourceLine(last.number, before_close))
    return body


def block_text(lines: Sequence[SourceLine]) -> str:
    return '\n'.join(line.text for line in lines)


###############################################################################
# Headers
###############################################################################


def _header_rest(text: str, keyword: str) -> str:
    """Text after *keyword* up to an inline block opener."""
    rest = text[len(keyword):]
    pos = find_top_level(rest, BLOCK_OPEN)
    if pos is not None:
        rest = rest[:pos]
    return rest.strip()


def parse_condition_header(text: str, keyword: str) -> str:
    rest = _header_rest(text, keyword)
    if not is_enclosed(rest):
        raise structural_error(f"त्रुटिः: {keyword} शर्ता ( ) मध्ये भवेत्")
    return rest[1:-1].strip()


def parse_for_header(text: str) -> Tuple[str, str]:
    """Split ``परिभ्रमण x in परिधि(n)`` into the variable and ``n``."""
    rest = _header_rest(text, FOR_KEYWORD)
    marker = f' {IN_KEYWORD} '
    in_pos = rest.find(marker)
    if in_pos < 0:
        raise structural_error(
            f"त्रुटिः: परिभ्रमण स्वरूपः: परिभ्रमण x {IN_KEYWORD} {RANGE_KEYWORD}(n)")
    var = rest[:in_pos].strip()
    if not is_valid_identifier(var):
        raise syntax_error("त्रुटिः: परिभ्रमण चरः अवैधः")
    iterable = rest[in_pos + len(marker):].strip()
    if '(' not in iterable or ')' not in iterable:
        raise syntax_error(f"त्रुटिः: परिभ्रमण {RANGE_KEYWORD}( ) अपेक्षितम्")
    call = split_call(iterable)
    if call is None or call[0] != RANGE_KEYWORD:
        raise syntax_error(f"त्रुटिः: परिभ्रमण केवलं {RANGE_KEYWORD}(n) सह समर्थितम्")
    return var, call[1].strip()


def parse_function_header(text: str) -> Tuple[str, Tuple[str, ...]]:
    """Split ``कार्य name(a, b)`` into the name and parameter names."""
    rest = _header_rest(text, FUNCTION_KEYWORD)
    lp = rest.find('(')
    if lp < 0:
        raise structural_error("त्रुटिः: कार्य नामस्य अनन्तरं ( अपेक्षितम्")
    rp = rest.rfind(')')
    if rp < lp:
        raise structural_error("त्रुटिः: कार्य तर्काणां ')' न लब्धम्")
    name = rest[:lp].strip()
    if not is_valid_identifier(name):
        raise syntax_error("त्रुटिः: कार्य नाम अवैधम्")
    params_str = rest[lp + 1:rp]
    params: Tuple[str, ...] = ()
    if params_str.strip():
        params = tuple(p.strip() for p in params_str.split(','))
    for param in params:
        if not is_valid_identifier(param):
            raise syntax_error("त्रुटिः: कार्य तर्कस्य नाम अवैधम्")
    return name, params


###############################################################################
# Statement builder
###############################################################################


def _with_block(lines: Sequence[SourceLine], start: int,
                parse_header: Callable[[str], object]) -> Tuple[object, List[SourceLine], int]:
    text = lines[start].text.strip()
    try:
        header = parse_header(text)
    except PaaniniError as exc:
        try:
            _, consumed = collect_block(lines, start)
        except PaaniniError:
            consumed = 1
        raise ParseError(exc.err, consumed)
    try:
        body, consumed = collect_block(lines, start)
    except PaaniniError as exc:
        raise ParseError(exc.err, 1)
    return header, body, consumed


def _next_statement_index(lines: Sequence[SourceLine], idx: int) -> int:
    while idx < len(lines) and is_comment_or_blank(lines[idx].text):
        idx += 1
    return idx


def parse_if(lines: Sequence[SourceLine], start: int) -> Tuple[Node, int]:
    number = lines[start].number
    condition, then_lines, consumed = _with_block(
        lines, start, lambda text: parse_condition_header(text, IF_KEYWORD))
    else_block = None
    idx = _next_statement_index(lines, start + consumed)
    if idx < len(lines) and starts_with_keyword(lines[idx].text.strip(), ELSE_KEYWORD):
        try:
            else_lines, else_consumed = collect_block(lines, idx)
        except PaaniniError as exc:
            raise ParseError(exc.err, idx + 1 - start)
        else_block = _build_block(else_lines)
        consumed = idx + else_consumed - start
    return IfStmt(number, condition, _build_block(then_lines), else_block), consumed


def parse_while(lines: Sequence[SourceLine], start: int) -> Tuple[Node, int]:
    condition, body, consumed = _with_block(
        lines, start, lambda text: parse_condition_header(text, WHILE_KEYWORD))
    return WhileStmt(lines[start].number, condition, _build_block(body)), consumed


def parse_for(lines: Sequence[SourceLine], start: int) -> Tuple[Node, int]:
    (var, count), body, consumed = _with_block(lines, start, parse_for_header)
    return ForStmt(lines[start].number, var, count, _build_block(body)), consumed


def parse_function(lines: Sequence[SourceLine], start: int) -> Tuple[Node, int]:
    (name, params), body, consumed = _with_block(lines, start, parse_function_header)
    return FuncDecl(lines[start].number, name, params, _build_block(body)), consumed


COMPOUND_PARSERS = (
    (IF_KEYWORD, parse_if),
    (WHILE_KEYWORD, parse_while),
    (FOR_KEYWORD, parse_for),
    (FUNCTION_KEYWORD, parse_function),
)


def parse_statement(lines: Sequence[SourceLine], start: int) -> Tuple[Node, int]:
    """Build the statement starting at ``lines[start]``.

    Returns the node and the number of lines it covers. Structural
    failures become an :class:`InvalidStmt` so the program keeps going.
    """
    line = lines[start]
    text = line.text.strip()
    for keyword, parse in COMPOUND_PARSERS:
        if starts_with_keyword(text, keyword):
            try:
                return parse(lines, start)
            except ParseError as exc:
                return InvalidStmt(line.number, exc.err.name, exc.err.message), exc.consumed
    return SimpleStmt(line.number, text), 1


def parse_lines(lines: Sequence[SourceLine]) -> List[Node]:
    statements: List[Node] = []
    i = 0
    while i < len(lines):
        if is_comment_or_blank(lines[i].text):
            i += 1
            continue
        stmt, consumed = parse_statement(lines, i)
        statements.append(stmt)
        i += max(consumed, 1)
    return statements


def _build_block(lines: Sequence[SourceLine]) -> Block:
    return Block(tuple(parse_lines(lines)), block_text(lines))


def parse_program(source: str) -> Block:
    """Parse Paanini source into a block of statement nodes."""
    return _build_block(normalize_lines(source))
