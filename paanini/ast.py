"""Statement nodes for Paanini programs.

Paanini has no expression tree: expressions and conditions stay as text
and are evaluated directly. What the parser does build, once per block, is
a flat list of statement nodes whose sub-blocks are already located, so
loop and function bodies are not re-scanned on every execution. Every node
records the 1-based line of the original source where it starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Node:
    """Base class for all statement nodes."""
    line: int


@dataclass(frozen=True)
class Block:
    statements: Tuple[Node, ...]
    source: str = ''  # body text as it appeared in the normalized program


@dataclass(frozen=True)
class SimpleStmt(Node):
    """Assignment, print, bare call or ``help``; decided at execution time."""
    text: str


@dataclass(frozen=True)
class IfStmt(Node):
    condition: str
    then_block: Block
    else_block: Optional[Block]


@dataclass(frozen=True)
class WhileStmt(Node):
    condition: str
    body: Block


@dataclass(frozen=True)
class ForStmt(Node):
    var: str
    count: str  # argument text of the range call
    body: Block


@dataclass(frozen=True)
class FuncDecl(Node):
    name: str
    params: Tuple[str, ...]
    body: Block


@dataclass(frozen=True)
class InvalidStmt(Node):
    """A statement whose structure could not be parsed.

    The failure is kept and reported when the statement is reached, so a
    broken block inside a function body only surfaces when it runs.
    """
    kind: str
    message: str
