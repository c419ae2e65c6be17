"""
Exception hierarchy for the defjs compiler.

Every stage raises a subclass of CompileError, so callers that only care
whether compilation succeeded can catch the base class. None of these are
recoverable: the first error aborts the whole pipeline.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .lexer import Token, TokenKind


class CompileError(Exception):
    """Base class for all compiler errors."""


class LexError(CompileError):
    """No token pattern matches at the current position."""

    def __init__(self, remaining: str, line: int = 1, col: int = 1):
        self.remaining = remaining
        self.line = line
        self.col = col
        super().__init__(f"Lex error at L{line}:{col}: couldn't match token on {remaining!r}")


class ParseError(CompileError):
    """The next token disagrees with the grammar.

    ``expected`` is the token kind the parser wanted, or None when it wanted
    the end of input. ``found`` is the offending token, or None when the
    stream ran out.
    """

    def __init__(self, expected: Optional[TokenKind], found: Optional[Token],
                 message: str = ""):
        self.expected = expected
        self.found = found
        if not message:
            want = expected.value if expected is not None else "end of input"
            got = found.kind.value if found is not None else "end of input"
            message = f"Expected {want} but got {got}"
        loc = f" at L{found.line}:{found.col}" if found is not None else ""
        detail = f" ({found.text!r})" if found is not None else ""
        super().__init__(f"Parse error{loc}: {message}{detail}")


class GenerationError(CompileError):
    """The generator was handed a node outside the AST's closed set."""

    def __init__(self, node: object, message: str = ""):
        self.node = node
        if not message:
            message = f"Unexpected node type: {type(node).__name__}"
        super().__init__(message)
