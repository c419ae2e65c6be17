"""
Lexer / Tokenizer for the defjs compiler.

Converts source text into a list of tokens for the parser. The vocabulary is
tiny: the keywords ``def`` and ``end``, identifiers, decimal integers,
parentheses and commas. Whitespace separates tokens and is otherwise ignored.

Patterns are tried in a fixed priority order, anchored at the current
position; the first one that matches wins. Keywords come before the generic
identifier pattern, so ``def`` and ``end`` never lex as identifiers.
"""

from __future__ import annotations
import enum
import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from .errors import LexError

log = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Token kinds
# ──────────────────────────────────────────────

class TokenKind(enum.Enum):
    DEF = "def"
    END = "end"
    IDENTIFIER = "identifier"
    INTEGER = "integer"
    OPAREN = "oparen"
    CPAREN = "cparen"
    COMMA = "comma"


# ──────────────────────────────────────────────
# Token data class
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int = 1
    col: int = 1

    def __repr__(self):
        return f"Token({self.kind.value}, {self.text!r}, L{self.line}:{self.col})"


# ──────────────────────────────────────────────
# Pattern table (priority order matters)
# ──────────────────────────────────────────────

TOKEN_PATTERNS: Tuple[Tuple[TokenKind, "re.Pattern[str]"], ...] = (
    (TokenKind.DEF, re.compile(r"\bdef\b")),
    (TokenKind.END, re.compile(r"\bend\b")),
    (TokenKind.IDENTIFIER, re.compile(r"\b[a-zA-Z]+\b")),
    (TokenKind.INTEGER, re.compile(r"\b[0-9]+\b")),
    (TokenKind.OPAREN, re.compile(r"\(")),
    (TokenKind.CPAREN, re.compile(r"\)")),
    (TokenKind.COMMA, re.compile(r",")),
)

_WHITESPACE = re.compile(r"\s*")


# ──────────────────────────────────────────────
# Lexer
# ──────────────────────────────────────────────

class Lexer:
    """Tokenizes defjs source into a list of Tokens."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens: List[Token] = []

    def _advance_to(self, end: int):
        """Move the cursor to ``end``, keeping line/col in step."""
        chunk = self.source[self.pos:end]
        newlines = chunk.count("\n")
        if newlines:
            self.line += newlines
            self.col = len(chunk) - chunk.rfind("\n")
        else:
            self.col += len(chunk)
        self.pos = end

    def _skip_whitespace(self):
        self._advance_to(_WHITESPACE.match(self.source, self.pos).end())

    def _next_token(self) -> Token:
        for kind, pattern in TOKEN_PATTERNS:
            # match() with a pos argument anchors at pos, and \b still sees
            # the preceding character.
            m = pattern.match(self.source, self.pos)
            if m:
                tok = Token(kind, m.group(0), self.line, self.col)
                self._advance_to(m.end())
                return tok
        raise LexError(self.source[self.pos:], self.line, self.col)

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source and return a list of tokens."""
        self.pos = 0
        self.line = 1
        self.col = 1
        self.tokens = []

        self._skip_whitespace()
        while self.pos < len(self.source):
            self.tokens.append(self._next_token())
            self._skip_whitespace()

        log.debug("tokenized %d chars into %d tokens", len(self.source), len(self.tokens))
        return self.tokens


def tokenize(source: str) -> List[Token]:
    """Convenience wrapper: ``Lexer(source).tokenize()``."""
    return Lexer(source).tokenize()
