"""
Recursive-descent parser for the defjs compiler.

Parses the Lexer's token list into a single Definition node:

    Definition   := 'def' identifier ParamList Expression 'end'
    ParamList    := '(' [ identifier (',' identifier)* ] ')'
    Expression   := integer
                  | identifier '(' ArgList ')'
                  | identifier
    ArgList      := [ Expression (',' Expression)* ]

An identifier followed by '(' is a call; otherwise it is a variable
reference. That one token of lookahead is the only disambiguation the
grammar needs, so there is no backtracking.
"""

from __future__ import annotations
import logging
from typing import List, Sequence

from .lexer import Token, TokenKind
from .ast_nodes import Call, Definition, Expression, IntegerLiteral, VariableReference
from .errors import ParseError

log = logging.getLogger(__name__)


class Parser:
    """Recursive descent parser producing a Definition from tokens."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tuple(tokens)
        self.pos = 0

    # ── Helpers ─────────────────────────────

    def _cur(self):
        """Current token, or None once the stream is exhausted."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def peek(self, kind: TokenKind, offset: int = 0) -> bool:
        """True if the token ``offset`` places ahead has the given kind.

        Looking past the end of the stream is not an error; it just
        doesn't match.
        """
        i = self.pos + offset
        if 0 <= i < len(self.tokens):
            return self.tokens[i].kind == kind
        return False

    def expect(self, kind: TokenKind) -> Token:
        """Consume and return the next token, which must be of ``kind``."""
        tok = self._cur()
        if tok is None or tok.kind != kind:
            raise ParseError(kind, tok)
        self.pos += 1
        return tok

    # ── Top-level parsing ─────────────────────

    def parse(self) -> Definition:
        """Parse the full token stream into a Definition AST."""
        try:
            definition = self._parse_definition()
        except RecursionError:
            raise ParseError(None, self._cur(),
                             "Expression nesting too deep") from None

        trailing = self._cur()
        if trailing is not None:
            raise ParseError(None, trailing)

        log.debug("parsed definition %r with %d parameter(s)",
                  definition.name, len(definition.parameter_names))
        return definition

    def _parse_definition(self) -> Definition:
        self.expect(TokenKind.DEF)
        name = self.expect(TokenKind.IDENTIFIER).text
        params = self._parse_param_names()
        body = self._parse_expr()
        self.expect(TokenKind.END)
        return Definition(name=name, parameter_names=params, body=body)

    def _parse_param_names(self) -> List[str]:
        """Parse '(' [ident (',' ident)*] ')'."""
        names: List[str] = []

        self.expect(TokenKind.OPAREN)
        if self.peek(TokenKind.IDENTIFIER):
            self._add_param(names, self.expect(TokenKind.IDENTIFIER))
            while self.peek(TokenKind.COMMA):
                self.expect(TokenKind.COMMA)
                self._add_param(names, self.expect(TokenKind.IDENTIFIER))
        self.expect(TokenKind.CPAREN)
        return names

    @staticmethod
    def _add_param(names: List[str], tok: Token):
        if tok.text in names:
            raise ParseError(TokenKind.IDENTIFIER, tok,
                             f"Duplicate parameter name {tok.text!r}")
        names.append(tok.text)

    # ── Expressions ───────────────────────────

    def _parse_expr(self) -> Expression:
        if self.peek(TokenKind.INTEGER):
            return self._parse_integer()
        if self.peek(TokenKind.IDENTIFIER) and self.peek(TokenKind.OPAREN, 1):
            return self._parse_call()
        return self._parse_var_ref()

    def _parse_integer(self) -> IntegerLiteral:
        return IntegerLiteral(value=int(self.expect(TokenKind.INTEGER).text))

    def _parse_call(self) -> Call:
        name = self.expect(TokenKind.IDENTIFIER).text
        args = self._parse_arg_exprs()
        return Call(callee_name=name, arguments=args)

    def _parse_var_ref(self) -> VariableReference:
        return VariableReference(name=self.expect(TokenKind.IDENTIFIER).text)

    def _parse_arg_exprs(self) -> List[Expression]:
        """Parse '(' [expr (',' expr)*] ')'."""
        args: List[Expression] = []

        self.expect(TokenKind.OPAREN)
        if not self.peek(TokenKind.CPAREN):
            args.append(self._parse_expr())
            while self.peek(TokenKind.COMMA):
                self.expect(TokenKind.COMMA)
                args.append(self._parse_expr())
        self.expect(TokenKind.CPAREN)
        return args


def parse(tokens: Sequence[Token]) -> Definition:
    """Convenience wrapper: ``Parser(tokens).parse()``."""
    return Parser(tokens).parse()
