"""
Lexer and parser tests for the defjs compiler.

Checks the token stream against hand-written expectations, keyword vs
identifier priority, the call/variable lookahead, and every ParseError
path (wrong kind, premature end of input, trailing tokens).
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from defjs_compiler.lexer import Lexer, TokenKind, tokenize
from defjs_compiler.parser import Parser, parse
from defjs_compiler.ast_nodes import Call, Definition, IntegerLiteral, VariableReference
from defjs_compiler.errors import CompileError, LexError, ParseError


def _kinds(source: str) -> list:
    return [t.kind.value for t in tokenize(source)]


def _pairs(source: str) -> list:
    return [(t.kind, t.text) for t in tokenize(source)]


def _parse(source: str) -> Definition:
    return parse(tokenize(source))


# ─── Lexer ────────────────────────────────

class TestLexer:
    def test_add_definition_tokens(self):
        assert _kinds("def f(x, y) add(x, y) end") == [
            "def", "identifier", "oparen", "identifier", "comma", "identifier",
            "cparen", "identifier", "oparen", "identifier", "comma",
            "identifier", "cparen", "end",
        ]

    def test_token_text_preserved(self):
        texts = [t.text for t in tokenize("def f(x, y) add(x, y) end")]
        assert texts == ["def", "f", "(", "x", ",", "y", ")",
                         "add", "(", "x", ",", "y", ")", "end"]

    def test_integer_spelling_preserved(self):
        toks = tokenize("007")
        assert len(toks) == 1
        assert toks[0].kind == TokenKind.INTEGER
        assert toks[0].text == "007"

    def test_empty_source(self):
        assert tokenize("") == []
        assert tokenize("  \n\t ") == []

    def test_definition_is_one_identifier(self):
        assert _pairs("definition") == [(TokenKind.IDENTIFIER, "definition")]

    def test_ending_is_one_identifier(self):
        assert _pairs("ending") == [(TokenKind.IDENTIFIER, "ending")]

    def test_keywords(self):
        assert _pairs("def end") == [(TokenKind.DEF, "def"), (TokenKind.END, "end")]

    def test_keyword_before_paren(self):
        assert _kinds("def(") == ["def", "oparen"]

    def test_whitespace_insensitive(self):
        compact = "def f(x,y) add(x,y) end"
        spaced = "def   f ( x ,\n y )\n\n  add( x , y )\t end\n"
        assert _pairs(compact) == _pairs(spaced)

    def test_positions(self):
        toks = tokenize("def f()\n  x end")
        assert (toks[0].line, toks[0].col) == (1, 1)
        assert (toks[1].line, toks[1].col) == (1, 5)
        assert (toks[4].line, toks[4].col) == (2, 3)
        assert (toks[5].line, toks[5].col) == (2, 5)

    def test_tokens_are_immutable(self):
        tok = tokenize("x")[0]
        with pytest.raises(Exception):
            tok.text = "y"

    def test_unknown_character(self):
        with pytest.raises(LexError) as exc:
            tokenize("def f(x) x + 1 end")
        assert exc.value.remaining == "+ 1 end"
        assert "+ 1 end" in str(exc.value)

    def test_digits_glued_to_letters(self):
        """No word boundary between 12 and ab, so neither pattern matches."""
        with pytest.raises(LexError) as exc:
            tokenize("12ab")
        assert exc.value.remaining == "12ab"

    def test_underscore_not_in_identifiers(self):
        with pytest.raises(LexError):
            tokenize("my_name")

    def test_lex_error_position(self):
        with pytest.raises(LexError) as exc:
            tokenize("def f()\n  ;")
        assert (exc.value.line, exc.value.col) == (2, 3)

    def test_lexer_class_api(self):
        lexer = Lexer("a b")
        first = lexer.tokenize()
        assert [t.text for t in first] == ["a", "b"]

    def test_tokenize_twice_on_one_lexer(self):
        lexer = Lexer("def f()\n  x end")
        first = lexer.tokenize()
        second = lexer.tokenize()
        assert second == first
        assert (second[-1].line, second[-1].col) == (2, 5)


# ─── Parser ───────────────────────────────

class TestParser:
    def test_call_of_parameters(self):
        tree = _parse("def f(x, y) add(x, y) end")
        assert tree == Definition(
            name="f",
            parameter_names=["x", "y"],
            body=Call("add", [VariableReference("x"), VariableReference("y")]),
        )

    def test_empty_params_integer_body(self):
        assert _parse("def zero() 0 end") == Definition("zero", [], IntegerLiteral(0))

    def test_variable_body(self):
        tree = _parse("def ident(x) x end")
        assert tree.body == VariableReference("x")

    def test_integer_value_is_int(self):
        tree = _parse("def big() 12345678901234567890 end")
        assert tree.body.value == 12345678901234567890

    def test_call_with_no_arguments(self):
        tree = _parse("def f() g() end")
        assert tree.body == Call("g", [])

    def test_lookahead_picks_call(self):
        tree = _parse("def g() f(1,2) end")
        assert isinstance(tree.body, Call)
        assert tree.body.arguments == [IntegerLiteral(1), IntegerLiteral(2)]

    def test_nested_calls(self):
        tree = _parse("def f(x) add(add(x,x),x) end")
        assert isinstance(tree.body, Call)
        inner = tree.body.arguments[0]
        assert isinstance(inner, Call)
        assert inner == Call("add", [VariableReference("x"), VariableReference("x")])
        assert tree.body.arguments[1] == VariableReference("x")

    def test_deep_nesting(self):
        src = "def f(x) " + "g(" * 20 + "x" + ")" * 20 + " end"
        node = _parse(src).body
        depth = 0
        while isinstance(node, Call):
            depth += 1
            node = node.arguments[0]
        assert depth == 20
        assert node == VariableReference("x")

    def test_mixed_arguments(self):
        tree = _parse("def f(a) h(1, a, k()) end")
        assert tree.body == Call("h", [IntegerLiteral(1), VariableReference("a"), Call("k", [])])

    def test_deterministic(self):
        src = "def f(x, y) add(add(x, 1), y) end"
        assert _parse(src) == _parse(src)

    def test_keyword_like_names(self):
        tree = _parse("def definition(ending) ending end")
        assert tree.name == "definition"
        assert tree.parameter_names == ["ending"]

    def test_trailing_comma_in_params(self):
        with pytest.raises(ParseError) as exc:
            _parse("def f(x,) x end")
        assert exc.value.expected == TokenKind.IDENTIFIER
        assert exc.value.found.kind == TokenKind.CPAREN
        assert "Expected identifier but got cparen" in str(exc.value)

    def test_missing_def(self):
        with pytest.raises(ParseError) as exc:
            _parse("f() 1 end")
        assert exc.value.expected == TokenKind.DEF

    def test_missing_end_hits_end_of_input(self):
        with pytest.raises(ParseError) as exc:
            _parse("def f() 1")
        assert exc.value.expected == TokenKind.END
        assert exc.value.found is None
        assert "end of input" in str(exc.value)

    def test_empty_stream(self):
        with pytest.raises(ParseError) as exc:
            parse([])
        assert exc.value.expected == TokenKind.DEF
        assert exc.value.found is None

    def test_empty_body(self):
        with pytest.raises(ParseError) as exc:
            _parse("def f() end")
        assert exc.value.expected == TokenKind.IDENTIFIER
        assert exc.value.found.kind == TokenKind.END

    def test_unclosed_call(self):
        with pytest.raises(ParseError) as exc:
            _parse("def f(x) g(x end")
        assert exc.value.expected == TokenKind.CPAREN
        assert exc.value.found.kind == TokenKind.END

    def test_trailing_tokens(self):
        with pytest.raises(ParseError) as exc:
            _parse("def f() 1 end def g() 2 end")
        assert exc.value.expected is None
        assert exc.value.found.kind == TokenKind.DEF

    def test_duplicate_parameter(self):
        with pytest.raises(ParseError, match="Duplicate parameter name 'x'"):
            _parse("def f(x, x) x end")

    def test_errors_share_base_class(self):
        with pytest.raises(CompileError):
            _parse("def f(,) 1 end")

    def test_nesting_past_stack_limit(self):
        src = "def f(x) " + "g(" * 1000 + "x" + ")" * 1000 + " end"
        with pytest.raises(ParseError, match="nesting too deep"):
            _parse(src)

    def test_moderate_nesting_still_parses(self):
        src = "def f(x) " + "g(" * 100 + "x" + ")" * 100 + " end"
        assert isinstance(_parse(src).body, Call)


class TestNodes:
    def test_definition_requires_body(self):
        with pytest.raises(TypeError):
            Definition("f", [])

    def test_leaf_nodes_require_values(self):
        with pytest.raises(TypeError):
            IntegerLiteral()
        with pytest.raises(TypeError):
            VariableReference()
        with pytest.raises(TypeError):
            Call()

    def test_call_arguments_default_empty(self):
        assert Call("g").arguments == []


class TestLookahead:
    def test_peek_past_end_is_false(self):
        p = Parser(tokenize("f"))
        assert p.peek(TokenKind.IDENTIFIER)
        assert not p.peek(TokenKind.OPAREN, 1)
        assert not p.peek(TokenKind.IDENTIFIER, 5)

    def test_peek_on_empty_stream(self):
        assert not Parser([]).peek(TokenKind.DEF)

    def test_peek_does_not_consume(self):
        p = Parser(tokenize("def f"))
        p.peek(TokenKind.DEF)
        p.peek(TokenKind.IDENTIFIER, 1)
        assert p.expect(TokenKind.DEF).text == "def"

    def test_expect_advances(self):
        p = Parser(tokenize("def f"))
        p.expect(TokenKind.DEF)
        assert p.expect(TokenKind.IDENTIFIER).text == "f"
        with pytest.raises(ParseError):
            p.expect(TokenKind.OPAREN)
