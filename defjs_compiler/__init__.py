"""
defjs Compiler
==============
Translates a one-function definition language into JavaScript.

    def f(x, y) add(x, y) end

compiles to

    function add(x,y) { return x + y };
    function f(x,y) { return add(x,y) };
    console.log(f(1, 2));

Architecture:
    ┌──────────┐    ┌──────────┐    ┌──────────┐    ┌───────────┐
    │  Source  │───>│  Lexer   │───>│  Parser  │───>│  CodeGen  │
    │  (.src)  │    │ (tokens) │    │  (AST)   │    │ (JS text) │
    └──────────┘    └──────────┘    └──────────┘    └───────────┘

    - lexer.py:     Ordered regex table, first anchored match wins
    - parser.py:    Recursive descent with one token of lookahead
    - ast_nodes.py: Dataclass tree rooted at a single Definition
    - codegen.py:   Tree-walk emitter producing JavaScript
    - errors.py:    LexError / ParseError / GenerationError
"""

__version__ = "0.1.0"

from .lexer import Lexer, Token, TokenKind, tokenize
from .ast_nodes import Call, Definition, Expression, IntegerLiteral, VariableReference
from .parser import Parser, parse
from .codegen import CodeGenerator, generate
from .errors import CompileError, LexError, ParseError, GenerationError

# Two-argument addition helper the generated code may call.
RUNTIME = "function add(x,y) { return x + y };"

# Calls the compiled function and prints the result.
INVOCATION = "console.log(f(1, 2));"


def compile_source(source: str, *, runtime: bool = True,
                   invocation: bool = True) -> str:
    """Compile defjs source into a runnable JavaScript program.

    Full pipeline: Lexer -> Parser -> AST -> CodeGenerator, then the output
    is assembled as runtime preamble, generated function and invocation
    line, joined by newlines.

    Args:
        source: defjs source code string.
        runtime: Prepend the ``add`` helper (default True).
        invocation: Append the ``console.log(f(1, 2))`` line (default True).

    Returns:
        JavaScript source text.

    Raises:
        LexError, ParseError, GenerationError (all CompileError).
    """
    tokens = Lexer(source).tokenize()
    tree = Parser(tokens).parse()
    generated = CodeGenerator().generate(tree)

    parts = []
    if runtime:
        parts.append(RUNTIME)
    parts.append(generated)
    if invocation:
        parts.append(INVOCATION)
    return "\n".join(parts)
