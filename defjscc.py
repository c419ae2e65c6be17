#!/usr/bin/env python3
"""
defjscc — defjs to JavaScript compiler CLI

Usage:
    python defjscc.py <input.src> [-o output.js] [--tokens | --ast]
                                  [--no-runtime] [--no-invocation] [--verbose]

Examples:
    python defjscc.py examples/test.src               # JS to stdout
    python defjscc.py examples/test.src -o test.js
    python defjscc.py examples/test.src --tokens      # dump token stream
    echo "def f(x, y) x end" | python defjscc.py -
"""

import argparse
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

# Allow running from project root without installing
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from defjs_compiler import __version__, compile_source
from defjs_compiler.lexer import Lexer
from defjs_compiler.parser import Parser
from defjs_compiler.errors import LexError, ParseError, GenerationError

log = logging.getLogger("defjscc")


def setup_logging(verbose: bool):
    """Route log records to stderr through rich; DEBUG when verbose."""
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )


def read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="defjscc",
        description="Compile a defjs function definition to JavaScript",
    )
    parser.add_argument("input", help="Input source file ('-' for stdin)")
    parser.add_argument("-o", "--output", help="Output JavaScript file (default: stdout)")
    parser.add_argument("--tokens", action="store_true",
                        help="Dump token stream and exit (debug)")
    parser.add_argument("--ast", action="store_true",
                        help="Dump AST and exit (debug)")
    parser.add_argument("--no-runtime", action="store_true",
                        help="Omit the add() runtime preamble")
    parser.add_argument("--no-invocation", action="store_true",
                        help="Omit the trailing console.log(f(1, 2)) line")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Print compilation details to stderr")
    parser.add_argument("--version", action="version",
                        version=f"defjscc {__version__}")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        source = read_source(args.input)
    except OSError as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        return 1

    log.debug("input: %s (%d chars)", args.input, len(source))

    try:
        if args.tokens:
            for tok in Lexer(source).tokenize():
                print(tok)
            return 0

        if args.ast:
            tokens = Lexer(source).tokenize()
            _print_ast(Parser(tokens).parse())
            return 0

        result = compile_source(source,
                                runtime=not args.no_runtime,
                                invocation=not args.no_invocation)

        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(result)
                f.write("\n")
            log.debug("output: %s", args.output)
        else:
            print(result)

    except LexError as e:
        print(f"Lexer error: {e}", file=sys.stderr)
        return 1
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1
    except GenerationError as e:
        print(f"Code generation error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error writing {args.output}: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Internal compiler error: {e}", file=sys.stderr)
        if args.verbose:
            log.exception("traceback")
        return 2

    return 0


def _print_ast(node, indent=0):
    """Pretty-print an AST node tree (debug helper)."""
    prefix = "  " * indent
    if hasattr(node, '__dataclass_fields__'):
        print(f"{prefix}{type(node).__name__}:")
        for fname in node.__dataclass_fields__:
            val = getattr(node, fname)
            if isinstance(val, list) and any(hasattr(v, '__dataclass_fields__') for v in val):
                print(f"{prefix}  {fname}:")
                for item in val:
                    _print_ast(item, indent + 2)
            elif hasattr(val, '__dataclass_fields__'):
                print(f"{prefix}  {fname}:")
                _print_ast(val, indent + 2)
            else:
                print(f"{prefix}  {fname}: {val!r}")
    else:
        print(f"{prefix}{node!r}")


if __name__ == "__main__":
    sys.exit(main())
