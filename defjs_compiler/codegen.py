"""
JavaScript code generator for the defjs compiler.

Folds the AST into JavaScript source text. Output is fully determined by
the tree: a Definition becomes a function declaration whose body returns
its single expression.

    def f(x, y) add(x, y) end   ->   function f(x,y) { return add(x,y) };
"""

from __future__ import annotations
import logging
from typing import Union

from .ast_nodes import Call, Definition, Expression, IntegerLiteral, VariableReference
from .errors import GenerationError

log = logging.getLogger(__name__)

# Separator between parameter names and between call arguments.
SEPARATOR = ","


class CodeGenerator:
    """Generates JavaScript from a Definition or Expression node."""

    def generate(self, node: Union[Definition, Expression]) -> str:
        try:
            return self._gen(node)
        except RecursionError:
            raise GenerationError(node, "Expression nesting too deep") from None

    def _gen(self, node: Union[Definition, Expression]) -> str:
        if isinstance(node, Definition):
            return self._gen_definition(node)
        elif isinstance(node, Call):
            return self._gen_call(node)
        elif isinstance(node, VariableReference):
            return node.name
        elif isinstance(node, IntegerLiteral):
            return str(node.value)
        else:
            raise GenerationError(node)

    def _gen_definition(self, node: Definition) -> str:
        text = "function %s(%s) { return %s };" % (
            node.name,
            SEPARATOR.join(node.parameter_names),
            self._gen(node.body),
        )
        log.debug("generated %d chars for %r", len(text), node.name)
        return text

    def _gen_call(self, node: Call) -> str:
        return "%s(%s)" % (
            node.callee_name,
            SEPARATOR.join([self._gen(arg) for arg in node.arguments]),
        )


def generate(node: Union[Definition, Expression]) -> str:
    """Convenience wrapper: ``CodeGenerator().generate(node)``."""
    return CodeGenerator().generate(node)
