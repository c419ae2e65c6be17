"""
AST Node definitions for the defjs compiler.

The tree produced by the parser is always rooted at a single Definition.
Expressions form a closed set of three variants; the code generator handles
exactly these and rejects anything else.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Union


# ──────────────────────────────────────────────
# Expressions
# ──────────────────────────────────────────────

@dataclass
class IntegerLiteral:
    """Decimal integer constant."""
    value: int


@dataclass
class VariableReference:
    """Bare name, typically one of the definition's parameters."""
    name: str


@dataclass
class Call:
    """Function call: callee_name(arguments...)."""
    callee_name: str
    arguments: List[Expression] = field(default_factory=list)


Expression = Union[IntegerLiteral, VariableReference, Call]


# ──────────────────────────────────────────────
# Top level
# ──────────────────────────────────────────────

@dataclass
class Definition:
    """Root node: def name(params...) body end."""
    name: str
    parameter_names: List[str]
    body: Expression
