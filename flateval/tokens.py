"""Token definitions for flateval programs.

A program is a flat, already classified sequence of tokens. There is no
syntax tree: control constructs are expressed with structural markers and
fixed relative offsets, and the interpreter resolves them by scanning the
sequence. Each token is exactly one of the four cases defined here.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OperatorKind(Enum):
    """Binary operators, plus assignment.

    ``LESS_THAN`` compares with ``<=``.
    """
    ADD = 'Add'
    SUBTRACT = 'Subtract'
    MULTIPLY = 'Multiply'
    LESS_THAN = 'LessThan'
    GREATER_THAN = 'GreaterThan'
    APPROX_EQUALS = 'Equals'
    ASSIGN = 'Assign'


class ControlKind(Enum):
    """Structural markers delimiting loops and conditionals."""
    FOR = 'For'
    IF = 'If'
    ELSE = 'Else'
    END_FOR = 'EndFor'
    END_IF = 'EndIf'


@dataclass(frozen=True)
class Token:
    """Base class for all tokens."""
    pass


@dataclass(frozen=True)
class NumberLiteral(Token):
    value: float

    def __post_init__(self):
        object.__setattr__(self, 'value', float(self.value))

    def __repr__(self) -> str:
        return f"Number({self.value!r})"


@dataclass(frozen=True)
class VariableRef(Token):
    name: str

    def __repr__(self) -> str:
        return f"Variable({self.name})"


@dataclass(frozen=True)
class Operator(Token):
    kind: OperatorKind

    def __repr__(self) -> str:
        return f"Operator({self.kind.value})"


@dataclass(frozen=True)
class ControlMarker(Token):
    kind: ControlKind

    def __repr__(self) -> str:
        return f"Control({self.kind.value})"


# Convenience constructors, mostly for hand-assembled programs and tests
def num(value: float) -> NumberLiteral:
    return NumberLiteral(value)


def var(name: str) -> VariableRef:
    return VariableRef(name)


def op(kind: OperatorKind) -> Operator:
    return Operator(kind)


def marker(kind: ControlKind) -> ControlMarker:
    return ControlMarker(kind)


def is_marker(token: Token, kind: ControlKind) -> bool:
    """Return True if `token` is a control marker of the given kind."""
    return isinstance(token, ControlMarker) and token.kind == kind
