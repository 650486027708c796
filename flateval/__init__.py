# flateval package
# This package evaluates flat, pre-classified token sequences of arithmetic
# expressions, assignments, counted loops and conditionals.
from .tokens import (
    Token, NumberLiteral, VariableRef, Operator, ControlMarker,
    OperatorKind, ControlKind,
)
from .errors import (
    EvalError, InvalidAssignment, UndefinedVariable, InvalidForLoop,
    InvalidIfStatement, MissingMarker, MissingEndFor, MissingEndIf,
    TokenFormatError,
)
from .environment import VariableStore
from .interpreter import Interpreter, apply_operation, find_marker, run_tokens, run_file

__all__ = [
    'Token',
    'NumberLiteral',
    'VariableRef',
    'Operator',
    'ControlMarker',
    'OperatorKind',
    'ControlKind',
    'EvalError',
    'InvalidAssignment',
    'UndefinedVariable',
    'InvalidForLoop',
    'InvalidIfStatement',
    'MissingMarker',
    'MissingEndFor',
    'MissingEndIf',
    'TokenFormatError',
    'VariableStore',
    'Interpreter',
    'apply_operation',
    'find_marker',
    'run_tokens',
    'run_file',
]
