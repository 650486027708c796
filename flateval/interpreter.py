"""Evaluator for flat flateval token sequences.

This module implements the operator applier, the boundary resolver and the
interpreter itself. The interpreter walks a token sequence left to right
keeping a running result and at most one pending operator. Control markers
are resolved by scanning forward for their terminating marker, after which
the interpreter recurses into the body sub-range. Sub-ranges are views
(start/end offsets) into one immutable backing sequence; positional
checks are relative to the start of the current view.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence, Tuple

from .tokens import (
    Token, NumberLiteral, VariableRef, Operator, ControlMarker,
    OperatorKind, ControlKind, is_marker,
)
from .errors import (
    InvalidAssignment, InvalidForLoop, InvalidIfStatement,
    MissingMarker, MissingEndFor, MissingEndIf,
)
from .environment import VariableStore
from .types import to_string
from .token_json import load_program

APPROX_EPSILON = 1.0e-8

###############################################################################
# Operators and boundary resolution
###############################################################################


def apply_operation(left: float, right: float, op: OperatorKind) -> float:
    """Apply a binary operator to two numbers.

    Comparisons yield 1.0 or 0.0. ``LESS_THAN`` is inclusive (``<=``).
    ``ASSIGN`` returns the right operand; committing it to a variable is
    left to the caller.
    """
    if op is OperatorKind.ADD:
        return left + right
    if op is OperatorKind.SUBTRACT:
        return left - right
    if op is OperatorKind.MULTIPLY:
        return left * right
    if op is OperatorKind.LESS_THAN:
        return 1.0 if left <= right else 0.0
    if op is OperatorKind.GREATER_THAN:
        return 1.0 if left > right else 0.0
    if op is OperatorKind.APPROX_EQUALS:
        return 1.0 if abs(left - right) < APPROX_EPSILON else 0.0
    if op is OperatorKind.ASSIGN:
        return right
    raise NotImplementedError(f"apply_operation: unexpected operator {op}")


def _missing(kind: ControlKind) -> MissingMarker:
    if kind is ControlKind.END_FOR:
        return MissingEndFor()
    if kind is ControlKind.END_IF:
        return MissingEndIf()
    return MissingMarker(kind)


def find_marker(tokens: Sequence[Token], start: int, kind: ControlKind,
                end: Optional[int] = None, required: bool = True) -> int:
    """Return the offset of the first `kind` marker in ``tokens[start:end]``.

    An empty range returns `start` without scanning. When no marker is
    found a required search raises (``MissingEndFor``/``MissingEndIf`` for
    those kinds, ``MissingMarker`` otherwise) and an optional search
    returns `start`. Nesting is not tracked: an inner block's marker of the
    same kind is found first.
    """
    if end is None:
        end = len(tokens)
    if start == end:
        return start
    for j in range(start, end):
        if is_marker(tokens[j], kind):
            return j
    if required:
        raise _missing(kind)
    return start

###############################################################################
# Interpreter
###############################################################################


class Interpreter:
    """Evaluates token sequences against a flat variable store."""
    def __init__(self, variables: Optional[Mapping[str, float]] = None,
                 debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.variables = VariableStore(variables)
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def __enter__(self) -> 'Interpreter':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def assign_variable(self, name: str, value: float):
        self.variables.assign(name, value)
        if self.debug_level >= 2:
            self.debug(f"assign {name} = {to_string(value)}")

    def get_variable(self, name: str) -> float:
        return self.variables.lookup(name)

    # Public API
    def evaluate(self, tokens: Sequence[Token]) -> float:
        tokens = tuple(tokens)
        if self.debug_level >= 1:
            self.debug(f"evaluate {len(tokens)} tokens")
        result = self.evaluate_range(tokens, 0, len(tokens))
        if self.debug_level >= 1:
            self.debug(f"result {to_string(result)}")
        return result

    def evaluate_range(self, tokens: Sequence[Token], start: int, end: int) -> float:
        result = 0.0
        pending: Optional[OperatorKind] = None
        i = start
        while i < end:
            token = tokens[i]
            if self.debug_level >= 3:
                pending_name = pending.value if pending else None
                self.debug(f"  [{i}] {token!r} result={to_string(result)} pending={pending_name}")
            if isinstance(token, NumberLiteral):
                if pending is not None:
                    if pending is OperatorKind.ASSIGN:
                        target = tokens[i - 2] if i - start > 1 else None
                        if not isinstance(target, VariableRef):
                            raise InvalidAssignment(f'assignment at offset {i} has no target variable')
                        self.assign_variable(target.name, token.value)
                        result = token.value
                    else:
                        result = apply_operation(result, token.value, pending)
                    pending = None
                else:
                    result = token.value
            elif isinstance(token, VariableRef):
                value = self.variables.lookup(token.name)
                if pending is not None:
                    if pending is OperatorKind.ASSIGN:
                        raise InvalidAssignment(f'cannot assign variable {token.name}; only literals can be assigned')
                    result = apply_operation(result, value, pending)
                    pending = None
                else:
                    result = value
            elif isinstance(token, Operator):
                pending = token.kind
            elif isinstance(token, ControlMarker):
                if token.kind is ControlKind.FOR:
                    result, i = self.execute_for(tokens, i, end, result)
                elif token.kind is ControlKind.IF:
                    result, i = self.execute_if(tokens, i, end)
                # Else/EndFor/EndIf only matter to find_marker
            else:
                raise NotImplementedError(f"evaluate: unexpected token type {type(token)}")
            i += 1
        return result

    def execute_for(self, tokens: Sequence[Token], i: int, end: int, result: float) -> Tuple[float, int]:
        """Run a ``For var start end body EndFor`` block starting at offset `i`.

        Returns the last body result (or `result` if the body never ran)
        and the offset of the ``EndFor`` marker.
        """
        if i + 5 >= end:
            raise InvalidForLoop('for loop needs a variable, a start, an end and a body')
        loop_var = tokens[i + 1]
        if not isinstance(loop_var, VariableRef):
            raise InvalidForLoop(f'for loop variable must be a variable, got {loop_var!r}')
        start_value = self.evaluate_range(tokens, i + 2, i + 3)
        end_value = self.evaluate_range(tokens, i + 3, i + 4)
        body_start = i + 4
        body_end = find_marker(tokens, body_start, ControlKind.END_FOR, end)
        # The body result is written back to whatever variable the body starts with
        accumulator = tokens[body_start]
        if not isinstance(accumulator, VariableRef):
            raise InvalidForLoop(f'for loop body must start with a variable, got {accumulator!r}')
        if self.debug_level >= 2:
            self.debug(f"for {loop_var.name} in {to_string(start_value)}..{to_string(end_value)} "
                       f"body [{body_start}, {body_end})")

        current = start_value
        while current <= end_value:
            self.assign_variable(loop_var.name, current)
            result = self.evaluate_range(tokens, body_start, body_end)
            self.assign_variable(accumulator.name, result)
            current += 1.0
        return result, body_end

    def execute_if(self, tokens: Sequence[Token], i: int, end: int) -> Tuple[float, int]:
        """Run an ``If a op b then [Else else] EndIf`` block starting at offset `i`.

        Returns the result of the branch taken and the offset of the
        ``EndIf`` marker.
        """
        if i + 3 >= end:
            raise InvalidIfStatement('if statement needs a three token condition')
        condition = self.evaluate_range(tokens, i + 1, i + 4)
        then_start = i + 4
        else_pos = find_marker(tokens, then_start, ControlKind.ELSE, end, required=False)
        if else_pos < end and is_marker(tokens[else_pos], ControlKind.ELSE):
            end_if = find_marker(tokens, else_pos, ControlKind.END_IF, end)
            then_end = else_pos
        else:
            end_if = find_marker(tokens, then_start, ControlKind.END_IF, end)
            then_end = else_pos = end_if
        if self.debug_level >= 2:
            self.debug(f"if condition {to_string(condition)} then [{then_start}, {then_end}) "
                       f"else [{else_pos}, {end_if})")

        if condition != 0.0:
            result = self.evaluate_range(tokens, then_start, then_end)
        else:
            result = self.evaluate_range(tokens, else_pos, end_if)
        return result, end_if


def run_tokens(tokens: Sequence[Token], variables: Optional[Mapping[str, float]] = None,
               debug_level: int = 0) -> float:
    """Convenience function to evaluate a token sequence with a fresh interpreter."""
    with Interpreter(variables, debug_level=debug_level) as interpreter:
        return interpreter.evaluate(tokens)


def run_file(file_path: str, variables: Optional[Mapping[str, float]] = None,
             debug_level: int = 0) -> Tuple[float, Dict[str, float]]:
    """Evaluate a JSON program file, returning the result and the final variables.

    `variables` override the ones declared in the file.
    """
    tokens, declared = load_program(file_path)
    declared.update(variables or {})
    with Interpreter(declared, debug_level=debug_level) as interpreter:
        result = interpreter.evaluate(tokens)
        return result, interpreter.variables.snapshot()
