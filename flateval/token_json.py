"""JSON serialization/deserialization for flateval programs.

This module converts between token dataclasses and plain Python dict/list
structures suitable for JSON encoding. A program file holds the token
sequence and an optional table of initial variables:

    {"type": "Program",
     "variables": {"sum": 0},
     "tokens": [{"type": "Control", "kind": "For"},
                {"type": "Variable", "name": "i"},
                {"type": "Number", "value": 1}]}
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .tokens import (
    Token, NumberLiteral, VariableRef, Operator, ControlMarker,
    OperatorKind, ControlKind,
)
from .errors import TokenFormatError
from .types import to_number


def token_to_obj(token: Token) -> Dict[str, Any]:
    if isinstance(token, NumberLiteral):
        return {"type": "Number", "value": token.value}
    if isinstance(token, VariableRef):
        return {"type": "Variable", "name": token.name}
    if isinstance(token, Operator):
        return {"type": "Operator", "kind": token.kind.value}
    if isinstance(token, ControlMarker):
        return {"type": "Control", "kind": token.kind.value}
    raise TypeError(f"Unsupported token for serialization: {type(token).__name__}")


def _field(obj: Dict[str, Any], name: str) -> Any:
    if name not in obj:
        raise TokenFormatError(f"{obj.get('type')} token is missing {name!r}")
    return obj[name]


def token_from_obj(obj: Any) -> Token:
    if not isinstance(obj, dict):
        raise TokenFormatError(f"Invalid token object: {obj!r}")
    t = obj.get("type")
    if t == "Number":
        value = _field(obj, "value")
        try:
            return NumberLiteral(to_number(value))
        except (TypeError, ValueError) as e:
            raise TokenFormatError(f"Invalid number value: {e}")
    if t == "Variable":
        name = _field(obj, "name")
        if not isinstance(name, str) or not name:
            raise TokenFormatError(f"Invalid variable name: {name!r}")
        return VariableRef(name)
    if t == "Operator":
        kind = _field(obj, "kind")
        try:
            return Operator(OperatorKind(kind))
        except ValueError:
            raise TokenFormatError(f"Unknown operator kind: {kind!r}")
    if t == "Control":
        kind = _field(obj, "kind")
        try:
            return ControlMarker(ControlKind(kind))
        except ValueError:
            raise TokenFormatError(f"Unknown control kind: {kind!r}")

    raise TokenFormatError(f"Unknown token type: {t!r}")


def tokens_to_obj(tokens: Sequence[Token], variables: Optional[Mapping[str, float]] = None) -> Dict[str, Any]:
    obj: Dict[str, Any] = {"type": "Program", "tokens": [token_to_obj(t) for t in tokens]}
    if variables:
        obj["variables"] = {name: float(value) for name, value in variables.items()}
    return obj


def tokens_from_obj(obj: Any) -> Tuple[List[Token], Dict[str, float]]:
    """Decode a program object, returning its tokens and initial variables.

    A bare list is accepted as a program with no variables.
    """
    if isinstance(obj, list):
        return [token_from_obj(t) for t in obj], {}
    if not isinstance(obj, dict) or obj.get("type") != "Program":
        raise TokenFormatError("Invalid program object")
    raw_tokens = obj.get("tokens", [])
    if not isinstance(raw_tokens, list):
        raise TokenFormatError("Program tokens must be a list")
    raw_variables = obj.get("variables", {})
    if not isinstance(raw_variables, dict):
        raise TokenFormatError("Program variables must be an object")
    tokens = [token_from_obj(t) for t in raw_tokens]
    variables: Dict[str, float] = {}
    for name, value in raw_variables.items():
        try:
            variables[name] = to_number(value)
        except (TypeError, ValueError) as e:
            raise TokenFormatError(f"Invalid value for variable {name}: {e}")
    return tokens, variables


def load_program(file_path: str) -> Tuple[List[Token], Dict[str, float]]:
    with open(file_path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except UnicodeDecodeError as e:
            raise TokenFormatError(f"{file_path} is not valid UTF-8: {e}")
        except json.JSONDecodeError as e:
            raise TokenFormatError(f"{file_path} is not valid JSON: {e}")
    return tokens_from_obj(data)


def dump_program(file_path: str, tokens: Sequence[Token], variables: Optional[Mapping[str, float]] = None):
    with open(file_path, 'w', encoding='utf-8') as out:
        json.dump(tokens_to_obj(tokens, variables), out, ensure_ascii=False, indent=2)
