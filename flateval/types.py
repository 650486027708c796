"""Value helpers for flateval.

Every runtime value is a Python ``float``. This module holds the error
value carried by interpreter exceptions and the helpers used to coerce and
print numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import math


@dataclass
class ErrorVal:
    """Represents an evaluation error.

    An error carries a name (the failure condition, e.g.
    ``'UndefinedVariable'``) and a human readable message.
    """
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


def to_number(value: Any) -> float:
    """Coerce a host value to a flateval number.

    Booleans are rejected even though Python treats them as integers; a
    variable table seeded with ``True`` is almost certainly a mistake.
    """
    if isinstance(value, bool):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            raise ValueError(f'cannot parse number from {value!r}')
    raise TypeError(f"expected a number, got {type(value).__name__}")


def to_string(value: float) -> str:
    """Format a number for printing.

    Integral values print without a fractional part (``15`` rather than
    ``15.0``); everything else uses ``repr`` for a round-trip
    representation.
    """
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return repr(value)
