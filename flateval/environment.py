from typing import Dict, Iterator, Mapping, Optional
from flateval.errors import UndefinedVariable


class VariableStore:
    """Flat mapping from variable names to numbers.

    There is no scoping: loop and conditional bodies share the namespace of
    the code around them, and values persist for the life of the owning
    interpreter.
    """
    def __init__(self, initial: Optional[Mapping[str, float]] = None):
        self.values: Dict[str, float] = {}
        if initial:
            for name, value in initial.items():
                self.assign(name, value)

    def assign(self, name: str, value: float):
        self.values[name] = float(value)

    def lookup(self, name: str) -> float:
        if name in self.values:
            return self.values[name]
        raise UndefinedVariable(name)

    def snapshot(self) -> Dict[str, float]:
        return dict(self.values)

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)
