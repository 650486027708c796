from flateval.tokens import ControlKind
from flateval.types import ErrorVal


class EvalError(Exception):
    """Exception type used to propagate flateval evaluation errors."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"{err.name}: {err.message}")
        self.err = err


class InvalidAssignment(EvalError):
    """An assignment does not have a variable two tokens before its value."""
    def __init__(self, message: str):
        super().__init__(ErrorVal('InvalidAssignment', message))


class UndefinedVariable(EvalError):
    def __init__(self, name: str):
        super().__init__(ErrorVal('UndefinedVariable', f'undefined variable {name}'))
        self.name = name


class InvalidForLoop(EvalError):
    def __init__(self, message: str):
        super().__init__(ErrorVal('InvalidForLoop', message))


class InvalidIfStatement(EvalError):
    def __init__(self, message: str):
        super().__init__(ErrorVal('InvalidIfStatement', message))


class MissingMarker(EvalError):
    """A required control marker was not found before the end of the range."""
    def __init__(self, kind: ControlKind, name: str = 'MissingMarker'):
        super().__init__(ErrorVal(name, f'missing {kind.value} marker'))
        self.kind = kind


class MissingEndFor(MissingMarker):
    def __init__(self):
        super().__init__(ControlKind.END_FOR, 'MissingEndFor')


class MissingEndIf(MissingMarker):
    def __init__(self):
        super().__init__(ControlKind.END_IF, 'MissingEndIf')


class TokenFormatError(ValueError):
    """Raised when a JSON program cannot be decoded into tokens."""
    pass
