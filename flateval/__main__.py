"""CLI entry point for the flateval interpreter.

Usage:
    python -m flateval [-v|-vv|-vvv] [--var NAME=VALUE ...] [--dump] <program_json>

Options:
  -v              Increase debug verbosity (can be repeated)
  --var NAME=VAL  Set a variable before evaluation (overrides the program file)
  --dump          Print every variable after evaluation
  --debug-file    Where debug output is written (default: debug.txt)

The program file is a JSON token sequence as produced by
`flateval.token_json.dump_program`. The result of the evaluation is printed
on stdout.
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Tuple
from .errors import EvalError, TokenFormatError
from .interpreter import Interpreter
from .token_json import load_program
from .types import to_number, to_string


def parse_var(text: str) -> Tuple[str, float]:
    name, sep, value = text.partition('=')
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    try:
        return name, to_number(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="flateval token interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--var', action='append', type=parse_var, default=[], metavar='NAME=VALUE',
                        help='set a variable before evaluation (can be repeated)')
    parser.add_argument('--dump', action='store_true', help='print all variables after evaluation')
    parser.add_argument('--debug-file', default='debug.txt', help='file receiving debug output')
    parser.add_argument('program', help='JSON program file to evaluate')
    args = parser.parse_args(argv)

    program_file = Path(args.program)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    try:
        tokens, variables = load_program(str(program_file))
    except TokenFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    overrides: Dict[str, float] = dict(args.var)
    variables.update(overrides)

    with Interpreter(variables, debug_level=args.v, debug_file=args.debug_file) as interpreter:
        try:
            result = interpreter.evaluate(tokens)
        except EvalError as e:
            print(f"Runtime error: {e}", file=sys.stderr)
            sys.exit(1)
        print(to_string(result))
        if args.dump:
            snapshot = interpreter.variables.snapshot()
            for name in sorted(snapshot):
                print(f"{name} = {to_string(snapshot[name])}")


if __name__ == '__main__':
    main()
