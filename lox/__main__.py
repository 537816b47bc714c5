"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] [script]
    python -m lox [-v...] --emit-ast <script>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given script and print its AST as JSON

With no script, an interactive prompt is started; definitions persist
from one line to the next and an error only discards the line it
occurred on. Debug information is written to `debug.txt` in the current
directory when verbosity is greater than zero.

Exit codes: 65 for syntax or resolution errors, 66 if the script is
missing, 70 for runtime errors.
"""

import argparse
import builtins
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj
from .interpreter import Interpreter, run_source
from .parser import parse_program
from .reporter import ErrorReporter

EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def read_script(path: str) -> str:
    program_file = Path(path)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(EX_NOINPUT)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def run_prompt(interpreter: Interpreter) -> None:
    while True:
        try:
            line = builtins.input('> ')
        except EOFError:
            print()
            return
        run_source(line, interpreter)
        # globals survive to the next line; the error flags do not
        interpreter.reporter.reset()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='lox', description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--emit-ast', action='store_true', help='print the parsed AST of the script as JSON')
    parser.add_argument('script', nargs='?', help='Lox script to execute; omit for an interactive prompt')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        if not args.script:
            parser.error('--emit-ast requires a script')
        reporter = ErrorReporter()
        statements = parse_program(read_script(args.script), reporter)
        if reporter.had_error:
            sys.exit(EX_DATAERR)
        print(json.dumps(ast_to_obj(statements), ensure_ascii=False, indent=2))
        return

    interpreter = Interpreter(debug_level=args.v)
    try:
        if not args.script:
            run_prompt(interpreter)
            return
        run_source(read_script(args.script), interpreter)
    finally:
        interpreter.close()
    if interpreter.reporter.had_error:
        sys.exit(EX_DATAERR)
    if interpreter.reporter.had_runtime_error:
        sys.exit(EX_SOFTWARE)


if __name__ == '__main__':
    main()
