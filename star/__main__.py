"""CLI entry point for the Star interpreter.

Usage:
    python -m star [-v|-vv|-vvv|-vvvv] <program_file>
    python -m star [-v...] --check <program_file>
    python -m star --emit-tokens <program_file>

Options:
  -v             Increase debug verbosity (can be repeated)
  --check        Tokenize the program and validate it against the grammar
  --emit-tokens  Write the token dump of the program to a .lex file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Any error stops the run and is reported
on stderr with exit status 1.
"""

import argparse
import sys
from pathlib import Path

from .errors import StarError
from .grammar import check_program
from .interpreter import Interpreter
from .lexer import tokenize
from .token_dump import dump_path, write_tokens


def read_program(path: str) -> str:
    program_file = Path(path)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Star language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--check', metavar='STAR_FILE', help='validate the given .sta file against the grammar')
    group.add_argument('--emit-tokens', metavar='STAR_FILE', help='write the token dump of the given .sta file')
    parser.add_argument('program', nargs='?', help='Star program file (.sta) to execute')
    args = parser.parse_args(argv)

    try:
        # Token dump mode
        if args.emit_tokens:
            source = read_program(args.emit_tokens)
            out_path = write_tokens(tokenize(source), dump_path(args.emit_tokens))
            print(str(out_path))
            return

        # Grammar check mode
        if args.check:
            source = read_program(args.check)
            check_program(tokenize(source))
            print(f"{args.check}: ok")
            return

        # Default: execute source file
        if not args.program:
            parser.error('missing program file; or use --check/--emit-tokens')
        source = read_program(args.program)
        interpreter = Interpreter(debug_level=args.v)
        try:
            tokens = tokenize(source, warn=interpreter.warning)
        except StarError:
            interpreter.close()
            raise
        interpreter.run(tokens)
    except StarError as e:
        sys.stdout.flush()
        print(str(e), file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
