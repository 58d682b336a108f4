"""CLI entry point for the YOLOL interpreter.

Usage:
    python -m yolol [-v|-vv|-vvv] [--steps N] <program_file>
    python -m yolol [-v...] --tokens <program_file>
    python -m yolol [-v...] --emit-ast <program_file>
    python -m yolol [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --steps N     Number of lines to execute before stopping (default 1000)
  --tokens      Print the token list of the given file and exit
  --emit-ast    Parse the given .yolol file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. After running, the environment (next
line, last error and every variable) is printed.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, TextIO

from .ast_json import ast_to_obj, ast_from_obj
from .errors import LexError, ParseError
from .interpreter import Interpreter, DEFAULT_MAX_STEPS
from .environment import Environment
from .lexer import tokenize
from .parser import parse_program


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="YOLOL language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--steps', type=int, default=DEFAULT_MAX_STEPS, help='number of lines to execute')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--tokens', metavar='YOLOL_FILE', help='print the tokens of the given .yolol file')
    group.add_argument('--emit-ast', metavar='YOLOL_FILE', help='emit AST JSON for the given .yolol file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='YOLOL program file (.yolol) to execute')
    args = parser.parse_args(argv)

    if args.v > 0:
        # Parser and interpreter trace into the same file
        with open('debug.txt', 'w', encoding='utf-8') as debug_file:
            run(args, parser, debug_file)
    else:
        run(args, parser, None)


def run(args: argparse.Namespace, parser: argparse.ArgumentParser, debug_file: Optional[TextIO]) -> None:
    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        program = ast_from_obj(data)
        env = Interpreter(debug_level=args.v, debug_file=debug_file).run(program, Environment(ast_path.stem), args.steps)
        print(env)
        return

    source_arg = args.tokens or args.emit_ast or args.program
    if not source_arg:
        parser.error('missing program file; or use --tokens/--emit-ast/--ast')
    program_file = Path(source_arg)
    source = read_source(program_file)

    try:
        tokens = tokenize(source)
        if args.tokens:
            for token in tokens:
                print(repr(token))
            return
        program = parse_program(tokens, debug_level=args.v, debug_file=debug_file)
    except (LexError, ParseError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    # Emit AST mode
    if args.emit_ast:
        obj = ast_to_obj(program)
        out_path = program_file.with_suffix(program_file.suffix + '.ast.json') if program_file.suffix != '' else program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    env = Interpreter(debug_level=args.v, debug_file=debug_file).run(program, Environment(program_file.stem), args.steps)
    print(env)


if __name__ == '__main__':
    main()
