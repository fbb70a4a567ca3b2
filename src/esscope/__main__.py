"""CLI entry point: run `esscope globals file.js` or `python -m esscope globals file.js`."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .analysis.globals import get_global_occurrences, get_globals
    from .analysis.naming import unique_identifier
    from .analysis.scope_builder import build_scopes
    from .backends.printer import print_node
    from .frontend.parser import ParseError, Parser
    from .shared.errors import ErrorReporter
    from .utils.config import DEFAULT_PARSER_CACHE_FILE, IO_ERROR_CODE
    from .utils.io_utils import read_source_file

    parser = argparse.ArgumentParser(prog="esscope", description="Scope analysis for JavaScript sources.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log analysis steps to stderr")
    parser.add_argument("--cache", action="store_true", help=f"Cache the compiled grammar in {DEFAULT_PARSER_CACHE_FILE}")
    commands = parser.add_subparsers(dest="command", required=True)

    globals_cmd = commands.add_parser("globals", help="List free references")
    globals_cmd.add_argument("file", type=Path, help="Path to .js source file")
    globals_cmd.add_argument("--unique", action="store_true", help="Print each free name once")

    name_cmd = commands.add_parser("unique-name", help="Print a fresh name for the program scope")
    name_cmd.add_argument("file", type=Path, help="Path to .js source file")
    name_cmd.add_argument("name", nargs="?", default=None, help="Descriptive stem for the name")

    print_cmd = commands.add_parser("print", help="Print the normalized source")
    print_cmd.add_argument("file", type=Path, help="Path to .js source file")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(name)s: %(message)s")

    path = args.file
    reporter = ErrorReporter({})
    try:
        source = read_source_file(path)
    except OSError as e:
        reporter.report_error(f"could not read {path}: {e.strerror or e}", None, code=IO_ERROR_CODE)
        sys.stderr.write(reporter.format_all_errors() + "\n")
        return 1

    reporter.source_files[str(path)] = source
    try:
        program = Parser(DEFAULT_PARSER_CACHE_FILE if args.cache else None).parse(source, str(path))
    except ParseError as e:
        reporter.report_exception(e)
        sys.stderr.write(reporter.format_all_errors() + "\n")
        return 1

    if args.command == "print":
        sys.stdout.write(print_node(program) + "\n")
        return 0

    scopes = build_scopes(program)
    if args.command == "unique-name":
        sys.stdout.write(unique_identifier(scopes.root, args.name).name + "\n")
        return 0

    if args.unique:
        for identifier in get_globals(program, scopes):
            sys.stdout.write(identifier.name + "\n")
        return 0
    for identifier in get_global_occurrences(program, scopes):
        location = identifier.location
        where = f"{location.file}:{location.line}:{location.column}" if location else str(path)
        sys.stdout.write(f"{identifier.name} {where}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
