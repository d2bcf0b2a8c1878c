"""
Command line interface for the Core front end.

    corec program.core [--symbol-table PATH] [--parse-tree PATH]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import FrontEndConfig
from .driver import compile_file


EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_PARSE_FAILED = 2

USAGE = "Usage: corec <filename.core>"


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="corec",
        description="Lex and parse a Core source file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    corec program.core                          # Write symbol_table.txt and parse_tree.txt
    corec program.core --tokens-only            # Write the symbol table only
    corec program.core --parse-tree out.txt -v  # Custom tree path, debug logging
        """
    )

    parser.add_argument('sources', nargs='*', metavar='source',
                        help='Source file with a .core extension')

    # Output options
    parser.add_argument('--symbol-table', metavar='PATH', default=FrontEndConfig.symbol_table_path,
                        help='Where to write the symbol table (default: %(default)s)')
    parser.add_argument('--parse-tree', metavar='PATH', default=FrontEndConfig.parse_tree_path,
                        help='Where to write the parse tree (default: %(default)s)')
    parser.add_argument('--tokens-only', action='store_true',
                        help='Stop after lexical analysis')

    # Logging options
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level (default: %(default)s)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Shortcut for --log-level DEBUG')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the corec command."""
    args = build_argument_parser().parse_args(argv)

    # Exactly one source file, otherwise usage and no analysis
    if len(args.sources) != 1:
        print(USAGE, file=sys.stderr)
        return EXIT_OK
    source = args.sources[0]

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, args.log_level),
        format='%(levelname)s %(name)s: %(message)s'
    )

    config = FrontEndConfig(symbol_table_path=args.symbol_table, parse_tree_path=args.parse_tree)
    if not config.accepts(source):
        print(USAGE, file=sys.stderr)
        print(f"Input file must have a {config.source_extension} extension.", file=sys.stderr)
        return EXIT_OK

    try:
        result = compile_file(source, config, parse=not args.tokens_only)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_IO_ERROR

    for error in result.lexer_errors:
        print(error, file=sys.stderr)

    if result.parse_result is None:
        return EXIT_OK

    for error in result.parse_result.errors:
        print(error, file=sys.stderr)

    if not result.parse_result.succeeded:
        if result.parse_result.panic:
            print("Parsing failed: end of input reached in panic mode", file=sys.stderr)
        else:
            print(f"Parsing failed with {len(result.parse_result.errors)} syntax error(s)", file=sys.stderr)
        return EXIT_PARSE_FAILED

    print(f"Parsing succeeded: {config.parse_tree_path}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
