"""
Front end driver.

Runs the lexer and the parser over one source file and writes the symbol
table and, when parsing succeeds, the parse tree.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional

from .config import FrontEndConfig
from .lexer import Lexer, Token, LexerError
from .parser import Parser, ParseResult
from .printers import SymbolTableWriter, ParseTreePrinter


logger = logging.getLogger("Driver")


@dataclass
class FrontEndResult:
    """Everything one run of the front end produced."""
    source_path: str
    tokens: List[Token]
    lexer_errors: List[LexerError] = field(default_factory=list)
    parse_result: Optional[ParseResult] = None

    @property
    def parsed(self) -> bool:
        return self.parse_result is not None and self.parse_result.succeeded


def analyze_file(path: str, config: Optional[FrontEndConfig] = None, parse: bool = True) -> FrontEndResult:
    """
    Lex and optionally parse a source file without writing any output.

    Raises:
        OSError: If the source file cannot be read
    """
    config = config or FrontEndConfig()

    with open(path, "r", encoding=config.encoding) as f:
        lexer = Lexer(f, path, config.max_identifier_length)
        tokens = lexer.tokenize()

    result = FrontEndResult(path, tokens, list(lexer.errors))
    if parse:
        result.parse_result = Parser(tokens, path).parse()

    return result


def compile_file(path: str, config: Optional[FrontEndConfig] = None, parse: bool = True) -> FrontEndResult:
    """
    Run the front end over a source file and write its outputs.

    The symbol table is always written. The parse tree is written only for
    a successful parse; after a failed parse any tree left by an earlier
    run is removed.

    Raises:
        OSError: If the source cannot be read or an output cannot be written
    """
    config = config or FrontEndConfig()
    result = analyze_file(path, config, parse)

    SymbolTableWriter().write(result.tokens, config.symbol_table_path, config.encoding)
    logger.info("Wrote %d tokens to %s", len(result.tokens), config.symbol_table_path)

    if result.parsed:
        ParseTreePrinter().write(result.parse_result.tree, config.parse_tree_path, config.encoding)
        logger.info("Wrote parse tree to %s", config.parse_tree_path)
    elif result.parse_result is not None:
        if os.path.exists(config.parse_tree_path):
            os.remove(config.parse_tree_path)
            logger.info("Removed stale parse tree %s", config.parse_tree_path)
        logger.info("Parse failed; %s not written", config.parse_tree_path)

    return result
