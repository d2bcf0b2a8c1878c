"""
Core Parser Package

Implements a recursive descent parser for the Core language. Produces a
concrete parse tree whose leaves are exactly the input tokens.

Key Features:
- One method per grammar production and precedence level
- Flat nodes for left-associative operator chains
- Panic-mode error recovery on a fixed synchronizing set
- Diagnostics with error codes and source locations
"""

from .parse_tree import ParseTreeNode
from .parser import Parser, ParseResult, parse_tokens, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "ParseResult",
    "parse_tokens",
    "parse_string",
    "parse_file",

    # Tree
    "ParseTreeNode",

    # Error handling
    "ParseError",
]
