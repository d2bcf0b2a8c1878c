"""
Core Front End Package

Lexical and syntax analysis for Core, a small C-like teaching language.

Architecture:
    corec/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis and parse tree construction
    ├── printers/        # Symbol table and parse tree rendering
    ├── driver.py        # Runs the phases over one file
    └── cli.py           # corec command

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, tokenize_string, tokenize_file
from .parser import Parser, ParseResult, ParseTreeNode, parse_string, parse_file
from .config import FrontEndConfig
from .driver import FrontEndResult, analyze_file, compile_file

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "ParseResult",
    "ParseTreeNode",

    # Driver
    "FrontEndConfig",
    "FrontEndResult",
    "analyze_file",
    "compile_file",

    # Convenience functions
    "tokenize_string",
    "tokenize_file",
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__license__",
]
