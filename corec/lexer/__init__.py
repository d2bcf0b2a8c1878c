"""
Core Lexer Package

Implements the lexical analyzer for the Core language: a single-pass
character automaton that never gives up on its input.

Key Features:
- One character of lookahead over strings or text streams
- Case-insensitive keywords
- Digit grouping with ' or ` separators in numerals
- Local error recovery: every fault becomes one error token
- Line/column tracking for every token
"""

from .tokens import Token, TokenType, SourceLocation
from .source import CharacterSource
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "CharacterSource",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
