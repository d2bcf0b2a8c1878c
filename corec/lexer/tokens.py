"""
Token definitions for the Core lexer.

This module defines every token kind the Core language knows about:
- Punctuation and single/double character operators
- Literals (integer, float, character, string)
- Identifiers and the fourteen reserved keywords
- Error kinds emitted for lexical faults
- The end-of-input marker

The declaration order of TokenType is significant: a kind's position in the
enumeration is the numeric code printed in the symbol table.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Optional


class TokenType(Enum):
    """
    Enumeration of all token kinds in Core.

    Values are 0-based codes in declaration order.
    """

    # ========================================================================
    # Single-character tokens
    # ========================================================================
    LEFT_PARENTHESIS = 0            # (
    RIGHT_PARENTHESIS = 1           # )
    LEFT_BRACKET = 2                # [
    RIGHT_BRACKET = 3               # ]
    LEFT_BRACE = 4                  # {
    RIGHT_BRACE = 5                 # }
    COMMA = 6                       # ,
    SEMICOLON = 7                   # ;
    MULTIPLY = 8                    # *
    EXPONENT = 9                    # ^
    AMPERSAND = 10                  # &

    # ========================================================================
    # Operators (one or two characters)
    # ========================================================================
    PLUS = 11                       # +
    MINUS = 12                      # -
    DIVIDE = 13                     # /
    EQUAL = 14                      # ==
    NOT_EQUAL = 15                  # !=
    ASSIGN = 16                     # =
    LESS = 17                       # <
    LESS_EQUAL = 18                 # <=
    GREATER = 19                    # >
    GREATER_EQUAL = 20              # >=
    NOT = 21                        # !
    OR = 22                         # ||
    AND = 23                        # &&

    # ========================================================================
    # Literals and identifiers
    # ========================================================================
    MODULO = 24                     # %
    IDENTIFIER = 25                 # counter, _tmp1
    STRING = 26                     # "hello\n"
    INTEGER_LITERAL = 27            # 42, 1'000
    FLOAT_LITERAL = 28              # 3.14, .5, 5.
    CHARACTER_LITERAL = 29          # 'a', '\t'

    # ========================================================================
    # Keywords
    # ========================================================================
    CHAR_KW = 30
    INT_KW = 31
    FLOAT_KW = 32
    BOOL_KW = 33
    IF_KW = 34
    ELSE_KW = 35
    FOR_KW = 36
    WHILE_KW = 37
    RETURN_KW = 38
    PRINTF_KW = 39
    SCANF_KW = 40
    TRUE_KW = 41
    FALSE_KW = 42
    VOID_KW = 43

    # ========================================================================
    # Error and recovery tokens
    # ========================================================================
    ERROR_INVALID_CHARACTER = 44    # Bad character, escape, literal or numeral
    ERROR_INVALID_IDENTIFIER = 45   # Identifier longer than the limit

    # ========================================================================
    # Special tokens
    # ========================================================================
    TOKEN_EOF = 46                  # End of input

    @property
    def code(self) -> int:
        """Numeric kind code used by the symbol table."""
        return self.value

    @property
    def is_keyword(self) -> bool:
        return TokenType.CHAR_KW.value <= self.value <= TokenType.VOID_KW.value

    @property
    def is_error(self) -> bool:
        return self in (TokenType.ERROR_INVALID_CHARACTER, TokenType.ERROR_INVALID_IDENTIFIER)


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and the symbol table.
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Core language.

    The lexeme is the resolved text: escapes are already applied for strings
    and characters, and numbers have their separators stripped and their
    decimal point padded. Line and column are 1-based.
    """
    type: TokenType
    lexeme: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.lexeme!r}, {self.line}, {self.column})"

    @property
    def code(self) -> int:
        return self.type.code

    @property
    def is_literal(self) -> bool:
        """Check if this token is a literal value."""
        return self.type in LITERAL_TYPES

    @property
    def is_keyword(self) -> bool:
        return self.type.is_keyword

    @property
    def is_error(self) -> bool:
        return self.type.is_error

    @property
    def is_identifier(self) -> bool:
        return self.type == TokenType.IDENTIFIER

    @property
    def source_text(self) -> str:
        """
        Spell the token the way it could appear in source code.

        Numbers are already in a normalized, re-lexable form. Strings and
        characters get their quotes back and have their resolved escapes
        re-encoded, so lexing this text again yields an equivalent token.
        """
        if self.type == TokenType.STRING:
            return '"' + _escape(self.lexeme, STRING_REVERSE_ESCAPES) + '"'
        if self.type == TokenType.CHARACTER_LITERAL:
            return "'" + _escape(self.lexeme, CHARACTER_REVERSE_ESCAPES) + "'"
        return self.lexeme

    def location(self, filename: str = "<unknown>") -> SourceLocation:
        return SourceLocation(filename, self.line, self.column)


def _escape(text: str, table: Dict[str, str]) -> str:
    return "".join(table.get(char, char) for char in text)


# Lookup tables used by the lexer

# Reserved words, matched case-insensitively
KEYWORDS: Dict[str, TokenType] = {
    "char": TokenType.CHAR_KW,
    "int": TokenType.INT_KW,
    "float": TokenType.FLOAT_KW,
    "bool": TokenType.BOOL_KW,
    "if": TokenType.IF_KW,
    "else": TokenType.ELSE_KW,
    "for": TokenType.FOR_KW,
    "while": TokenType.WHILE_KW,
    "return": TokenType.RETURN_KW,
    "printf": TokenType.PRINTF_KW,
    "scanf": TokenType.SCANF_KW,
    "true": TokenType.TRUE_KW,
    "false": TokenType.FALSE_KW,
    "void": TokenType.VOID_KW,
}

# Single characters that are always a complete token
SINGLE_CHAR_TOKENS: Dict[str, TokenType] = {
    "(": TokenType.LEFT_PARENTHESIS,
    ")": TokenType.RIGHT_PARENTHESIS,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "^": TokenType.EXPONENT,
    "%": TokenType.MODULO,
}

# Operators whose one-character prefix is a token on its own
# prefix -> (second char, two-char type, one-char type)
COMPOUND_OPERATORS: Dict[str, tuple] = {
    "=": ("=", TokenType.EQUAL, TokenType.ASSIGN),
    "!": ("=", TokenType.NOT_EQUAL, TokenType.NOT),
    "<": ("=", TokenType.LESS_EQUAL, TokenType.LESS),
    ">": ("=", TokenType.GREATER_EQUAL, TokenType.GREATER),
    "&": ("&", TokenType.AND, TokenType.AMPERSAND),
    # A bare '|' has no meaning of its own
    "|": ("|", TokenType.OR, None),
}

STRING_ESCAPES: Dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

CHARACTER_ESCAPES: Dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "'": "'",
    "\\": "\\",
}

STRING_REVERSE_ESCAPES: Dict[str, str] = {value: "\\" + key for key, value in STRING_ESCAPES.items()}
CHARACTER_REVERSE_ESCAPES: Dict[str, str] = {value: "\\" + key for key, value in CHARACTER_ESCAPES.items()}

NUMBER_SEPARATORS = ("'", "`")

DATA_TYPE_TOKENS = frozenset({
    TokenType.INT_KW, TokenType.FLOAT_KW, TokenType.CHAR_KW, TokenType.BOOL_KW,
})

CONSTANT_TOKENS = frozenset({
    TokenType.INTEGER_LITERAL, TokenType.FLOAT_LITERAL, TokenType.CHARACTER_LITERAL,
    TokenType.TRUE_KW, TokenType.FALSE_KW,
})

LITERAL_TYPES = CONSTANT_TOKENS | {TokenType.STRING}


def lookup_keyword(word: str) -> Optional[TokenType]:
    """Return the keyword kind for a word regardless of its case."""
    return KEYWORDS.get(word.lower())
