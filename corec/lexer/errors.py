"""
Error handling for the Core lexer.

Lexical faults never stop a scan. Each one produces an error token in the
stream and a LexerError recorded on the lexer, carrying the diagnostic
with its source location.
"""

from typing import Optional, List
from dataclasses import dataclass

from .tokens import SourceLocation, Token, KEYWORDS


@dataclass
class Diagnostic:
    """Base class for diagnostics (errors, warnings, info)."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        code = f"[{self.code}] " if self.code else ""
        result = f"{severity_prefix}: {code}{self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexerError(Exception):
    """
    A lexical fault with its diagnostic.

    The lexer records these instead of raising them out of tokenize(). The
    error token that replaces the faulty text travels with the exception.
    """

    token: Optional[Token] = None

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def line(self) -> int:
        return self.diagnostic.location.line

    @property
    def column(self) -> int:
        return self.diagnostic.location.column

    def __str__(self) -> str:
        return str(self.diagnostic)


class ErrorRecovery:
    """Suggestion helpers shared by lexer and parser diagnostics."""

    @staticmethod
    def suggest_keyword_corrections(word: str) -> List[str]:
        """Suggest keywords within an edit distance of two of a word."""
        lowered = word.lower()
        suggestions = [
            keyword for keyword in KEYWORDS
            if ErrorRecovery._edit_distance(lowered, keyword) <= 2
        ]
        return sorted(suggestions, key=lambda k: ErrorRecovery._edit_distance(lowered, k))[:3]

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return ErrorRecovery._edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]


ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Invalid escape sequence",
    "L003": "Unterminated string literal",
    "L004": "Unterminated character literal",
    "L005": "Invalid numeric grouping",
    "L006": "Identifier too long",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a character that cannot start any token."""
    if char == "|":
        help_text = "Use '||' for logical or; a single '|' is not an operator."
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in Core source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text
    )


def create_invalid_escape_error(sequence: str, location: SourceLocation, allowed: str) -> LexerError:
    return LexerError(
        message=f"Invalid escape sequence: '{sequence}'",
        location=location,
        code="L002",
        help_text=f"Supported escapes are {allowed}."
    )


def create_unterminated_string_error(location: SourceLocation) -> LexerError:
    return LexerError(
        message="Unterminated string",
        location=location,
        code="L003",
        help_text="String literals must be closed with '\"' on the same line.",
        suggestions=["Add a closing '\"'", "Escape embedded quotes as \\\""]
    )


def create_invalid_character_literal_error(reason: str, location: SourceLocation) -> LexerError:
    return LexerError(
        message=f"Invalid character literal: {reason}",
        location=location,
        code="L004",
        help_text="A character literal holds exactly one character or escape between single quotes."
    )


def create_invalid_number_error(lexeme: str, location: SourceLocation) -> LexerError:
    """Create an error for a numeral with a malformed grouping separator."""
    return LexerError(
        message=f"Invalid noise separators in numeric literal: '{lexeme}'",
        location=location,
        code="L005",
        help_text="Each ' or ` separator must be followed by exactly three digits.",
        suggestions=["Write groups of three digits, e.g. 1'000'000"]
    )


def create_identifier_too_long_error(lexeme: str, limit: int, location: SourceLocation) -> LexerError:
    return LexerError(
        message=f"Invalid identifier: exceeds maximum length of {limit} characters",
        location=location,
        code="L006",
        help_text=f"'{lexeme[:limit]}...' is {len(lexeme)} characters long."
    )
