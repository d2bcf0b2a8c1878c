"""
Error handling for the Core parser.

A syntax error is raised as a ParseError at the point of failure. The
parser records it, enters panic mode, and lets the exception unwind to the
nearest declaration or block-item loop, which resynchronizes.
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import Diagnostic, ErrorRecovery


class ParseError(Exception):
    """
    Exception raised when the parser meets a token it cannot accept.

    Contains the diagnostic, the offending token and the kind that was
    expected in its place, if a single kind was.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        expected: Optional[TokenType] = None,
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
        self.token = token
        self.expected = expected

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


class SyntaxErrorRecovery:
    """Suggestions attached to syntax errors."""

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        token_suggestions = {
            TokenType.SEMICOLON: ["Add a semicolon ';' to end the statement"],
            TokenType.RIGHT_PARENTHESIS: ["Add a closing parenthesis ')'"],
            TokenType.RIGHT_BRACKET: ["Add a closing bracket ']'"],
            TokenType.RIGHT_BRACE: ["Add a closing brace '}'"],
            TokenType.LEFT_BRACE: ["Add an opening brace '{' to start a block"],
            TokenType.LEFT_PARENTHESIS: ["Add an opening parenthesis '('"],
            TokenType.IDENTIFIER: ["Add a name here"],
        }

        return token_suggestions.get(expected, [])


PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Missing data type",
    "P003": "Missing constant",
    "P004": "Unexpected token in expression",
    "P005": "Malformed array subscript",
}


def create_unexpected_token_error(
    expected: Union[TokenType, str], found: Token, filename: str = "<unknown>"
) -> ParseError:
    """Create an error for a token that does not match the required kind."""
    expected_str = expected.name if isinstance(expected, TokenType) else expected
    found_str = found.type.name

    return ParseError(
        message=f"Expected token {expected_str} but found {found_str}",
        location=found.location(filename),
        token=found,
        expected=expected if isinstance(expected, TokenType) else None,
        code="P001",
        help_text=f"The parser expected to see {expected_str} at this position, but found {found_str} instead.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(expected) if isinstance(expected, TokenType) else []
    )


def create_missing_type_error(found: Token, filename: str = "<unknown>") -> ParseError:
    suggestions = []
    if found.type == TokenType.IDENTIFIER:
        suggestions = [f"Did you mean '{keyword}'?"
                       for keyword in ErrorRecovery.suggest_keyword_corrections(found.lexeme)
                       if keyword in ("int", "float", "char", "bool")]

    return ParseError(
        message="Expected a data type",
        location=found.location(filename),
        token=found,
        code="P002",
        help_text="Declarations start with one of int, float, char or bool.",
        suggestions=suggestions
    )


def create_missing_constant_error(found: Token, filename: str = "<unknown>") -> ParseError:
    return ParseError(
        message="Expected constant",
        location=found.location(filename),
        token=found,
        code="P003",
        help_text="An integer, float or character literal, or true/false, is required here."
    )


def create_invalid_factor_error(found: Token, filename: str = "<unknown>") -> ParseError:
    return ParseError(
        message=f"Unexpected token in factor: {found.type.name}",
        location=found.location(filename),
        token=found,
        code="P004",
        help_text="An expression operand must be a constant, a name, a call or a parenthesized expression.",
        suggestions=["Check the expression syntax", "Ensure all operators have operands"]
    )


def create_malformed_subscript_error(start: Token, found: Token, filename: str = "<unknown>") -> ParseError:
    return ParseError(
        message=f"Expected ] but got {found.lexeme}",
        location=start.location(filename),
        token=found,
        expected=TokenType.RIGHT_BRACKET,
        code="P005",
        help_text=f"The subscript opened after '{start.lexeme}' is never closed.",
        suggestions=["Add a closing bracket ']'"]
    )
