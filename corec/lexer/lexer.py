"""
Core Lexer - turns source text into a token stream.

A single pass over the input, one character at a time with one character of
lookahead. Faults never abort the pass: each one is replaced by an error
token in the stream and recorded in `errors`, and scanning resumes right
after the faulty text.
"""

import logging
from typing import List, TextIO, Union

from .source import CharacterSource
from .tokens import (
    Token, TokenType, SourceLocation, SINGLE_CHAR_TOKENS, COMPOUND_OPERATORS,
    STRING_ESCAPES, CHARACTER_ESCAPES, NUMBER_SEPARATORS, lookup_keyword
)
from .errors import (
    LexerError, create_invalid_character_error, create_invalid_escape_error,
    create_unterminated_string_error, create_invalid_character_literal_error,
    create_invalid_number_error, create_identifier_too_long_error
)


DEFAULT_MAX_IDENTIFIER_LENGTH = 31


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


class Lexer:
    """
    Core lexical analyzer.

    Converts source text into a list of tokens that always ends with exactly
    one TOKEN_EOF.
    """

    def __init__(
        self,
        source: Union[str, TextIO],
        filename: str = "<unknown>",
        max_identifier_length: int = DEFAULT_MAX_IDENTIFIER_LENGTH
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: Source text, or a readable text stream
            filename: Name of source file for error reporting
            max_identifier_length: Longest identifier accepted
        """
        self.source = source
        self.filename = filename
        self.max_identifier_length = max_identifier_length
        self.tokens: List[Token] = []
        self.errors: List[LexerError] = []
        self._chars = None
        self._logger = logging.getLogger("Lexer")

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source.

        A stream source can only be read once; string sources can be
        tokenized again.

        Returns:
            List of tokens including the EOF token
        """
        self.tokens.clear()
        self.errors.clear()
        self._chars = CharacterSource(self.source)
        chars = self._chars

        while True:
            self._skip_whitespace_and_comments()
            if chars.at_end:
                break

            line, column = chars.line, chars.column
            try:
                self.tokens.append(self._next_token(line, column))

            except LexerError as e:
                self._logger.debug(
                    "Lexical error at %s:%d:%d: %s", self.filename, e.line, e.column, e.message
                )
                self.errors.append(e)
                self.tokens.append(e.token)

        self.tokens.append(Token(TokenType.TOKEN_EOF, "EOF", chars.line, chars.column + 1))

        self._logger.debug(
            "Scanned %s: %d tokens, %d errors", self.filename, len(self.tokens), len(self.errors)
        )
        return self.tokens

    def has_errors(self) -> bool:
        """Check if lexer encountered any errors."""
        return len(self.errors) > 0

    def _next_token(self, line: int, column: int) -> Token:
        current = self._chars.current

        if _is_digit(current) or (current == "." and _is_digit(self._chars.peek())):
            return self._scan_number(line, column)

        if current.isalpha() or current == "_":
            return self._scan_identifier_or_keyword(line, column)

        if current == '"':
            return self._scan_string(line, column)

        if current == "'":
            return self._scan_character(line, column)

        return self._scan_symbol(line, column)

    def _fault(
        self,
        error: LexerError,
        token_type: TokenType,
        lexeme: str,
        line: int,
        column: int
    ) -> LexerError:
        """Attach the error token that stands in for the faulty text."""
        error.token = Token(token_type, lexeme, line, column)
        return error

    def _location(self, line: int, column: int) -> SourceLocation:
        return SourceLocation(self.filename, line, column)

    def _scan_number(self, line: int, column: int) -> Token:
        """Scan an integer or float literal, with optional ' or ` digit grouping."""
        chars = self._chars
        text: List[str] = []
        raw: List[str] = []
        has_decimal = False

        while True:
            current = chars.current

            if _is_digit(current):
                text.append(current)
                raw.append(current)
                chars.advance()

            elif current == ".":
                if has_decimal:
                    break

                has_decimal = True
                text.append(current)
                raw.append(current)
                chars.advance()

            elif current in NUMBER_SEPARATORS:
                raw.append(current)
                chars.advance()

                group = 0
                while group < 3 and _is_digit(chars.current):
                    text.append(chars.current)
                    raw.append(chars.current)
                    chars.advance()
                    group += 1

                if group != 3 or _is_digit(chars.current):
                    fault_line, fault_column = chars.line, chars.column
                    self._consume_numeral_run(raw)
                    lexeme = "".join(raw)
                    raise self._fault(
                        create_invalid_number_error(lexeme, self._location(fault_line, fault_column)),
                        TokenType.ERROR_INVALID_CHARACTER, lexeme, fault_line, fault_column
                    )

            else:
                break

        value = "".join(text)
        if value.startswith("."):
            value = "0" + value

        if value.endswith("."):
            value = value + "0"

        token_type = TokenType.FLOAT_LITERAL if has_decimal else TokenType.INTEGER_LITERAL
        return Token(token_type, value, line, column)

    def _consume_numeral_run(self, raw: List[str]):
        chars = self._chars
        while _is_digit(chars.current) or chars.current == "." or chars.current in NUMBER_SEPARATORS:
            raw.append(chars.advance())

    def _scan_identifier_or_keyword(self, line: int, column: int) -> Token:
        chars = self._chars
        text: List[str] = []
        while chars.current.isalnum() or chars.current == "_":
            text.append(chars.advance())

        lexeme = "".join(text)
        if len(lexeme) > self.max_identifier_length:
            raise self._fault(
                create_identifier_too_long_error(lexeme, self.max_identifier_length, self._location(line, column)),
                TokenType.ERROR_INVALID_IDENTIFIER, lexeme, line, column
            )

        token_type = lookup_keyword(lexeme) or TokenType.IDENTIFIER
        return Token(token_type, lexeme, line, column)

    def _scan_string(self, line: int, column: int) -> Token:
        """Scan a string literal; the token's lexeme is the resolved value."""
        chars = self._chars
        raw = [chars.advance()]  # Opening quote
        value: List[str] = []
        error = None

        while True:
            current = chars.current

            if current in ("", "\n"):
                if error is None:
                    error = create_unterminated_string_error(self._location(line, column))
                break

            if current == '"':
                raw.append(chars.advance())
                break

            if current == "\\":
                raw.append(chars.advance())
                escaped = chars.current
                if escaped in ("", "\n"):
                    continue

                if escaped in STRING_ESCAPES:
                    value.append(STRING_ESCAPES[escaped])
                elif error is None:
                    error = create_invalid_escape_error(
                        "\\" + escaped, self._location(chars.line, chars.column), r'\n \t \r \" \\'
                    )
                raw.append(chars.advance())
                continue

            value.append(current)
            raw.append(chars.advance())

        if error is not None:
            raise self._fault(error, TokenType.ERROR_INVALID_CHARACTER, "".join(raw), line, column)

        return Token(TokenType.STRING, "".join(value), line, column)

    def _scan_character(self, line: int, column: int) -> Token:
        """Scan a character literal holding exactly one character or escape."""
        chars = self._chars
        raw = [chars.advance()]  # Opening quote
        value = None
        error = None

        current = chars.current
        if current == "'":
            raw.append(chars.advance())
            raise self._fault(
                create_invalid_character_literal_error("empty character literal", self._location(line, column)),
                TokenType.ERROR_INVALID_CHARACTER, "".join(raw), line, column
            )

        if current == "\\":
            raw.append(chars.advance())
            escaped = chars.current
            if escaped in CHARACTER_ESCAPES:
                value = CHARACTER_ESCAPES[escaped]
                raw.append(chars.advance())
            elif escaped not in ("", "\n"):
                error = create_invalid_escape_error(
                    "\\" + escaped, self._location(chars.line, chars.column), r"\n \t \r \' \\"
                )
                raw.append(chars.advance())
        elif current not in ("", "\n"):
            value = current
            raw.append(chars.advance())

        if error is None and value is not None and chars.current == "'":
            raw.append(chars.advance())
            return Token(TokenType.CHARACTER_LITERAL, value, line, column)

        # Skip to the closing quote if there is one on this line
        while chars.current not in ("'", "\n", ""):
            raw.append(chars.advance())

        terminated = chars.current == "'"
        if terminated:
            raw.append(chars.advance())

        if error is None:
            if value is not None and terminated:
                reason = "more than one character between quotes"
            else:
                reason = "unterminated character literal"
            error = create_invalid_character_literal_error(reason, self._location(line, column))

        raise self._fault(error, TokenType.ERROR_INVALID_CHARACTER, "".join(raw), line, column)

    def _scan_symbol(self, line: int, column: int) -> Token:
        """Scan punctuation and operators, two-character operators first."""
        chars = self._chars
        current = chars.current

        if current in SINGLE_CHAR_TOKENS:
            chars.advance()
            return Token(SINGLE_CHAR_TOKENS[current], current, line, column)

        if current in COMPOUND_OPERATORS:
            second, double_type, single_type = COMPOUND_OPERATORS[current]
            if chars.peek() == second:
                chars.advance()
                chars.advance()
                return Token(double_type, current + second, line, column)

            if single_type is not None:
                chars.advance()
                return Token(single_type, current, line, column)

        chars.advance()
        raise self._fault(
            create_invalid_character_error(current, self._location(line, column)),
            TokenType.ERROR_INVALID_CHARACTER, current, line, column
        )

    def _skip_whitespace_and_comments(self):
        """Skip whitespace and // comments; a lone '/' is left for DIVIDE."""
        chars = self._chars
        while not chars.at_end:
            if chars.current.isspace():
                chars.advance()
                continue

            if chars.current == "/" and chars.peek() == "/":
                while chars.current not in ("\n", ""):
                    chars.advance()
                continue

            break


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Lexical faults appear as error tokens in the result; nothing is raised.
    """
    return Lexer(source, filename).tokenize()


def tokenize_file(filepath: str, encoding: str = "utf-8") -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        OSError: If the file cannot be read
    """
    with open(filepath, "r", encoding=encoding) as f:
        return Lexer(f, filepath).tokenize()
