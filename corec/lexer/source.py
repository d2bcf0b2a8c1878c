"""
Character source for the Core lexer.

The lexer only ever needs the current character, a single character of
lookahead, a way to move forward, and the position of the current character.
CharacterSource provides exactly that over a string or any readable text
stream, pulling one character at a time.
"""

import io
from typing import Optional, TextIO, Union


# Value of `current` once the input is exhausted
END_OF_INPUT = ""


class CharacterSource:
    """
    Pull-based reader with one character of lookahead.

    Line numbers start at 1. A newline moves to the next line and resets the
    column to 0, so the first character of every line is at column 1.
    """

    def __init__(self, source: Union[str, TextIO]):
        self._stream: TextIO = io.StringIO(source) if isinstance(source, str) else source
        self._lookahead: Optional[str] = None
        self.current = END_OF_INPUT
        self.line = 1
        self.column = 0
        self.advance()

    @property
    def at_end(self) -> bool:
        return self.current == END_OF_INPUT

    def peek(self) -> str:
        """Return the character after the current one without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._stream.read(1)
        return self._lookahead

    def advance(self) -> str:
        """Move to the next character and return the one left behind."""
        previous = self.current

        if self._lookahead is not None:
            char, self._lookahead = self._lookahead, None
        else:
            char = self._stream.read(1)

        self.current = char
        if char == "\n":
            self.line += 1
            self.column = 0
        elif char:
            self.column += 1

        return previous
