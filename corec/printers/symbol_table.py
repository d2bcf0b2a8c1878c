"""
Symbol table rendering.

One fixed-width row per token, error tokens and the end marker included,
between 128-character rules. Control characters resolved from escapes are
shown escaped again so that every token stays on its own line.
"""

from typing import Iterable, List

from ..lexer.tokens import Token


RULE = "_" * 128
HEADER = "TOKEN CODE      | TOKEN                    | LINE #          | COLUMN #        | LEXEME"

# Resolved control characters, spelled as their escapes
CONTROL_ESCAPES = {"\n": "\\n", "\t": "\\t", "\r": "\\r"}


def format_row(token: Token) -> str:
    return "%-15d | %-24s | %-15d | %-15d | %s" % (
        token.code, token.type.name, token.line, token.column,
        "".join(CONTROL_ESCAPES.get(char, char) for char in token.lexeme)
    )


class SymbolTableWriter:
    """Renders a token list as the symbol table text."""

    def render(self, tokens: Iterable[Token]) -> str:
        lines: List[str] = [RULE, HEADER, RULE]
        lines.extend(format_row(token) for token in tokens)
        lines.append(RULE)
        return "\n".join(lines) + "\n"

    def write(self, tokens: Iterable[Token], path: str, encoding: str = "utf-8"):
        """
        Write the symbol table to a file, replacing any previous content.

        Raises:
            OSError: If the file cannot be written
        """
        with open(path, "w", encoding=encoding) as f:
            f.write(self.render(tokens))
