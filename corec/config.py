"""
Front end configuration.

Groups the file names and limits the command line driver works with, so
that library callers can override them without touching the CLI.
"""

from dataclasses import dataclass

from .lexer.lexer import DEFAULT_MAX_IDENTIFIER_LENGTH


@dataclass
class FrontEndConfig:
    """Settings for one run of the front end."""
    source_extension: str = ".core"
    symbol_table_path: str = "symbol_table.txt"
    parse_tree_path: str = "parse_tree.txt"
    encoding: str = "utf-8"
    max_identifier_length: int = DEFAULT_MAX_IDENTIFIER_LENGTH

    def accepts(self, path: str) -> bool:
        """Check whether a path names a source file this front end reads."""
        return path.endswith(self.source_extension)
