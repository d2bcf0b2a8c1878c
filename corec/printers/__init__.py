"""
Text renderers for the front end's two outputs: the symbol table listing
every token, and the indented parse tree.
"""

from .symbol_table import SymbolTableWriter
from .parse_tree_printer import ParseTreePrinter

__all__ = [
    "SymbolTableWriter",
    "ParseTreePrinter",
]
