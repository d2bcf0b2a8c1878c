"""
Parse tree rendering.

Internal nodes print as `Label(` with their children one level deeper, two
spaces per level, separated by commas; a childless node prints as
`Label()`. Leaves print as:

    STRING: text            string literals, unquoted
    int                     keywords and data type names, bare
    IDENTIFIER: "x"         everything else, kind and quoted lexeme
"""

from typing import List

from ..lexer.tokens import TokenType
from ..parser.parse_tree import ParseTreeNode


INDENT = "  "
BARE_LEAF_LABELS = frozenset({"int", "float", "char", "bool"})


class ParseTreePrinter:
    """Renders a parse tree as indented text."""

    def render(self, node: ParseTreeNode) -> str:
        parts: List[str] = []
        self._render_node(node, 0, parts)
        return "".join(parts)

    def write(self, node: ParseTreeNode, path: str, encoding: str = "utf-8"):
        """
        Write the rendered tree to a file, replacing any previous content.

        Raises:
            OSError: If the file cannot be written
        """
        with open(path, "w", encoding=encoding) as f:
            f.write(self.render(node))

    def render_leaf(self, node: ParseTreeNode) -> str:
        token = node.token
        if token.type == TokenType.STRING:
            return f"{token.type.name}: {token.lexeme}"
        if token.is_keyword or node.label in BARE_LEAF_LABELS:
            return token.lexeme
        return f'{token.type.name}: "{token.lexeme}"'

    def _render_node(self, node: ParseTreeNode, depth: int, parts: List[str]):
        parts.append(INDENT * depth)

        if node.is_leaf:
            parts.append(self.render_leaf(node))
            return

        parts.append(node.label + "(")
        if node.children:
            parts.append("\n")
            for index, child in enumerate(node.children):
                if index:
                    parts.append(",\n")
                self._render_node(child, depth + 1, parts)
            parts.append("\n" + INDENT * depth)
        parts.append(")")
