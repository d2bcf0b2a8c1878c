"""
Parse tree node definitions for Core.

The parser produces a concrete syntax tree: internal nodes are named after
the grammar production that built them, and leaves wrap the terminal tokens
they consumed. Nodes are built bottom-up and are not changed once attached
to a parent.
"""

from typing import Iterator, List, Optional

from ..lexer.tokens import Token


class ParseTreeNode:
    """A node of the parse tree; a leaf iff it carries a token."""

    __slots__ = ("label", "token", "children")

    def __init__(self, label: str, token: Optional[Token] = None, children: Optional[List["ParseTreeNode"]] = None):
        self.label = label
        self.token = token
        self.children: List[ParseTreeNode] = children if children is not None else []

    @classmethod
    def leaf(cls, label: str, token: Token) -> "ParseTreeNode":
        return cls(label, token)

    @property
    def is_leaf(self) -> bool:
        return self.token is not None

    def add_child(self, child: "ParseTreeNode") -> "ParseTreeNode":
        """Attach a child and return it."""
        self.children.append(child)
        return child

    def leaves(self) -> Iterator[Token]:
        """Yield the tokens of all leaves, left to right."""
        if self.token is not None:
            yield self.token
            return

        for child in self.children:
            yield from child.leaves()

    def walk(self) -> Iterator["ParseTreeNode"]:
        """Depth-first, pre-order traversal of this subtree."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, label: str) -> List["ParseTreeNode"]:
        return [node for node in self.walk() if node.label == label]

    def child_labels(self) -> List[str]:
        return [child.label for child in self.children]

    def __str__(self) -> str:
        if self.token is not None:
            return f"{self.label}({self.token.lexeme!r})"
        return f"{self.label}[{len(self.children)}]"

    def __repr__(self) -> str:
        if self.token is not None:
            return f"ParseTreeNode({self.label!r}, {self.token!r})"
        return f"ParseTreeNode({self.label!r}, children={self.child_labels()!r})"
