"""
Tests for the parse tree node model.
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from corec.lexer import Token, TokenType
from corec.parser import ParseTreeNode, parse_string


class TestParseTreeNode(unittest.TestCase):

    def setUp(self):
        self.x = Token(TokenType.IDENTIFIER, "x", 1, 5)
        self.semi = Token(TokenType.SEMICOLON, ";", 1, 6)

    def test_leaf(self):
        leaf = ParseTreeNode.leaf("Identifier", self.x)
        self.assertTrue(leaf.is_leaf)
        self.assertEqual(leaf.children, [])
        self.assertEqual(list(leaf.leaves()), [self.x])

    def test_internal_node(self):
        node = ParseTreeNode("Statement")
        self.assertFalse(node.is_leaf)
        child = node.add_child(ParseTreeNode.leaf("SEMICOLON", self.semi))
        self.assertIs(node.children[0], child)
        self.assertEqual(node.child_labels(), ["SEMICOLON"])

    def test_leaves_in_order(self):
        node = ParseTreeNode("Exp", children=[
            ParseTreeNode.leaf("Identifier", self.x),
            ParseTreeNode("Inner", children=[ParseTreeNode.leaf("SEMICOLON", self.semi)]),
        ])
        self.assertEqual(list(node.leaves()), [self.x, self.semi])

    def test_walk_is_preorder(self):
        tree = parse_string("int x;").tree
        labels = [node.label for node in tree.walk()]
        self.assertEqual(labels, [
            "Program", "Declaration", "Variable_Declaration", "Data_Type", "int", "Identifier", "SEMICOLON",
        ])

    def test_find_all(self):
        tree = parse_string("int x; int y; float z;").tree
        self.assertEqual(len(tree.find_all("Identifier")), 3)
        self.assertEqual(tree.find_all("Block"), [])

    def test_children_lists_are_independent(self):
        first = ParseTreeNode("A")
        second = ParseTreeNode("B")
        first.add_child(ParseTreeNode("C"))
        self.assertEqual(second.children, [])

    def test_string_forms(self):
        leaf = ParseTreeNode.leaf("Identifier", self.x)
        self.assertEqual(str(leaf), "Identifier('x')")
        node = ParseTreeNode("Exp", children=[leaf])
        self.assertEqual(str(node), "Exp[1]")
        self.assertIn("Identifier", repr(node))


if __name__ == '__main__':
    unittest.main()
