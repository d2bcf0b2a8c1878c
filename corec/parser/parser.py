"""
Core Recursive Descent Parser

Builds a concrete parse tree from the token list produced by the lexer.
Expressions are parsed with one method per precedence level; the
left-associative levels collect all their operands into one flat node,
while exponentiation and assignment recurse to the right.

Error recovery is panic mode: a syntax error is recorded, the panic flag is
set and a ParseError unwinds to the enclosing declaration or block-item
loop. That loop skips ahead to the next synchronizing token, which clears
the flag. Running out of input while still in panic means the parse failed.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List, Optional

from ..lexer.tokens import Token, TokenType, DATA_TYPE_TOKENS, CONSTANT_TOKENS
from ..lexer.lexer import tokenize_string, tokenize_file
from .parse_tree import ParseTreeNode
from .errors import (
    ParseError, create_unexpected_token_error, create_missing_type_error,
    create_missing_constant_error, create_invalid_factor_error,
    create_malformed_subscript_error
)


# Tokens that are safe places to resume after a syntax error
SYNCHRONIZING_TOKENS: FrozenSet[TokenType] = frozenset({
    TokenType.SEMICOLON,
    TokenType.INT_KW,
    TokenType.FLOAT_KW,
    TokenType.CHAR_KW,
    TokenType.BOOL_KW,
    TokenType.RETURN_KW,
    TokenType.WHILE_KW,
    TokenType.FOR_KW,
    TokenType.LEFT_BRACE,
})

DATA_TYPE_LABELS = {
    TokenType.INT_KW: "int",
    TokenType.FLOAT_KW: "float",
    TokenType.CHAR_KW: "char",
    TokenType.BOOL_KW: "bool",
}

CONSTANT_LABELS = {
    TokenType.INTEGER_LITERAL: "Int",
    TokenType.FLOAT_LITERAL: "Float",
    TokenType.CHARACTER_LITERAL: "Char",
    TokenType.TRUE_KW: "Bool",
    TokenType.FALSE_KW: "Bool",
}

UNARY_OPERATORS = frozenset({TokenType.NOT, TokenType.PLUS, TokenType.MINUS})
EQUALITY_OPERATORS = frozenset({TokenType.EQUAL, TokenType.NOT_EQUAL})
RELATIONAL_OPERATORS = frozenset({
    TokenType.LESS, TokenType.GREATER, TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL,
})
ADDITIVE_OPERATORS = frozenset({TokenType.PLUS, TokenType.MINUS})
MULTIPLICATIVE_OPERATORS = frozenset({TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.MODULO})


@dataclass
class ParseResult:
    """
    Outcome of one parse.

    The tree is always present, but it is only trustworthy when `succeeded`
    is true: any recorded syntax error, or a panic flag still set at the end
    of input, makes the parse a failure.
    """
    tree: ParseTreeNode
    panic: bool
    errors: List[ParseError] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.panic and not self.errors


class Parser:
    """
    Core recursive descent parser.

    Holds a cursor into the token list with unrestricted lookahead, and the
    panic flag for this parse.
    """

    def __init__(self, tokens: List[Token], filename: str = "<unknown>"):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, ending with TOKEN_EOF
            filename: Name of source file for error reporting
        """
        self.tokens = tokens
        self.filename = filename
        self.current = 0
        self.panic = False
        self.errors: List[ParseError] = []
        self._logger = logging.getLogger("Parser")

    def parse(self) -> ParseResult:
        """
        Parse the token list into a tree rooted at a Program node.

        Syntax errors do not escape; they are collected in the result.
        """
        self.current = 0
        self.panic = False
        self.errors = []

        program = self._parse_program()

        if self.panic:
            self._logger.info("Parsing %s failed: end of input reached in panic mode", self.filename)
        elif self.errors:
            self._logger.info("Parsing %s failed with %d syntax errors", self.filename, len(self.errors))
        else:
            self._logger.info("Parsing %s succeeded", self.filename)

        return ParseResult(program, self.panic, list(self.errors))

    # Declarations

    def _parse_program(self) -> ParseTreeNode:
        program = ParseTreeNode("Program")

        while not self._is_at_end():
            try:
                program.add_child(self._parse_declaration())

            except ParseError:
                self._synchronize()

        return program

    def _parse_declaration(self) -> ParseTreeNode:
        """Pick function, array or scalar declaration from the token after the name."""
        if not self._check_data_type():
            raise self._error(create_missing_type_error(self._peek(), self.filename))

        declaration = ParseTreeNode("Declaration")
        following = self._peek(2).type

        if following == TokenType.LEFT_PARENTHESIS:
            declaration.add_child(self._parse_function_declaration())
        elif following == TokenType.LEFT_BRACKET:
            declaration.add_child(self._parse_array_declaration())
        else:
            declaration.add_child(self._parse_variable_declaration())

        return declaration

    def _parse_variable_declaration(self) -> ParseTreeNode:
        node = ParseTreeNode("Variable_Declaration")
        node.add_child(self._parse_data_type())
        node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))

        if self._check(TokenType.ASSIGN):
            node.add_child(self._consume(TokenType.ASSIGN))
            node.add_child(self._parse_exp())

        while self._check(TokenType.COMMA):
            node.add_child(self._consume(TokenType.COMMA))
            node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))

            if self._check(TokenType.ASSIGN):
                node.add_child(self._consume(TokenType.ASSIGN))
                node.add_child(self._parse_exp())

        node.add_child(self._consume(TokenType.SEMICOLON))
        return node

    def _parse_array_declaration(self) -> ParseTreeNode:
        node = ParseTreeNode("Array_Declaration")
        node.add_child(self._parse_data_type())
        node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))
        node.add_child(self._consume(TokenType.LEFT_BRACKET))

        if self._peek().type in CONSTANT_TOKENS:
            node.add_child(self._parse_const())

        node.add_child(self._consume(TokenType.RIGHT_BRACKET))

        if self._check(TokenType.ASSIGN):
            node.add_child(self._consume(TokenType.ASSIGN))
            node.add_child(self._consume(TokenType.LEFT_BRACE))

            if not self._check(TokenType.RIGHT_BRACE):
                node.add_child(self._parse_argument_list())

            node.add_child(self._consume(TokenType.RIGHT_BRACE))

        node.add_child(self._consume(TokenType.SEMICOLON))
        return node

    def _parse_function_declaration(self) -> ParseTreeNode:
        node = ParseTreeNode("Function_Declaration")
        node.add_child(self._parse_data_type())
        node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))
        node.add_child(self._consume(TokenType.LEFT_PARENTHESIS))
        node.add_child(self._parse_parameter_list())
        node.add_child(self._consume(TokenType.RIGHT_PARENTHESIS))

        # Prototype or definition
        if self._check(TokenType.LEFT_BRACE):
            node.add_child(self._parse_block())
        else:
            node.add_child(self._consume(TokenType.SEMICOLON))

        return node

    def _parse_parameter_list(self) -> ParseTreeNode:
        node = ParseTreeNode("Parameter_List")

        if self._check(TokenType.VOID_KW):
            node.add_child(self._consume(TokenType.VOID_KW))

        elif self._check_data_type():
            node.add_child(self._parse_data_type())
            node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))

            while self._check(TokenType.COMMA):
                node.add_child(self._consume(TokenType.COMMA))
                node.add_child(self._parse_data_type())
                node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))

        return node

    def _parse_data_type(self) -> ParseTreeNode:
        token = self._peek()
        if token.type not in DATA_TYPE_LABELS:
            raise self._error(create_missing_type_error(token, self.filename))

        self._advance()
        return ParseTreeNode("Data_Type", children=[ParseTreeNode.leaf(DATA_TYPE_LABELS[token.type], token)])

    def _parse_argument_list(self) -> ParseTreeNode:
        node = ParseTreeNode("Argument_List")
        node.add_child(self._wrap_exp(self._parse_exp()))

        while self._check(TokenType.COMMA):
            node.add_child(self._consume(TokenType.COMMA))
            node.add_child(self._wrap_exp(self._parse_exp()))

        return node

    # Blocks and statements

    def _parse_block(self) -> ParseTreeNode:
        node = ParseTreeNode("Block")
        node.add_child(self._consume(TokenType.LEFT_BRACE))
        node.add_child(self._parse_block_item_list())
        node.add_child(self._consume(TokenType.RIGHT_BRACE))
        return node

    def _parse_block_item_list(self) -> ParseTreeNode:
        items = ParseTreeNode("Block_Item_List")

        while not self._check(TokenType.RIGHT_BRACE) and not self._is_at_end():
            try:
                items.add_child(self._parse_block_item())

            except ParseError:
                self._synchronize()

        return items

    def _parse_block_item(self) -> ParseTreeNode:
        node = ParseTreeNode("Block_Item")

        if self._check_data_type():
            node.add_child(self._parse_local_declaration())
        else:
            node.add_child(self._parse_statement())

        return node

    def _parse_local_declaration(self) -> ParseTreeNode:
        if self._peek(2).type == TokenType.LEFT_BRACKET:
            return self._parse_array_declaration()

        return self._parse_variable_declaration()

    def _parse_statement(self) -> ParseTreeNode:
        node = ParseTreeNode("Statement")
        token_type = self._peek().type

        if token_type == TokenType.RETURN_KW:
            node.add_child(self._parse_return_statement())
        elif token_type == TokenType.IF_KW:
            node.add_child(self._parse_if_statement())
        elif token_type == TokenType.WHILE_KW:
            node.add_child(self._parse_while_statement())
        elif token_type == TokenType.FOR_KW:
            node.add_child(self._parse_for_statement())
        elif token_type == TokenType.SCANF_KW:
            node.add_child(self._parse_input_statement())
        elif token_type == TokenType.PRINTF_KW:
            node.add_child(self._parse_output_statement())
        elif token_type == TokenType.SEMICOLON:
            node.add_child(self._consume(TokenType.SEMICOLON))
        elif token_type == TokenType.LEFT_BRACE:
            node.add_child(self._parse_block())
        elif token_type == TokenType.IDENTIFIER:
            # Assignments and calls sit directly under the statement
            node.add_child(self._parse_exp())
            node.add_child(self._consume(TokenType.SEMICOLON))
        else:
            node.add_child(self._parse_expression_statement())

        return node

    def _parse_return_statement(self) -> ParseTreeNode:
        node = ParseTreeNode("Return_Statement")
        node.add_child(self._consume(TokenType.RETURN_KW))

        if not self._check(TokenType.SEMICOLON):
            node.add_child(self._parse_exp())

        node.add_child(self._consume(TokenType.SEMICOLON))
        return node

    def _parse_if_statement(self) -> ParseTreeNode:
        node = ParseTreeNode("If_Statement")
        node.add_child(self._consume(TokenType.IF_KW))
        node.add_child(self._consume(TokenType.LEFT_PARENTHESIS))
        node.add_child(self._parse_exp())
        node.add_child(self._consume(TokenType.RIGHT_PARENTHESIS))
        node.add_child(self._parse_block())

        while self._check(TokenType.ELSE_KW):
            node.add_child(self._parse_else_clause())

        return node

    def _parse_else_clause(self) -> ParseTreeNode:
        node = ParseTreeNode("Else_Clause")
        node.add_child(self._consume(TokenType.ELSE_KW))

        if self._check(TokenType.IF_KW):
            node.add_child(self._parse_if_statement())
        else:
            node.add_child(self._parse_block())

        return node

    def _parse_while_statement(self) -> ParseTreeNode:
        node = ParseTreeNode("While_Statement")
        node.add_child(self._consume(TokenType.WHILE_KW))
        node.add_child(self._consume(TokenType.LEFT_PARENTHESIS))
        node.add_child(self._parse_exp())
        node.add_child(self._consume(TokenType.RIGHT_PARENTHESIS))
        node.add_child(self._parse_block())
        return node

    def _parse_for_statement(self) -> ParseTreeNode:
        node = ParseTreeNode("For_Statement")
        node.add_child(self._consume(TokenType.FOR_KW))
        node.add_child(self._consume(TokenType.LEFT_PARENTHESIS))

        # Initializer: a declaration brings its own ';'
        if self._check_data_type():
            node.add_child(self._parse_local_declaration())
        else:
            node.add_child(self._parse_exp())
            node.add_child(self._consume(TokenType.SEMICOLON))

        node.add_child(self._parse_exp())
        node.add_child(self._consume(TokenType.SEMICOLON))
        node.add_child(self._parse_exp())
        node.add_child(self._consume(TokenType.RIGHT_PARENTHESIS))
        node.add_child(self._parse_block())
        return node

    def _parse_input_statement(self) -> ParseTreeNode:
        node = ParseTreeNode("Input_Statement")
        node.add_child(self._consume(TokenType.SCANF_KW))
        node.add_child(self._consume(TokenType.LEFT_PARENTHESIS))
        node.add_child(self._consume(TokenType.STRING, "String"))

        while self._check(TokenType.COMMA):
            node.add_child(self._consume(TokenType.COMMA))
            node.add_child(self._consume(TokenType.AMPERSAND))
            node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))

        node.add_child(self._consume(TokenType.RIGHT_PARENTHESIS))
        node.add_child(self._consume(TokenType.SEMICOLON))
        return node

    def _parse_output_statement(self) -> ParseTreeNode:
        node = ParseTreeNode("Output_Statement")
        node.add_child(self._consume(TokenType.PRINTF_KW))
        node.add_child(self._consume(TokenType.LEFT_PARENTHESIS))

        if self._check(TokenType.STRING):
            node.add_child(self._consume(TokenType.STRING, "String"))

            while self._check(TokenType.COMMA):
                node.add_child(self._consume(TokenType.COMMA))
                node.add_child(self._parse_exp())

        elif self._check(TokenType.IDENTIFIER):
            node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))

        else:
            raise self._error(create_unexpected_token_error("STRING or IDENTIFIER", self._peek(), self.filename))

        node.add_child(self._consume(TokenType.RIGHT_PARENTHESIS))
        node.add_child(self._consume(TokenType.SEMICOLON))
        return node

    def _parse_expression_statement(self) -> ParseTreeNode:
        node = ParseTreeNode("Expression_Statement")
        node.add_child(self._wrap_exp(self._parse_exp()))
        node.add_child(self._consume(TokenType.SEMICOLON))
        return node

    # Expressions

    def _parse_exp(self) -> ParseTreeNode:
        """Parse an assignment if '=' follows a (subscripted) name, else a logical-or chain."""
        if self._check(TokenType.IDENTIFIER) and self._peek(self._assignment_lookahead()).type == TokenType.ASSIGN:
            node = ParseTreeNode("Exp")
            node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))

            if self._check(TokenType.LEFT_BRACKET):
                node.add_child(self._consume(TokenType.LEFT_BRACKET))
                node.add_child(self._parse_const())
                node.add_child(self._consume(TokenType.RIGHT_BRACKET))

            node.add_child(self._consume(TokenType.ASSIGN))

            # Right associative
            node.add_child(self._parse_exp())
            return node

        return self._parse_logical_or()

    def _wrap_exp(self, node: ParseTreeNode) -> ParseTreeNode:
        """Give an expression an Exp parent unless it is an assignment already."""
        if node.label == "Exp":
            return node
        return ParseTreeNode("Exp", children=[node])

    def _assignment_lookahead(self) -> int:
        """Offset of the token after a name and its optional [...] subscript."""
        if self._peek(1).type != TokenType.LEFT_BRACKET:
            return 1

        offset = 2
        while self._peek(offset).type not in (TokenType.RIGHT_BRACKET, TokenType.TOKEN_EOF):
            offset += 1

        if self._peek(offset).type == TokenType.TOKEN_EOF:
            raise self._error(create_malformed_subscript_error(self._peek(), self._peek(offset), self.filename))

        return offset + 1

    def _parse_left_associative(
        self,
        label: str,
        operators: FrozenSet[TokenType],
        operand: Callable[[], ParseTreeNode]
    ) -> ParseTreeNode:
        """
        Parse `operand (op operand)*` into one flat node.

        The node holds the first operand followed by every operator and
        operand pair in source order. Without any operator the operand is
        returned as-is.
        """
        left = operand()
        if self._peek().type not in operators:
            return left

        node = ParseTreeNode(label, children=[left])
        while self._peek().type in operators:
            node.add_child(self._consume(self._peek().type))
            node.add_child(operand())

        return node

    def _parse_logical_or(self) -> ParseTreeNode:
        return self._parse_left_associative("Logical_Or", frozenset({TokenType.OR}), self._parse_logical_and)

    def _parse_logical_and(self) -> ParseTreeNode:
        return self._parse_left_associative("Logical_And", frozenset({TokenType.AND}), self._parse_equality)

    def _parse_equality(self) -> ParseTreeNode:
        return self._parse_left_associative("Equality", EQUALITY_OPERATORS, self._parse_relational)

    def _parse_relational(self) -> ParseTreeNode:
        return self._parse_left_associative("Relational", RELATIONAL_OPERATORS, self._parse_additive)

    def _parse_additive(self) -> ParseTreeNode:
        return self._parse_left_associative("Additive", ADDITIVE_OPERATORS, self._parse_multiplicative)

    def _parse_multiplicative(self) -> ParseTreeNode:
        return self._parse_left_associative("Multiplicative", MULTIPLICATIVE_OPERATORS, self._parse_power)

    def _parse_power(self) -> ParseTreeNode:
        left = self._parse_unary()
        if not self._check(TokenType.EXPONENT):
            return left

        node = ParseTreeNode("Exponent", children=[left])
        node.add_child(self._consume(TokenType.EXPONENT))

        # Right associative
        node.add_child(self._parse_power())
        return node

    def _parse_unary(self) -> ParseTreeNode:
        if self._peek().type in UNARY_OPERATORS:
            node = ParseTreeNode("Unary_Exp")
            node.add_child(self._consume(self._peek().type))
            node.add_child(self._parse_unary())
            return node

        return self._parse_factor()

    def _parse_factor(self) -> ParseTreeNode:
        node = ParseTreeNode("Factor")
        token_type = self._peek().type

        if token_type in CONSTANT_TOKENS:
            node.add_child(self._parse_const())

        elif token_type == TokenType.IDENTIFIER:
            node.add_child(self._consume(TokenType.IDENTIFIER, "Identifier"))

            # Function call
            if self._check(TokenType.LEFT_PARENTHESIS):
                node.add_child(self._consume(TokenType.LEFT_PARENTHESIS))
                if not self._check(TokenType.RIGHT_PARENTHESIS):
                    node.add_child(self._parse_argument_list())
                node.add_child(self._consume(TokenType.RIGHT_PARENTHESIS))

            # Array element
            elif self._check(TokenType.LEFT_BRACKET):
                node.add_child(self._consume(TokenType.LEFT_BRACKET))
                node.add_child(self._parse_const())
                node.add_child(self._consume(TokenType.RIGHT_BRACKET))

        elif token_type == TokenType.LEFT_PARENTHESIS:
            node.add_child(self._consume(TokenType.LEFT_PARENTHESIS))
            node.add_child(self._parse_exp())
            node.add_child(self._consume(TokenType.RIGHT_PARENTHESIS))

        else:
            raise self._error(create_invalid_factor_error(self._peek(), self.filename))

        return node

    def _parse_const(self) -> ParseTreeNode:
        token = self._peek()
        if token.type not in CONSTANT_LABELS:
            raise self._error(create_missing_constant_error(token, self.filename))

        self._advance()
        return ParseTreeNode("Const", children=[ParseTreeNode.leaf(CONSTANT_LABELS[token.type], token)])

    # Error recovery

    def _error(self, error: ParseError) -> ParseError:
        """Record a syntax error and enter panic mode; the caller raises it."""
        self.errors.append(error)
        self.panic = True
        self._logger.debug(
            "Syntax error at %s:%d:%d: %s", self.filename, error.line, error.column, error.message
        )
        return error

    def _synchronize(self):
        """
        Skip to the next synchronizing token.

        Always moves past at least one token, so the loop that called this
        cannot fail twice in the same place.
        """
        self.panic = True
        start = self.current
        self._advance()

        while not self._is_at_end():
            if self._peek().type in SYNCHRONIZING_TOKENS:
                self.panic = False
                self._logger.debug(
                    "Resynchronized at %s after skipping %d tokens", self._peek(), self.current - start
                )
                return

            self._advance()

        self._logger.debug("Reached end of input while in panic mode")

    # Utility methods

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self._peek().type == token_type

    def _check_data_type(self) -> bool:
        return self._peek().type in DATA_TYPE_TOKENS

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._peek()
        if not self._is_at_end():
            self.current += 1
        return token

    def _is_at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self._peek().type == TokenType.TOKEN_EOF

    def _peek(self, offset: int = 0) -> Token:
        """Return the token `offset` places ahead without consuming."""
        index = self.current + offset
        if index < len(self.tokens):
            return self.tokens[index]

        # Past the end: behave as if the input ended here
        last = self.tokens[-1] if self.tokens else None
        if last is not None and last.type == TokenType.TOKEN_EOF:
            return last
        return Token(TokenType.TOKEN_EOF, "EOF", last.line if last else 1, last.column if last else 1)

    def _consume(self, token_type: TokenType, label: Optional[str] = None) -> ParseTreeNode:
        """Consume a token of the expected type as a leaf, or raise error."""
        if self._check(token_type):
            token = self._advance()
            return ParseTreeNode.leaf(label or token_type.name, token)

        raise self._error(create_unexpected_token_error(token_type, self._peek(), self.filename))


def parse_tokens(tokens: List[Token], filename: str = "<unknown>") -> ParseResult:
    return Parser(tokens, filename).parse()


def parse_string(source: str, filename: str = "<string>") -> ParseResult:
    """
    Convenience function to lex and parse a source string.

    Returns:
        ParseResult; check `succeeded` before using the tree
    """
    return Parser(tokenize_string(source, filename), filename).parse()


def parse_file(filepath: str, encoding: str = "utf-8") -> ParseResult:
    """
    Convenience function to lex and parse a source file.

    Raises:
        OSError: If file cannot be read
    """
    return Parser(tokenize_file(filepath, encoding), filepath).parse()
