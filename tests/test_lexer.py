"""
Test suite for the Core lexer.

Tests cover:
- Keywords, identifiers and operators
- Numeric literals with digit grouping
- String and character literals with escapes
- Line/column tracking
- Error tokens and local recovery
"""

import io
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from corec.lexer import Lexer, TokenType, tokenize_string, tokenize_file


class LexerTestCase(unittest.TestCase):

    def _types(self, source: str):
        return [token.type for token in tokenize_string(source)]

    def _lex(self, source: str):
        lexer = Lexer(source, "<test>")
        return lexer.tokenize(), lexer.errors


class TestKeywordsAndIdentifiers(LexerTestCase):
    """Test keyword recognition and identifier limits."""

    def test_keywords_are_case_insensitive(self):
        tokens = tokenize_string("INT Int int")
        self.assertEqual([t.type for t in tokens],
                         [TokenType.INT_KW, TokenType.INT_KW, TokenType.INT_KW, TokenType.TOKEN_EOF])
        # Lexemes keep their source spelling
        self.assertEqual([t.lexeme for t in tokens[:3]], ["INT", "Int", "int"])

    def test_all_keywords(self):
        source = "char int float bool if else for while return printf scanf true false void"
        types = self._types(source)[:-1]
        self.assertEqual(len(types), 14)
        self.assertTrue(all(t.is_keyword for t in types))
        self.assertEqual(types[0], TokenType.CHAR_KW)
        self.assertEqual(types[-1], TokenType.VOID_KW)

    def test_identifiers(self):
        tokens = tokenize_string("counter _tmp1 x2y")
        self.assertEqual([t.type for t in tokens[:-1]], [TokenType.IDENTIFIER] * 3)
        self.assertEqual([t.lexeme for t in tokens[:-1]], ["counter", "_tmp1", "x2y"])

    def test_keyword_prefix_is_identifier(self):
        tokens = tokenize_string("integer iff")
        self.assertEqual([t.type for t in tokens[:-1]], [TokenType.IDENTIFIER, TokenType.IDENTIFIER])

    def test_identifier_at_length_limit(self):
        name = "a" * 31
        tokens, errors = self._lex(name)
        self.assertEqual(tokens[0].type, TokenType.IDENTIFIER)
        self.assertEqual(errors, [])

    def test_identifier_too_long(self):
        name = "b" * 32
        tokens, errors = self._lex(name + " x")
        self.assertEqual(tokens[0].type, TokenType.ERROR_INVALID_IDENTIFIER)
        self.assertEqual(tokens[0].lexeme, name)
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].diagnostic.code, "L006")

    def test_custom_identifier_limit(self):
        lexer = Lexer("abcdef", max_identifier_length=5)
        tokens = lexer.tokenize()
        self.assertEqual(tokens[0].type, TokenType.ERROR_INVALID_IDENTIFIER)


class TestOperators(LexerTestCase):
    """Test punctuation and one/two character operators."""

    def test_punctuation(self):
        self.assertEqual(self._types("( ) [ ] { } , ;")[:-1], [
            TokenType.LEFT_PARENTHESIS, TokenType.RIGHT_PARENTHESIS,
            TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET,
            TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
            TokenType.COMMA, TokenType.SEMICOLON,
        ])

    def test_two_character_operators_take_precedence(self):
        self.assertEqual(self._types("== != <= >= && ||")[:-1], [
            TokenType.EQUAL, TokenType.NOT_EQUAL, TokenType.LESS_EQUAL,
            TokenType.GREATER_EQUAL, TokenType.AND, TokenType.OR,
        ])

    def test_single_character_operators(self):
        self.assertEqual(self._types("= ! < > & + - * / ^ %")[:-1], [
            TokenType.ASSIGN, TokenType.NOT, TokenType.LESS, TokenType.GREATER,
            TokenType.AMPERSAND, TokenType.PLUS, TokenType.MINUS, TokenType.MULTIPLY,
            TokenType.DIVIDE, TokenType.EXPONENT, TokenType.MODULO,
        ])

    def test_operators_without_spaces(self):
        self.assertEqual(self._types("a<=b")[:-1],
                         [TokenType.IDENTIFIER, TokenType.LESS_EQUAL, TokenType.IDENTIFIER])

    def test_lone_pipe_is_invalid(self):
        tokens, errors = self._lex("a | b")
        self.assertEqual(tokens[1].type, TokenType.ERROR_INVALID_CHARACTER)
        self.assertEqual(tokens[1].lexeme, "|")
        self.assertEqual(errors[0].diagnostic.code, "L001")
        self.assertEqual(tokens[2].type, TokenType.IDENTIFIER)


class TestNumbers(LexerTestCase):
    """Test integer and float literals."""

    def test_integer(self):
        tokens = tokenize_string("42")
        self.assertEqual(tokens[0].type, TokenType.INTEGER_LITERAL)
        self.assertEqual(tokens[0].lexeme, "42")

    def test_digit_grouping(self):
        tokens = tokenize_string("1'000 1`000'000")
        self.assertEqual(tokens[0].type, TokenType.INTEGER_LITERAL)
        self.assertEqual(tokens[0].lexeme, "1000")
        self.assertEqual(tokens[1].lexeme, "1000000")

    def test_grouping_in_fraction(self):
        tokens = tokenize_string("3.141'592")
        self.assertEqual(tokens[0].type, TokenType.FLOAT_LITERAL)
        self.assertEqual(tokens[0].lexeme, "3.141592")

    def test_short_group_is_error_and_scanning_continues(self):
        tokens, errors = self._lex("1'00 + x")
        self.assertEqual([t.type for t in tokens], [
            TokenType.ERROR_INVALID_CHARACTER, TokenType.PLUS, TokenType.IDENTIFIER, TokenType.TOKEN_EOF,
        ])
        self.assertEqual(tokens[0].lexeme, "1'00")
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].diagnostic.code, "L005")

    def test_long_group_is_error(self):
        tokens, errors = self._lex("1'0000;")
        self.assertEqual(tokens[0].type, TokenType.ERROR_INVALID_CHARACTER)
        self.assertEqual(tokens[0].lexeme, "1'0000")
        self.assertEqual(tokens[1].type, TokenType.SEMICOLON)
        self.assertEqual(len(errors), 1)

    def test_malformed_numeral_sits_at_fault(self):
        tokens, errors = self._lex("x = 12'34;")
        self.assertEqual(tokens[2].type, TokenType.ERROR_INVALID_CHARACTER)
        self.assertEqual(tokens[2].lexeme, "12'34")
        self.assertEqual((tokens[2].line, tokens[2].column), (1, 10))
        self.assertEqual((errors[0].line, errors[0].column), (1, 10))

        # Scanning resumes with the semicolon
        self.assertEqual(tokens[3].type, TokenType.SEMICOLON)
        self.assertEqual((tokens[3].line, tokens[3].column), (1, 10))
        self.assertEqual(tokens[4].type, TokenType.TOKEN_EOF)

    def test_leading_decimal_point(self):
        tokens = tokenize_string(".5")
        self.assertEqual(tokens[0].type, TokenType.FLOAT_LITERAL)
        self.assertEqual(tokens[0].lexeme, "0.5")

    def test_trailing_decimal_point(self):
        tokens = tokenize_string("5.")
        self.assertEqual(tokens[0].type, TokenType.FLOAT_LITERAL)
        self.assertEqual(tokens[0].lexeme, "5.0")


class TestStringsAndCharacters(LexerTestCase):
    """Test string and character literals."""

    def test_simple_string(self):
        tokens = tokenize_string('"hello world"')
        self.assertEqual(tokens[0].type, TokenType.STRING)
        self.assertEqual(tokens[0].lexeme, "hello world")

    def test_escaped_quote(self):
        tokens = tokenize_string('"a\\"b"')
        self.assertEqual(len(tokens), 2)
        self.assertEqual(tokens[0].type, TokenType.STRING)
        self.assertEqual(tokens[0].lexeme, 'a"b')

    def test_string_escapes(self):
        tokens = tokenize_string('"\\n\\t\\r\\\\"')
        self.assertEqual(tokens[0].lexeme, "\n\t\r\\")

    def test_invalid_string_escape(self):
        tokens, errors = self._lex('"a\\qb" x')
        self.assertEqual(tokens[0].type, TokenType.ERROR_INVALID_CHARACTER)
        self.assertEqual(tokens[0].lexeme, '"a\\qb"')
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)
        self.assertEqual(errors[0].diagnostic.code, "L002")

    def test_unterminated_string(self):
        tokens, errors = self._lex('"abc\nint')
        self.assertEqual(tokens[0].type, TokenType.ERROR_INVALID_CHARACTER)
        self.assertEqual(tokens[0].lexeme, '"abc')
        self.assertEqual(tokens[1].type, TokenType.INT_KW)
        self.assertEqual(tokens[1].line, 2)
        self.assertEqual(errors[0].diagnostic.code, "L003")
        self.assertEqual((errors[0].line, errors[0].column), (1, 1))

    def test_character_literal(self):
        tokens = tokenize_string("'a' '\\n' '\\''")
        self.assertEqual([t.type for t in tokens[:-1]], [TokenType.CHARACTER_LITERAL] * 3)
        self.assertEqual([t.lexeme for t in tokens[:-1]], ["a", "\n", "'"])

    def test_empty_character_literal(self):
        tokens, errors = self._lex("''")
        self.assertEqual(tokens[0].type, TokenType.ERROR_INVALID_CHARACTER)
        self.assertEqual(errors[0].diagnostic.code, "L004")

    def test_multi_character_literal(self):
        tokens, errors = self._lex("'ab' x")
        self.assertEqual(tokens[0].type, TokenType.ERROR_INVALID_CHARACTER)
        self.assertEqual(tokens[0].lexeme, "'ab'")
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)
        self.assertEqual(len(errors), 1)

    def test_unterminated_character_literal(self):
        tokens, errors = self._lex("'a\nx")
        self.assertEqual(tokens[0].type, TokenType.ERROR_INVALID_CHARACTER)
        self.assertEqual(tokens[1].type, TokenType.IDENTIFIER)
        self.assertIn("unterminated", errors[0].message)


class TestPositionsAndComments(LexerTestCase):
    """Test line/column tracking, whitespace and comments."""

    def test_line_and_column(self):
        tokens = tokenize_string("int x;\n  y")
        positions = [(t.line, t.column) for t in tokens]
        self.assertEqual(positions, [(1, 1), (1, 5), (1, 6), (2, 3), (2, 4)])

    def test_empty_source(self):
        tokens = tokenize_string("")
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, TokenType.TOKEN_EOF)
        self.assertEqual(tokens[0].lexeme, "EOF")

    def test_single_eof(self):
        tokens = tokenize_string("int x; // trailing\n\n")
        self.assertEqual([t.type for t in tokens].count(TokenType.TOKEN_EOF), 1)
        self.assertEqual(tokens[-1].type, TokenType.TOKEN_EOF)

    def test_line_comment(self):
        self.assertEqual(self._types("int x; // comment ; ;\nx")[:-1], [
            TokenType.INT_KW, TokenType.IDENTIFIER, TokenType.SEMICOLON, TokenType.IDENTIFIER,
        ])

    def test_division_is_not_comment(self):
        self.assertEqual(self._types("a / b")[:-1],
                         [TokenType.IDENTIFIER, TokenType.DIVIDE, TokenType.IDENTIFIER])


class TestErrorRecovery(LexerTestCase):
    """Test that lexical faults never stop the scan."""

    def test_invalid_characters(self):
        tokens, errors = self._lex("int @x # y;")
        self.assertEqual([t.type for t in tokens], [
            TokenType.INT_KW, TokenType.ERROR_INVALID_CHARACTER, TokenType.IDENTIFIER,
            TokenType.ERROR_INVALID_CHARACTER, TokenType.IDENTIFIER, TokenType.SEMICOLON,
            TokenType.TOKEN_EOF,
        ])
        self.assertEqual(len(errors), 2)
        self.assertEqual((errors[0].line, errors[0].column), (1, 5))

    def test_error_diagnostic_text(self):
        _, errors = self._lex("@")
        text = str(errors[0])
        self.assertIn("[L001]", text)
        self.assertIn("<test>:1:1", text)

    def test_has_errors(self):
        lexer = Lexer("int x;")
        lexer.tokenize()
        self.assertFalse(lexer.has_errors())


class TestSources(unittest.TestCase):
    """Test the string, stream and file entry points."""

    def test_stream_source(self):
        tokens = Lexer(io.StringIO("int x;")).tokenize()
        self.assertEqual(len(tokens), 4)

    def test_tokenize_file(self):
        import tempfile

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "prog.core")
            with open(path, "w", encoding="utf-8") as f:
                f.write("float f = 1.5;\n")

            tokens = tokenize_file(path)

        self.assertEqual(tokens[3].type, TokenType.FLOAT_LITERAL)
        self.assertEqual(tokens[-1].type, TokenType.TOKEN_EOF)

    def test_tokenize_missing_file(self):
        with self.assertRaises(OSError):
            tokenize_file("/nonexistent/prog.core")

    def test_token_codes(self):
        self.assertEqual(TokenType.LEFT_PARENTHESIS.code, 0)
        self.assertEqual(TokenType.IDENTIFIER.code, 25)
        self.assertEqual(TokenType.ERROR_INVALID_CHARACTER.code, 44)
        self.assertEqual(TokenType.TOKEN_EOF.code, 46)


if __name__ == '__main__':
    unittest.main()
