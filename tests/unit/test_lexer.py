#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

import unittest

from src.lexer import Lexer, LexerError, TokenType


class TestLexer(unittest.TestCase):
    def token_types(self, source, include_eof=False):
        lexer = Lexer(source)
        types = [tok.type for tok in lexer.tokenize()]
        if not include_eof:
            types = [t for t in types if t != TokenType.EOF]
        return types

    def tokens(self, source, include_eof=False):
        lexer = Lexer(source)
        toks = list(lexer.tokenize())
        if not include_eof:
            toks = [t for t in toks if t.type != TokenType.EOF]
        return toks

    def test_empty(self):
        tokens = self.tokens("", include_eof=True)
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].type, TokenType.EOF)

    def test_whitespace_and_newlines_are_skipped(self):
        self.assertEqual(self.tokens("  \n\t\r\n "), [])

    def test_identifiers(self):
        tokens = self.tokens("foo bar _baz x1")
        self.assertEqual([t.type for t in tokens], [TokenType.IDENT] * 4)
        self.assertEqual([t.value for t in tokens], ["foo", "bar", "_baz", "x1"])

    def test_keywords(self):
        keywords = ["var", "print", "if", "else", "while"]
        tokens = self.tokens(" ".join(keywords))
        self.assertEqual(len(tokens), len(keywords))
        for t, kw in zip(tokens, keywords):
            self.assertEqual(t.type, TokenType.KEYWORD)
            self.assertEqual(t.value, kw)

    def test_keyword_prefix_is_identifier(self):
        tokens = self.tokens("variable iffy")
        self.assertEqual([t.type for t in tokens], [TokenType.IDENT, TokenType.IDENT])

    def test_numbers(self):
        for src in ["123", "3.14", ".5", "1e3", "2.5e-10", "7E+2"]:
            with self.subTest(src=src):
                tokens = self.tokens(src)
                self.assertEqual(len(tokens), 1)
                self.assertEqual(tokens[0].type, TokenType.NUMBER)
                self.assertEqual(tokens[0].value, src)

    def test_number_followed_by_letter(self):
        with self.assertRaises(LexerError):
            self.tokens("12abc")

    def test_missing_exponent_digits(self):
        with self.assertRaises(LexerError) as cm:
            self.tokens("1e+")
        self.assertIn("exponent", str(cm.exception))

    def test_operators(self):
        ops = ["+", "-", "*", "/", "%", "=", "<", ">", "!",
               "**", "&&", "||", "==", "!=", "<=", ">="]
        tokens = self.tokens(" ".join(ops))
        self.assertEqual(len(tokens), len(ops))
        for t, op in zip(tokens, ops):
            self.assertEqual(t.type, TokenType.OPERATOR)
            self.assertEqual(t.value, op)

    def test_longest_operator_wins(self):
        tokens = self.tokens("2***3")
        self.assertEqual([t.value for t in tokens], ["2", "**", "*", "3"])

    def test_delimiters(self):
        delims = ["(", ")", "{", "}", ";"]
        tokens = self.tokens(" ".join(delims))
        self.assertEqual([t.type for t in tokens], [TokenType.DELIMITER] * 5)
        self.assertEqual([t.value for t in tokens], delims)

    def test_strings_keep_escapes_raw(self):
        cases = [
            ('"hello"', "hello"),
            ('"a {x} b"', "a {x} b"),
            ('"line\\n"', "line\\n"),
            ('"say \\"hi\\""', 'say \\"hi\\"'),
        ]
        for src, expected in cases:
            with self.subTest(src=src):
                tokens = self.tokens(src)
                self.assertEqual(len(tokens), 1)
                self.assertEqual(tokens[0].type, TokenType.STRING)
                self.assertEqual(tokens[0].value, expected)
                self.assertEqual(tokens[0].raw, src)

    def test_unterminated_string(self):
        with self.assertRaises(LexerError) as cm:
            self.tokens('print("oops);\n')
        self.assertIn("Unterminated string", str(cm.exception))
        self.assertEqual(cm.exception.line, 1)

    def test_comments(self):
        source = "# a comment\nvar x; // trailing\n"
        self.assertEqual(
            self.token_types(source),
            [TokenType.KEYWORD, TokenType.IDENT, TokenType.DELIMITER],
        )

    def test_locations(self):
        tokens = self.tokens("var x\n  = 1;")
        self.assertEqual((tokens[0].line, tokens[0].col), (1, 1))
        self.assertEqual((tokens[1].line, tokens[1].col), (1, 5))
        self.assertEqual((tokens[2].line, tokens[2].col), (2, 3))
        self.assertEqual((tokens[3].line, tokens[3].col), (2, 5))

    def test_statement(self):
        self.assertEqual(
            self.token_types("while (x < 10) x = x + 1;"),
            [
                TokenType.KEYWORD,
                TokenType.DELIMITER,
                TokenType.IDENT,
                TokenType.OPERATOR,
                TokenType.NUMBER,
                TokenType.DELIMITER,
                TokenType.IDENT,
                TokenType.OPERATOR,
                TokenType.IDENT,
                TokenType.OPERATOR,
                TokenType.NUMBER,
                TokenType.DELIMITER,
            ],
        )

    def test_invalid_character(self):
        with self.assertRaises(LexerError) as cm:
            self.tokens("var x = 1 @ 2;")
        self.assertIn("Invalid character '@'", str(cm.exception))
        self.assertEqual(cm.exception.col, 11)

    def test_lone_ampersand_is_invalid(self):
        with self.assertRaises(LexerError):
            self.tokens("a & b")


if __name__ == "__main__":
    unittest.main()
