#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

import unittest

from src.string_lexer import PieceKind, StringLexer, StringPiece


def lit(text):
    return StringPiece(PieceKind.LITERAL, text)


def esc(text):
    return StringPiece(PieceKind.ESCAPE, text)


def ident(text):
    return StringPiece(PieceKind.IDENTIFIER, text)


class TestStringLexer(unittest.TestCase):
    def pieces(self, text):
        return StringLexer().tokenize(text)

    def test_empty(self):
        self.assertEqual(self.pieces(""), [])

    def test_plain_text(self):
        self.assertEqual(self.pieces("hello world"), [lit("hello world")])

    def test_interpolation(self):
        self.assertEqual(
            self.pieces("x = {x}, y = {y_2}"),
            [lit("x = "), ident("x"), lit(", y = "), ident("y_2")],
        )

    def test_escapes_are_decoded(self):
        self.assertEqual(
            self.pieces("a\\tb\\n"),
            [lit("a"), esc("\t"), lit("b"), esc("\n")],
        )

    def test_escaped_braces_and_quotes(self):
        self.assertEqual(
            self.pieces('\\{x\\} \\"'),
            [esc("{"), lit("x"), esc("}"), lit(" "), esc('"')],
        )

    def test_brace_without_identifier_is_literal(self):
        self.assertEqual(self.pieces("{ x } {1}"), [lit("{ x } {1}")])

    def test_unclosed_brace_is_literal(self):
        self.assertEqual(self.pieces("total: {x"), [lit("total: {x")])

    def test_trailing_backslash_is_literal(self):
        self.assertEqual(self.pieces("end\\"), [lit("end\\")])


if __name__ == "__main__":
    unittest.main()
