import unittest

from adso.lang.error import LexError
from adso.lang.lexical import INT_MAX, Lexer, Token, tokenize


def kinds(text):
    return [(token.kind, token.value) for token in tokenize(text)]


class LexerTestCase(unittest.TestCase):

    def test_next(self):
        cases = {
            "if (n < 1) { return 1; }": [
                ("if", "if"), ("(", "("), ("ident", "n"), ("<", "<"), ("number", 1), (")", ")"),
                ("{", "{"), ("return", "return"), ("number", 1), (";", ";"), ("}", "}"), ("eof", "eof")
            ],
            "n*fact(n-1)": [
                ("ident", "n"), ("*", "*"), ("ident", "fact"), ("(", "("), ("ident", "n"), ("-", "-"),
                ("number", 1), (")", ")"), ("eof", "eof")
            ],
            "ifx returned 007": [("ident", "ifx"), ("ident", "returned"), ("number", 7), ("eof", "eof")],
            "abc123def": [("ident", "abc"), ("number", 123), ("ident", "def"), ("eof", "eof")],
            "": [("eof", "eof")],
            " \t\n ": [("eof", "eof")],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, kinds(case), case)

    def test_invalid(self):
        should_raise = ["a + b", "x = 1", "f(a, b)", "1.5", "ñ", "\"s\"", "a\r", str(INT_MAX + 1)]
        for case in should_raise:
            self.assertRaises(LexError, tokenize, case)

        self.assertEqual([("number", INT_MAX), ("eof", "eof")], kinds(str(INT_MAX)))

    def test_positions(self):
        lexer = Lexer("int main() {\n  print(1);\n}")
        expected = [(1, 1), (1, 5), (1, 9), (1, 10), (1, 12), (2, 3), (2, 8), (2, 9), (2, 10), (2, 11), (3, 1), (3, 2)]
        self.assertEqual(expected, [(token.line, token.column) for token in lexer])

    def test_error_position(self):
        try:
            tokenize("void main() {\n  print(1) $\n}")
        except LexError as error:
            self.assertEqual((2, 12), (error.line, error.column))
        else:
            self.fail("LexError not raised")

    def test_eof_repeats(self):
        lexer = Lexer("x")
        self.assertEqual(Token("ident", "x", 1, 1), lexer.next())
        for __ in range(3):
            self.assertEqual("eof", lexer.next().kind)
        self.assertTrue(lexer.at_end())

    def test_peek(self):
        lexer = Lexer("ab (")
        self.assertEqual("a", lexer.peek())
        lexer.next()
        self.assertEqual(" ", lexer.peek())
        lexer.skip_whitespace()
        self.assertEqual("(", lexer.peek())
        lexer.next()
        self.assertEqual("", lexer.peek())


if __name__ == '__main__':
    unittest.main()
