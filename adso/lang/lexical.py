"""Lexical analysis for the adso language. Converts a character buffer into positioned tokens, one at a time.

The lexical structure can be loosely defined as follows:

```
<keyword> ::= "if" | "return"
<ident>   ::= [a-zA-Z]+                                  ; reclassified as <keyword> on exact match
<symbol>  ::= "(" | ")" | "{" | "}" | ";" | "<" | "*" | "-"
<number>  ::= [0-9]+                                     ; must fit a signed 64-bit integer
<token>   ::= <keyword> | <ident> | <symbol> | <number>
```

Spaces, tabs and newlines separate tokens and are otherwise ignored.
"""

from dataclasses import dataclass

from adso.lang.error import LexError


KEYWORDS = ["if", "return"]
SYMBOLS = "(){};<*-"
DIGITS = "0123456789"
WHITESPACE = " \t\n"

INT_MIN = -2 ** 63
INT_MAX = 2 ** 63 - 1

EOF = "eof"
IDENT = "ident"
NUMBER = "number"


@dataclass(frozen=True)
class Token:
    """A lexed token. For symbols and keywords, kind is the token text itself."""
    kind: str
    value: object
    line: int
    column: int

    def describe(self):
        """Human-readable form used in error messages."""
        if self.kind == IDENT:
            return f"ident '{self.value}'"
        elif self.kind == NUMBER:
            return f"number {self.value}"
        elif self.kind == EOF:
            return "end of input"
        return f"'{self.kind}'"

    def __str__(self):
        return str(self.value)


class Lexer:
    """Pull-based lexer: every call to next produces one Token. After the buffer is exhausted, next keeps returning
    an eof Token.
    """

    def __init__(self, text):
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1

    def peek(self):
        """Next raw character without consuming it, or '' at end of input."""
        if self.at_end():
            return ""
        return self.text[self.pos]

    def at_end(self):
        return self.pos >= len(self.text)

    def _eat(self):
        char = self.text[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def skip_whitespace(self):
        """Consumes whitespace up to the next token. Also used by the parser before peeking."""
        while not self.at_end() and self.peek() in WHITESPACE:
            self._eat()

    @staticmethod
    def is_letter(char):
        return len(char) == 1 and ("a" <= char <= "z" or "A" <= char <= "Z")

    @staticmethod
    def is_digit(char):
        return len(char) == 1 and char in DIGITS

    def _scan(self, accept):
        scanned = self._eat()
        while accept(self.peek()):
            scanned += self._eat()
        return scanned

    def next(self):
        """Returns the next Token, raising LexError on a character no token can start with."""
        self.skip_whitespace()
        line, column = self.line, self.column

        if self.at_end():
            return Token(EOF, EOF, line, column)

        char = self.peek()
        if char in SYMBOLS:
            self._eat()
            return Token(char, char, line, column)

        elif Lexer.is_digit(char):
            digits = self._scan(Lexer.is_digit)
            number = int(digits)
            if number > INT_MAX:
                raise LexError(f"can't parse {digits} as a number", line, column, length=len(digits))
            return Token(NUMBER, number, line, column)

        elif Lexer.is_letter(char):
            ident = self._scan(Lexer.is_letter)
            return Token(ident if ident in KEYWORDS else IDENT, ident, line, column)

        raise LexError(f"invalid lexical element starting with {char!r}", line, column)

    def __iter__(self):
        """Yields Tokens up to and including eof."""
        while True:
            token = self.next()
            yield token
            if token.kind == EOF:
                return


def tokenize(text):
    """Returns the list of Tokens in text, ending with eof."""
    return list(Lexer(text))
