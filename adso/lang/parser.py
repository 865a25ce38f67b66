"""Recursive-descent parser for the adso language, see grammar.py for the grammar itself.

Tokens are pulled from a Lexer one at a time. Lookahead is a single raw character: the parser skips whitespace and
peeks at the next character to choose between a call, a binary expression, a block terminator, or a bare atom. No
production ever needs to backtrack, so the first unexpected token raises a ParseError.
"""

from adso.lang.error import ParseError
from adso.lang.grammar import BinExpr, FnCall, FnCallSt, FnDef, Ident, IfSt, NumberLit, OPERATORS, Program, ReturnSt
from adso.lang.lexical import IDENT, Lexer, NUMBER


class Parser:
    """Builds a Program from a Lexer. A Parser is single-use: call parse once."""

    def __init__(self, lexer):
        self.lexer = lexer

    def peek(self):
        """Next raw character after any whitespace, without consuming a token."""
        self.lexer.skip_whitespace()
        return self.lexer.peek()

    def eat(self, context, kind):
        """Consumes the next token, raising ParseError naming context if it is not of kind."""
        token = self.lexer.next()
        if token.kind != kind:
            raise ParseError(context, repr(kind) if kind not in (IDENT, NUMBER) else kind, token)
        return token

    def until(self, char, parse):
        """Collects parse() results until the next raw character is char."""
        results = []
        while self.peek() not in (char, ""):
            results.append(parse())
        return results

    def parse(self):
        """program := fn_def+"""
        body = [self.fn_def()]
        while self.peek():
            body.append(self.fn_def())
        return Program(body)

    def fn_def(self):
        return_type = self.eat("FnDef", IDENT)
        name = self.eat("FnDef", IDENT)
        self.eat("FnDef", "(")

        param_type = param_name = None
        if self.peek() != ")":
            param_type = self.eat("FnDef", IDENT).value
            param_name = self.eat("FnDef", IDENT).value

        self.eat("FnDef", ")")
        self.eat("FnDef", "{")
        body = self.until("}", self.statement)
        self.eat("FnDef", "}")

        return FnDef(return_type.value, name.value, param_type, param_name, body,
                     line=return_type.line, column=return_type.column)

    def statement(self):
        token = self.lexer.next()
        if token.kind == "if":
            return self.if_st(token)
        elif token.kind == "return":
            return self.return_st(token)
        elif token.kind == IDENT:
            call = self.fn_call_tail(token)
            self.eat("St", ";")
            return FnCallSt(call, line=token.line, column=token.column)
        raise ParseError("St", "statement", token)

    def if_st(self, keyword):
        self.eat("IfSt", "(")
        condition = self.expr()
        self.eat("IfSt", ")")
        self.eat("IfSt", "{")
        body = self.until("}", self.statement)
        self.eat("IfSt", "}")
        return IfSt(condition, body, line=keyword.line, column=keyword.column)

    def return_st(self, keyword):
        value = self.expr()
        self.eat("ReturnSt", ";")
        return ReturnSt(value, line=keyword.line, column=keyword.column)

    def fn_call_tail(self, name):
        """Parses '(' expr? ')' after an already-consumed name token."""
        self.eat("FnCall", "(")
        arg = self.expr() if self.peek() != ")" else None
        self.eat("FnCall", ")")
        return FnCall(name.value, arg, line=name.line, column=name.column)

    def expr(self):
        token = self.lexer.next()
        if token.kind == NUMBER:
            atom = NumberLit(token.value, line=token.line, column=token.column)
        elif token.kind == IDENT:
            atom = Ident(token.value, line=token.line, column=token.column)
        else:
            raise ParseError("Expr", "number or ident", token)

        lookahead = self.peek()
        if lookahead == "(":
            if token.kind != IDENT:
                raise ParseError("FnCall", IDENT, token)
            return self.fn_call_tail(token)
        elif lookahead in OPERATORS:
            op = self.lexer.next()
            return BinExpr(atom, op.kind, self.expr(), line=token.line, column=token.column)
        return atom


def parse(text):
    """Parses source text into a Program."""
    return Parser(Lexer(text)).parse()
