import unittest

from adso.lang.error import LexError, ParseError
from adso.lang.grammar import BinExpr, FnCall, FnCallSt, FnDef, Ident, IfSt, NumberLit, Program, ReturnSt
from adso.lang.lexical import Lexer
from adso.lang.parser import Parser, parse

FACTORIAL = """
int fact(int n){ if(n<1){return 1;} return n*fact(n-1); }
void main(){ print(fact(5)); }
"""


def expr(text):
    return Parser(Lexer(text)).expr()


class ExprTestCase(unittest.TestCase):

    def test_expr(self):
        cases = {
            "1": NumberLit(1),
            "n": Ident("n"),
            "f(1)": FnCall("f", NumberLit(1)),
            "f ( n )": FnCall("f", Ident("n")),
            "f()": FnCall("f", None),
            "n < 1": BinExpr(Ident("n"), "<", NumberLit(1)),
            "n*fact(n-1)": BinExpr(Ident("n"), "*", FnCall("fact", BinExpr(Ident("n"), "-", NumberLit(1)))),
            "a - b - c": BinExpr(Ident("a"), "-", BinExpr(Ident("b"), "-", Ident("c"))),
            "2\n\t* x": BinExpr(NumberLit(2), "*", Ident("x")),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expr(case), case)

    def test_invalid_expr(self):
        should_raise = ["", ")", "1(2)", "if", "n <", "f(1", "f(;)"]
        for case in should_raise:
            self.assertRaises(ParseError, expr, case)

    def test_call_result_is_not_left_operand(self):
        # the left operand of a binary expression is always atomic; "f(1) - 1" stops after the call
        parser = Parser(Lexer("f(1) - 1"))
        self.assertEqual(FnCall("f", NumberLit(1)), parser.expr())
        self.assertEqual("-", parser.lexer.next().kind)


class ParserTestCase(unittest.TestCase):

    def test_factorial(self):
        n_less_1 = BinExpr(Ident("n"), "<", NumberLit(1))
        recurse = BinExpr(Ident("n"), "*", FnCall("fact", BinExpr(Ident("n"), "-", NumberLit(1))))
        expected = Program([
            FnDef("int", "fact", "int", "n", [IfSt(n_less_1, [ReturnSt(NumberLit(1))]), ReturnSt(recurse)]),
            FnDef("void", "main", None, None, [FnCallSt(FnCall("print", FnCall("fact", NumberLit(5))))]),
        ])
        self.assertEqual(expected, parse(FACTORIAL))

    def test_positions(self):
        program = parse("void main() {\n    if (x < 1) {}\n}")
        fn_def = program.body[0]
        if_st = fn_def.body[0]
        self.assertEqual((1, 1), (fn_def.line, fn_def.column))
        self.assertEqual((2, 5), (if_st.line, if_st.column))
        self.assertEqual((2, 9), (if_st.condition.line, if_st.condition.column))

    def test_invalid(self):
        cases = {
            "": "FnDef",
            "int": "FnDef",
            "int main": "FnDef",
            "int main(int) {}": "FnDef",
            "int main() { return 1 }": "ReturnSt",
            "int main() { f(1) }": "St",
            "int main() { 1; }": "St",
            "int main() { if n {} }": "IfSt",
            "int main() { if (n) return 1; }": "IfSt",
            "int main() { print(1); ": "FnDef",
            "int main() {} 5": "FnDef",
            "int main() { return 1(2); }": "FnCall",
        }
        for case, context in cases.items():
            with self.assertRaises(ParseError, msg=case) as raised:
                parse(case)
            self.assertEqual(context, raised.exception.context, case)

    def test_error_details(self):
        with self.assertRaises(ParseError) as raised:
            parse("void main() {\n  return 1 2;\n}")
        error = raised.exception
        self.assertEqual("ReturnSt", error.context)
        self.assertEqual("';'", error.expected)
        self.assertEqual("number", error.found.kind)
        self.assertEqual((2, 12), error.position)

    def test_lex_error_propagates(self):
        self.assertRaises(LexError, parse, "void main() { print(1 + 2); }")

    def test_round_trip(self):
        should_pass = [
            FACTORIAL,
            "void main(){if(a<b){if(c<d){f();}g(1);}return h(x-y*z);}",
            "int a(){return 1;} bool b(int x){return x<a();} void main(){}",
        ]
        for case in should_pass:
            program = parse(case)
            rendered = str(program)
            self.assertEqual(program, parse(rendered), case)
            self.assertEqual(rendered, str(parse(rendered)), case)

    def test_display(self):
        display = parse("void main() { print(1); }").display()
        self.assertEqual(
            "Program(expr='1 function(s)', nodes=[\n"
            "    FnDef(expr='void main()', nodes=[\n"
            "        FnCallSt(expr='print(1);', nodes=[\n"
            "            FnCall(expr='print(1)', nodes=[\n"
            "                NumberLit(expr='1')\n"
            "            ])\n"
            "        ])\n"
            "    ])\n"
            "])",
            display)


if __name__ == '__main__':
    unittest.main()
