"""Abstract syntax tree for the adso language. Nodes are produced once by the parser and never mutated afterwards.

Formally, the language can be defined as

```
<program>   ::= <fn_def>+
<fn_def>    ::= <ident> <ident> "(" (<ident> <ident>)? ")" "{" <stmt>* "}"
<stmt>      ::= <if_st> | <return_st> | <fn_call> ";"
<if_st>     ::= "if" "(" <expr> ")" "{" <stmt>* "}"
<return_st> ::= "return" <expr> ";"
<fn_call>   ::= <ident> "(" <expr>? ")"
<expr>      ::= (<number> | <ident>) [ <fn_call_tail> | <bin_op_tail> ]   ; left operand is always atomic
<bin_op_tail> ::= ("*" | "-" | "<") <expr>                                ; so "a - b - c" is "a - (b - c)"
```

str() of any node renders it back to source; display() renders the tree for inspection.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Union

INDENT = "    "

OPERATORS = ["*", "-", "<"]


class Grammar(ABC):
    """Superclass that represents any node of an adso syntax tree."""

    @property
    @abstractmethod
    def nodes(self):
        """Child nodes, in source order."""

    @property
    def header(self):
        """One-line summary used by display."""
        return str(self)

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Grammar>(expr='<header>', nodes=[
            <Grammar>(expr='<header>', nodes=[
                ...
                <Grammar>(expr='<header>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{INDENT * indents}{type(self).__name__}(expr='{self.header}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{INDENT * indents}]"
        return result + ")"


def _position():
    return field(default=0, compare=False, repr=False)


# --- expressions ---

@dataclass(frozen=True)
class NumberLit(Grammar):
    value: int
    line: int = _position()
    column: int = _position()

    @property
    def nodes(self):
        return []

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Ident(Grammar):
    name: str
    line: int = _position()
    column: int = _position()

    @property
    def nodes(self):
        return []

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class FnCall(Grammar):
    name: str
    arg: Optional["Expr"]
    line: int = _position()
    column: int = _position()

    @property
    def nodes(self):
        return [self.arg] if self.arg is not None else []

    def __str__(self):
        return f"{self.name}({self.arg if self.arg is not None else ''})"


@dataclass(frozen=True)
class BinExpr(Grammar):
    left: Union[NumberLit, Ident]
    op: str
    right: "Expr"
    line: int = _position()
    column: int = _position()

    @property
    def nodes(self):
        return [self.left, self.right]

    def __str__(self):
        return f"{self.left} {self.op} {self.right}"


Expr = Union[NumberLit, Ident, FnCall, BinExpr]


# --- statements ---

def _render_body(body, indents):
    return "".join(stmt.render(indents + 1) + "\n" for stmt in body)


@dataclass(frozen=True)
class IfSt(Grammar):
    condition: Expr
    body: List["Statement"]
    line: int = _position()
    column: int = _position()

    @property
    def nodes(self):
        return [self.condition] + list(self.body)

    @property
    def header(self):
        return f"if ({self.condition})"

    def render(self, indents=0):
        return f"{INDENT * indents}if ({self.condition}) {{\n{_render_body(self.body, indents)}{INDENT * indents}}}"

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class ReturnSt(Grammar):
    value: Expr
    line: int = _position()
    column: int = _position()

    @property
    def nodes(self):
        return [self.value]

    def render(self, indents=0):
        return f"{INDENT * indents}return {self.value};"

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class FnCallSt(Grammar):
    call: FnCall
    line: int = _position()
    column: int = _position()

    @property
    def nodes(self):
        return [self.call]

    def render(self, indents=0):
        return f"{INDENT * indents}{self.call};"

    def __str__(self):
        return self.render()


Statement = Union[IfSt, ReturnSt, FnCallSt]


# --- top level ---

@dataclass(frozen=True)
class FnDef(Grammar):
    """Function definition. param_type and param_name are both present or both None."""
    return_type: str
    name: str
    param_type: Optional[str]
    param_name: Optional[str]
    body: List[Statement]
    line: int = _position()
    column: int = _position()

    def __post_init__(self):
        assert (self.param_type is None) == (self.param_name is None), "parameter needs both a type and a name"

    @property
    def nodes(self):
        return list(self.body)

    @property
    def header(self):
        param = f"{self.param_type} {self.param_name}" if self.param_name is not None else ""
        return f"{self.return_type} {self.name}({param})"

    def __str__(self):
        return f"{self.header} {{\n{_render_body(self.body, 0)}}}"


@dataclass(frozen=True)
class Program(Grammar):
    body: List[FnDef]

    @property
    def nodes(self):
        return list(self.body)

    @property
    def header(self):
        return f"{len(self.body)} function(s)"

    def __str__(self):
        return "\n\n".join(str(fn_def) for fn_def in self.body) + "\n"
