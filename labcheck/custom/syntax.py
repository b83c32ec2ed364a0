"""
Abstract syntax tree for check scripts.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class Name:
    id: str


@dataclass(frozen=True)
class ListDisplay:
    items: tuple["Expr", ...]


@dataclass(frozen=True)
class DictDisplay:
    pairs: tuple[tuple["Expr", "Expr"], ...]


@dataclass(frozen=True)
class Comprehension:
    element: "Expr"
    variable: str
    iterable: "Expr"
    condition: "Expr | None" = None


@dataclass(frozen=True)
class Unary:
    op: str  # "-" or "not"
    operand: "Expr"


@dataclass(frozen=True)
class Binary:
    op: str  # + - * / %
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class Logical:
    op: str  # "and" or "or"
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class Compare:
    op: str  # == != < <= > >= in "not in"
    left: "Expr"
    right: "Expr"


@dataclass(frozen=True)
class Conditional:
    body: "Expr"
    test: "Expr"
    orelse: "Expr"


@dataclass(frozen=True)
class Index:
    target: "Expr"
    index: "Expr"


@dataclass(frozen=True)
class Attribute:
    target: "Expr"
    name: str


@dataclass(frozen=True)
class Call:
    function: str
    args: tuple["Expr", ...]


@dataclass(frozen=True)
class MethodCall:
    target: "Expr"
    method: str
    args: tuple["Expr", ...]


Expr = (
    Literal
    | Name
    | ListDisplay
    | DictDisplay
    | Comprehension
    | Unary
    | Binary
    | Logical
    | Compare
    | Conditional
    | Index
    | Attribute
    | Call
    | MethodCall
)


@dataclass(frozen=True)
class Let:
    name: str
    value: Expr


@dataclass(frozen=True)
class Return:
    value: Expr


@dataclass(frozen=True)
class ExprStatement:
    value: Expr


Statement = Let | Return | ExprStatement


@dataclass(frozen=True)
class Program:
    statements: tuple[Statement, ...]
