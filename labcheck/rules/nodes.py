"""
Check DSL node variants.

Each leaf predicate and combinator is its own immutable type, so the
evaluator dispatches on type instead of probing optional fields.
"""

from dataclasses import dataclass
from typing import Any as AnyValue


@dataclass(frozen=True)
class Contains:
    text: str


@dataclass(frozen=True)
class NotContains:
    text: str


@dataclass(frozen=True)
class Matches:
    pattern: str


@dataclass(frozen=True)
class NotMatches:
    pattern: str


@dataclass(frozen=True)
class YamlValid:
    pass


@dataclass(frozen=True)
class YamlHas:
    path: str


@dataclass(frozen=True)
class YamlNotHas:
    path: str


@dataclass(frozen=True)
class YamlIsArray:
    path: str


@dataclass(frozen=True)
class YamlEquals:
    path: str
    value: AnyValue


@dataclass(frozen=True)
class YamlItemsHave:
    path: str
    fields: tuple[str, ...]


@dataclass(frozen=True)
class Custom:
    snippet: str


@dataclass(frozen=True)
class All:
    children: tuple["CheckNode", ...] = ()


@dataclass(frozen=True)
class Any:
    children: tuple["CheckNode", ...] = ()


@dataclass(frozen=True)
class Not:
    child: "CheckNode"


CheckNode = (
    Contains
    | NotContains
    | Matches
    | NotMatches
    | YamlValid
    | YamlHas
    | YamlNotHas
    | YamlIsArray
    | YamlEquals
    | YamlItemsHave
    | Custom
    | All
    | Any
    | Not
)
