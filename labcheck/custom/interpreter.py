"""
Tree-walking interpreter for check scripts.

Scripts see only the bindings handed to them plus a closed table of
builtin functions and per-type methods. There are no loops, imports or
attribute reflection; the only iteration is a comprehension over data the
script already holds.
"""

import json
import re
from collections.abc import Callable
from typing import Any

import yaml

from labcheck.core.errors import CheckScriptRuntimeError
from labcheck.custom import syntax as ast
from labcheck.rules.path_query import UNDEFINED, query_path

_NUMBER = (int, float)


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, _NUMBER):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "mapping"
    return type(value).__name__


def truthy(value: Any) -> bool:
    return bool(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, _NUMBER) and not isinstance(value, bool)


def to_text(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, list | dict):
        return json.dumps(value, default=str)
    return str(value)


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise CheckScriptRuntimeError(message)


# --- Builtins ---


def _parse_yaml(text: Any) -> Any:
    _require(isinstance(text, str), f"parse_yaml() expects a string, got {_type_name(text)}")
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise CheckScriptRuntimeError(f"invalid YAML: {e}") from e


def _get(document: Any, path: Any, default: Any = None) -> Any:
    _require(isinstance(path, str), f"get() expects a string path, got {_type_name(path)}")
    value = query_path(document, path)
    return default if value is UNDEFINED else value


def _has(document: Any, path: Any) -> bool:
    _require(isinstance(path, str), f"has() expects a string path, got {_type_name(path)}")
    return query_path(document, path) is not UNDEFINED


def _len(value: Any) -> int:
    _require(isinstance(value, str | list | dict), f"len() of {_type_name(value)}")
    return len(value)


def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise CheckScriptRuntimeError(f"cannot convert {to_text(value)!r} to int") from e


def _float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise CheckScriptRuntimeError(f"cannot convert {to_text(value)!r} to float") from e


def _list(value: Any = None) -> list:
    if value is None:
        return []
    _require(isinstance(value, str | list | dict), f"list() of {_type_name(value)}")
    return list(value)


def _dict(pairs: Any = None) -> dict:
    if pairs is None:
        return {}
    if isinstance(pairs, dict):
        return dict(pairs)
    _require(
        isinstance(pairs, list) and all(isinstance(p, list) and len(p) == 2 for p in pairs),
        "dict() expects a mapping or a list of [key, value] pairs",
    )
    return {key: value for key, value in pairs}


def _string_arg(name: str, value: Any) -> str:
    _require(isinstance(value, str), f"{name}() expects a string, got {_type_name(value)}")
    return value


def _regex(pattern: Any) -> re.Pattern[str]:
    _require(isinstance(pattern, str), f"pattern must be a string, got {_type_name(pattern)}")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise CheckScriptRuntimeError(f"invalid regular expression {pattern!r}: {e}") from e


def _matches(text: Any, pattern: Any) -> bool:
    return _regex(pattern).search(_string_arg("matches", text)) is not None


def _findall(text: Any, pattern: Any) -> list:
    return _regex(pattern).findall(_string_arg("findall", text))


def _contains(haystack: Any, needle: Any) -> bool:
    return _membership(needle, haystack)


def _keys(value: Any) -> list:
    _require(isinstance(value, dict), f"keys() of {_type_name(value)}")
    return list(value.keys())


def _values(value: Any) -> list:
    _require(isinstance(value, dict), f"values() of {_type_name(value)}")
    return list(value.values())


def _sequence(name: str, args: tuple) -> list:
    items = args[0] if len(args) == 1 else list(args)
    _require(isinstance(items, list), f"{name}() expects a list, got {_type_name(items)}")
    return items


def _sum(items: Any) -> Any:
    items = _sequence("sum", (items,))
    _require(all(_is_number(item) for item in items), "sum() expects a list of numbers")
    return sum(items)


def _min(*args: Any) -> Any:
    items = _sequence("min", args)
    _require(bool(items), "min() of an empty list")
    return min(items, key=_ordering_key)


def _max(*args: Any) -> Any:
    items = _sequence("max", args)
    _require(bool(items), "max() of an empty list")
    return max(items, key=_ordering_key)


def _sorted(items: Any) -> list:
    return sorted(_sequence("sorted", (items,)), key=_ordering_key)


def _ordering_key(value: Any) -> Any:
    _require(_is_number(value) or isinstance(value, str), f"cannot order {_type_name(value)} values")
    return (0, value, "") if _is_number(value) else (1, 0, value)


def _abs(value: Any) -> Any:
    _require(_is_number(value), f"abs() of {_type_name(value)}")
    return abs(value)


def _round(value: Any, digits: Any = 0) -> Any:
    _require(_is_number(value) and isinstance(digits, int), "round() expects numbers")
    return round(value, digits) if digits else round(value)


def _result(passed: Any, message: Any = None) -> dict:
    verdict: dict[str, Any] = {"passed": truthy(passed)}
    if message is not None:
        verdict["errorMessage"] = to_text(message)
    return verdict


BUILTINS: dict[str, Callable[..., Any]] = {
    "parse_yaml": _parse_yaml,
    "yaml_load": _parse_yaml,
    "get": _get,
    "has": _has,
    "len": _len,
    "str": to_text,
    "int": _int,
    "float": _float,
    "bool": truthy,
    "list": _list,
    "dict": _dict,
    "lower": lambda s: _string_arg("lower", s).lower(),
    "upper": lambda s: _string_arg("upper", s).upper(),
    "strip": lambda s: _string_arg("strip", s).strip(),
    "split": lambda s, sep=None: _string_arg("split", s).split(sep),
    "contains": _contains,
    "matches": _matches,
    "findall": _findall,
    "keys": _keys,
    "values": _values,
    "all": lambda items: all(truthy(item) for item in _sequence("all", (items,))),
    "any": lambda items: any(truthy(item) for item in _sequence("any", (items,))),
    "sum": _sum,
    "min": _min,
    "max": _max,
    "abs": _abs,
    "round": _round,
    "sorted": _sorted,
    "result": _result,
}

# Methods callable as value.method(...), per value type
STRING_METHODS: dict[str, Callable[..., Any]] = {
    "lower": str.lower,
    "upper": str.upper,
    "strip": lambda s, chars=None: s.strip(chars),
    "lstrip": lambda s, chars=None: s.lstrip(chars),
    "rstrip": lambda s, chars=None: s.rstrip(chars),
    "split": lambda s, sep=None: s.split(sep),
    "splitlines": str.splitlines,
    "startswith": lambda s, prefix: s.startswith(_string_arg("startswith", prefix)),
    "endswith": lambda s, suffix: s.endswith(_string_arg("endswith", suffix)),
    "replace": lambda s, old, new: s.replace(_string_arg("replace", old), _string_arg("replace", new)),
    "count": lambda s, sub: s.count(_string_arg("count", sub)),
    "find": lambda s, sub: s.find(_string_arg("find", sub)),
    "join": lambda s, items: s.join(to_text(item) for item in _sequence("join", (items,))),
}
LIST_METHODS: dict[str, Callable[..., Any]] = {
    "count": lambda items, value: items.count(value),
    "index": lambda items, value: items.index(value) if value in items else -1,
}
MAPPING_METHODS: dict[str, Callable[..., Any]] = {
    "get": lambda mapping, key, default=None: mapping.get(key, default),
    "keys": lambda mapping: list(mapping.keys()),
    "values": lambda mapping: list(mapping.values()),
    "items": lambda mapping: [[key, value] for key, value in mapping.items()],
}


def _membership(needle: Any, container: Any) -> bool:
    if isinstance(container, str):
        _require(isinstance(needle, str), f"'in <string>' requires a string, got {_type_name(needle)}")
        return needle in container
    if isinstance(container, list):
        return needle in container
    if isinstance(container, dict):
        return needle in container
    raise CheckScriptRuntimeError(f"'in' is not supported for {_type_name(container)}")


class Interpreter:
    """
    Runs a parsed check script.

    Args:
        bindings: Variables visible to the script (e.g. {"code": source})
    """

    def __init__(self, bindings: dict[str, Any]):
        self.globals = dict(bindings)

    def run(self, program: ast.Program) -> Any:
        scope = dict(self.globals)
        last: Any = None
        for statement in program.statements:
            if isinstance(statement, ast.Let):
                scope[statement.name] = self.eval(statement.value, scope)
            elif isinstance(statement, ast.Return):
                return self.eval(statement.value, scope)
            else:
                last = self.eval(statement.value, scope)
        return last

    def eval(self, node: ast.Expr, scope: dict[str, Any]) -> Any:
        if isinstance(node, ast.Literal):
            return node.value
        if isinstance(node, ast.Name):
            if node.id not in scope:
                raise CheckScriptRuntimeError(f"name '{node.id}' is not defined")
            return scope[node.id]
        if isinstance(node, ast.ListDisplay):
            return [self.eval(item, scope) for item in node.items]
        if isinstance(node, ast.DictDisplay):
            return {self._key(self.eval(k, scope)): self.eval(v, scope) for k, v in node.pairs}
        if isinstance(node, ast.Comprehension):
            return self._comprehension(node, scope)
        if isinstance(node, ast.Unary):
            operand = self.eval(node.operand, scope)
            if node.op == "not":
                return not truthy(operand)
            _require(_is_number(operand), f"bad operand type for unary -: {_type_name(operand)}")
            return -operand
        if isinstance(node, ast.Logical):
            left = self.eval(node.left, scope)
            if node.op == "and":
                return self.eval(node.right, scope) if truthy(left) else left
            return left if truthy(left) else self.eval(node.right, scope)
        if isinstance(node, ast.Binary):
            return self._arithmetic(node.op, self.eval(node.left, scope), self.eval(node.right, scope))
        if isinstance(node, ast.Compare):
            return self._compare(node.op, self.eval(node.left, scope), self.eval(node.right, scope))
        if isinstance(node, ast.Conditional):
            if truthy(self.eval(node.test, scope)):
                return self.eval(node.body, scope)
            return self.eval(node.orelse, scope)
        if isinstance(node, ast.Index):
            return self._index(self.eval(node.target, scope), self.eval(node.index, scope))
        if isinstance(node, ast.Attribute):
            return self._attribute(self.eval(node.target, scope), node.name)
        if isinstance(node, ast.Call):
            return self._call(node, scope)
        if isinstance(node, ast.MethodCall):
            return self._method_call(node, scope)
        raise CheckScriptRuntimeError(f"Unsupported expression: {type(node).__name__}")

    @staticmethod
    def _key(value: Any) -> Any:
        _require(
            value is None or isinstance(value, str | int | float | bool),
            f"mapping keys must be scalars, got {_type_name(value)}",
        )
        return value

    def _comprehension(self, node: ast.Comprehension, scope: dict[str, Any]) -> list:
        iterable = self.eval(node.iterable, scope)
        _require(isinstance(iterable, str | list | dict), f"cannot iterate over {_type_name(iterable)}")
        results = []
        inner = dict(scope)
        for item in iterable:
            inner[node.variable] = item
            if node.condition is not None and not truthy(self.eval(node.condition, inner)):
                continue
            results.append(self.eval(node.element, inner))
        return results

    @staticmethod
    def _arithmetic(op: str, left: Any, right: Any) -> Any:
        if op == "+":
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            if isinstance(left, list) and isinstance(right, list):
                return left + right
        if _is_number(left) and _is_number(right):
            if op == "+":
                return left + right
            if op == "-":
                return left - right
            if op == "*":
                return left * right
            _require(right != 0, "division by zero")
            return left / right if op == "/" else left % right
        raise CheckScriptRuntimeError(
            f"unsupported operand types for {op}: {_type_name(left)} and {_type_name(right)}"
        )

    @staticmethod
    def _compare(op: str, left: Any, right: Any) -> bool:
        if op == "==":
            return left == right and isinstance(left, bool) == isinstance(right, bool)
        if op == "!=":
            return not (left == right and isinstance(left, bool) == isinstance(right, bool))
        if op == "in":
            return _membership(left, right)
        if op == "not in":
            return not _membership(left, right)
        comparable = (_is_number(left) and _is_number(right)) or (isinstance(left, str) and isinstance(right, str))
        _require(comparable, f"cannot compare {_type_name(left)} and {_type_name(right)} with {op}")
        if op == "<":
            return left < right
        if op == "<=":
            return left <= right
        if op == ">":
            return left > right
        return left >= right

    @staticmethod
    def _index(target: Any, index: Any) -> Any:
        if isinstance(target, list | str):
            _require(_is_number(index) and isinstance(index, int), f"indices must be integers, got {_type_name(index)}")
            if -len(target) <= index < len(target):
                return target[index]
            return None
        if isinstance(target, dict):
            return target.get(index)
        if target is None:
            return None
        raise CheckScriptRuntimeError(f"{_type_name(target)} is not indexable")

    @staticmethod
    def _attribute(target: Any, name: str) -> Any:
        if isinstance(target, dict):
            return target.get(name)
        if target is None:
            return None
        raise CheckScriptRuntimeError(f"cannot read field '{name}' of {_type_name(target)}")

    def _call(self, node: ast.Call, scope: dict[str, Any]) -> Any:
        function = BUILTINS.get(node.function)
        if function is None:
            raise CheckScriptRuntimeError(f"'{node.function}' is not a builtin function")
        args = [self.eval(arg, scope) for arg in node.args]
        try:
            return function(*args)
        except TypeError as e:
            raise CheckScriptRuntimeError(f"{node.function}(): {e}") from e

    def _method_call(self, node: ast.MethodCall, scope: dict[str, Any]) -> Any:
        target = self.eval(node.target, scope)
        if isinstance(target, str):
            table = STRING_METHODS
        elif isinstance(target, list):
            table = LIST_METHODS
        elif isinstance(target, dict):
            table = MAPPING_METHODS
        else:
            table = {}
        method = table.get(node.method)
        if method is None:
            raise CheckScriptRuntimeError(f"{_type_name(target)} has no method '{node.method}'")
        args = [self.eval(arg, scope) for arg in node.args]
        try:
            return method(target, *args)
        except TypeError as e:
            raise CheckScriptRuntimeError(f".{node.method}(): {e}") from e
