"""
Check DSL evaluator.

evaluate() answers whether submitted source text satisfies a check tree.
Malformed YAML in the submission is data, handled per leaf; an invalid
regular expression in the check itself is the author's error and raises.
"""

import re
from collections.abc import Callable
from functools import lru_cache
from typing import Any

import structlog
import yaml

from labcheck.core.errors import InvalidPatternError
from labcheck.custom.executor import run_custom
from labcheck.rules import nodes
from labcheck.rules.models import StoredCheck, parse_check
from labcheck.rules.nodes import CheckNode
from labcheck.rules.path_query import UNDEFINED, query_path, step

logger = structlog.get_logger(__name__)


class DocumentParseError(Exception):
    """The submitted text is not a structured document."""

    pass


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def _load_document(source: str) -> Any:
    try:
        return yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise DocumentParseError(str(e)) from e


def strict_equals(actual: Any, expected: Any) -> bool:
    """
    Equality without cross-type coercion.

    Booleans only equal booleans, numbers compare by value, strings and null
    compare directly. Parsed mappings and sequences never equal a literal.
    """
    if actual is UNDEFINED:
        return False
    if isinstance(actual, dict | list) or isinstance(expected, dict | list):
        return False
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    if isinstance(actual, int | float) and isinstance(expected, int | float):
        return actual == expected
    if actual is None or expected is None:
        return actual is None and expected is None
    return type(actual) is type(expected) and actual == expected


class CheckEvaluator:
    """
    Evaluates check trees against source text.

    Handles:
    - Substring and regex leaves on the raw text
    - YAML leaves on the parsed document, with a per-leaf parse-error policy
    - Custom check scripts
    - All/Any/Not combinators, nested arbitrarily
    """

    def __init__(self, custom_runner: Callable[[str, str], Any] = run_custom):
        self.custom_runner = custom_runner
        self._handlers: dict[type, Callable[[Any, str], bool]] = {
            nodes.Contains: self._contains,
            nodes.NotContains: self._not_contains,
            nodes.Matches: self._matches,
            nodes.NotMatches: self._not_matches,
            nodes.YamlValid: self._yaml_valid,
            nodes.YamlHas: self._yaml_has,
            nodes.YamlNotHas: self._yaml_not_has,
            nodes.YamlIsArray: self._yaml_is_array,
            nodes.YamlEquals: self._yaml_equals,
            nodes.YamlItemsHave: self._yaml_items_have,
            nodes.Custom: self._custom,
            nodes.All: self._all,
            nodes.Any: self._any,
            nodes.Not: self._not,
        }

    def evaluate(self, node: CheckNode, source: str) -> bool:
        """
        Evaluate a check node against source text.

        Args:
            node: Check node to evaluate
            source: Submitted code

        Returns:
            True if the code satisfies the check

        Raises:
            InvalidPatternError: If a regex leaf holds an invalid pattern
        """
        handler = self._handlers.get(type(node))
        if handler is None:
            raise TypeError(f"Unknown check node: {node!r}")
        result = handler(node, source)
        logger.debug("Check evaluated", node=type(node).__name__, result=result)
        return result

    # --- Text leaves ---

    def _contains(self, node: nodes.Contains, source: str) -> bool:
        return node.text in source

    def _not_contains(self, node: nodes.NotContains, source: str) -> bool:
        return node.text not in source

    def _matches(self, node: nodes.Matches, source: str) -> bool:
        return _compile(node.pattern).search(source) is not None

    def _not_matches(self, node: nodes.NotMatches, source: str) -> bool:
        return _compile(node.pattern).search(source) is None

    # --- YAML leaves ---

    def _yaml_valid(self, node: nodes.YamlValid, source: str) -> bool:
        try:
            _load_document(source)
        except DocumentParseError:
            return False
        return True

    def _yaml_has(self, node: nodes.YamlHas, source: str) -> bool:
        try:
            document = _load_document(source)
        except DocumentParseError:
            return False
        return query_path(document, node.path) is not UNDEFINED

    def _yaml_not_has(self, node: nodes.YamlNotHas, source: str) -> bool:
        try:
            document = _load_document(source)
        except DocumentParseError:
            # an unparsable document has no fields at all
            return True
        return query_path(document, node.path) is UNDEFINED

    def _yaml_is_array(self, node: nodes.YamlIsArray, source: str) -> bool:
        try:
            document = _load_document(source)
        except DocumentParseError:
            return False
        return isinstance(query_path(document, node.path), list)

    def _yaml_equals(self, node: nodes.YamlEquals, source: str) -> bool:
        try:
            document = _load_document(source)
        except DocumentParseError:
            return False
        return strict_equals(query_path(document, node.path), node.value)

    def _yaml_items_have(self, node: nodes.YamlItemsHave, source: str) -> bool:
        try:
            document = _load_document(source)
        except DocumentParseError:
            return False
        items = query_path(document, node.path)
        if not isinstance(items, list):
            return False
        return all(step(item, field) is not UNDEFINED for item in items for field in node.fields)

    # --- Custom ---

    def _custom(self, node: nodes.Custom, source: str) -> bool:
        return self.custom_runner(node.snippet, source).passed

    # --- Combinators ---

    def _all(self, node: nodes.All, source: str) -> bool:
        return all(self.evaluate(child, source) for child in node.children)

    def _any(self, node: nodes.Any, source: str) -> bool:
        return any(self.evaluate(child, source) for child in node.children)

    def _not(self, node: nodes.Not, source: str) -> bool:
        return not self.evaluate(node.child, source)


_default_evaluator = CheckEvaluator()


def evaluate(check: "CheckNode | StoredCheck | dict[str, Any]", source: str) -> bool:
    """Evaluate a check in any accepted form with the default evaluator."""
    return _default_evaluator.evaluate(parse_check(check), source)
