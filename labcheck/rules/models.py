"""
Stored (declarative) shape of the Check DSL.

Exercise files and database rows keep checks as JSON/YAML objects whose keys
are the leaf and combinator names. That shape is kept for compatibility and
normalized into node variants once, at hydration.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from labcheck.rules import nodes
from labcheck.rules.nodes import CheckNode


class YamlEqualsSpec(BaseModel):
    """Parameters of a yaml_equals check."""

    path: str
    value: Any = None


class YamlItemsHaveSpec(BaseModel):
    """Parameters of a yaml_items_have check."""

    path: str
    fields: list[str]


class StoredCheck(BaseModel):
    """A check as authored: every populated field is one AND-ed condition."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    contains: str | None = None
    not_contains: str | None = None
    match: str | None = None
    not_match: str | None = None
    yaml_valid: bool | None = None
    yaml_has: str | None = None
    yaml_not_has: str | None = None
    yaml_is_array: str | None = None
    yaml_equals: YamlEqualsSpec | None = None
    yaml_items_have: YamlItemsHaveSpec | None = None
    custom: str | None = None
    all_: list["StoredCheck"] | None = Field(default=None, alias="all")
    any_: list["StoredCheck"] | None = Field(default=None, alias="any")
    not_: "StoredCheck | None" = Field(default=None, alias="not")

    def populated_fields(self) -> list[str]:
        """Names of the conditions this check actually sets, in evaluation order."""
        names = []
        for name in _FIELD_ORDER:
            value = getattr(self, name)
            if name == "yaml_valid":
                # only an explicit `true` asks for a parse check
                if value is True:
                    names.append(name)
            elif value is not None:
                names.append(name)
        return names

    def to_node(self) -> CheckNode:
        """
        Normalize into a node variant.

        No populated field gives an empty All (vacuously true), a single field
        gives that variant, several give an All of them in evaluation order.
        """
        parts = [self._field_node(name) for name in self.populated_fields()]
        if len(parts) == 1:
            return parts[0]
        return nodes.All(tuple(parts))

    def _field_node(self, name: str) -> CheckNode:
        if name == "contains":
            return nodes.Contains(self.contains)
        if name == "not_contains":
            return nodes.NotContains(self.not_contains)
        if name == "match":
            return nodes.Matches(self.match)
        if name == "not_match":
            return nodes.NotMatches(self.not_match)
        if name == "yaml_valid":
            return nodes.YamlValid()
        if name == "yaml_has":
            return nodes.YamlHas(self.yaml_has)
        if name == "yaml_not_has":
            return nodes.YamlNotHas(self.yaml_not_has)
        if name == "yaml_is_array":
            return nodes.YamlIsArray(self.yaml_is_array)
        if name == "yaml_equals":
            return nodes.YamlEquals(self.yaml_equals.path, self.yaml_equals.value)
        if name == "yaml_items_have":
            return nodes.YamlItemsHave(self.yaml_items_have.path, tuple(self.yaml_items_have.fields))
        if name == "custom":
            return nodes.Custom(self.custom)
        if name == "all_":
            return nodes.All(tuple(child.to_node() for child in self.all_))
        if name == "any_":
            return nodes.Any(tuple(child.to_node() for child in self.any_))
        if name == "not_":
            return nodes.Not(self.not_.to_node())
        raise ValueError(f"Unknown check field: {name}")


_FIELD_ORDER = (
    "contains",
    "not_contains",
    "match",
    "not_match",
    "yaml_valid",
    "yaml_has",
    "yaml_not_has",
    "yaml_is_array",
    "yaml_equals",
    "yaml_items_have",
    "custom",
    "all_",
    "any_",
    "not_",
)

StoredCheck.model_rebuild()


def parse_check(check: "CheckNode | StoredCheck | Mapping[str, Any]") -> CheckNode:
    """
    Accept a check in any of its forms and return the node variant.

    Args:
        check: A node, a StoredCheck, or the raw authored mapping

    Returns:
        The normalized CheckNode

    Raises:
        pydantic.ValidationError: If the mapping is malformed
    """
    if isinstance(check, StoredCheck):
        return check.to_node()
    if isinstance(check, Mapping):
        return StoredCheck.model_validate(dict(check)).to_node()
    return check


def is_pure_custom(check: "CheckNode | StoredCheck | Mapping[str, Any]") -> bool:
    """
    True when a check was authored as nothing but one custom snippet.

    Only the keys actually written count, so `{custom, yaml_valid: false}` is
    not pure even though it normalizes to the same single Custom node.
    """
    if isinstance(check, Mapping):
        check = StoredCheck.model_validate(dict(check))
    if isinstance(check, StoredCheck):
        return check.custom is not None and check.model_fields_set == {"custom"}
    return isinstance(check, nodes.Custom)
