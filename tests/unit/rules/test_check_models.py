"""Tests for normalizing authored checks into node variants."""

import pytest
from pydantic import ValidationError

from labcheck.rules import nodes
from labcheck.rules.models import StoredCheck, is_pure_custom, parse_check


class TestStoredCheckNormalization:
    def test_empty_check_is_empty_all(self) -> None:
        assert parse_check({}) == nodes.All(())

    def test_single_field_becomes_its_variant(self) -> None:
        assert parse_check({"contains": "kind: Pod"}) == nodes.Contains("kind: Pod")
        assert parse_check({"match": "^apiVersion"}) == nodes.Matches("^apiVersion")
        assert parse_check({"yaml_has": "spec"}) == nodes.YamlHas("spec")
        assert parse_check({"custom": "return true"}) == nodes.Custom("return true")

    def test_parameterized_leaves(self) -> None:
        assert parse_check({"yaml_equals": {"path": "spec.replicas", "value": 3}}) == nodes.YamlEquals(
            "spec.replicas", 3
        )
        assert parse_check({"yaml_items_have": {"path": "containers", "fields": ["name", "image"]}}) == (
            nodes.YamlItemsHave("containers", ("name", "image"))
        )

    def test_several_fields_become_all_in_fixed_order(self) -> None:
        node = parse_check(
            {
                "not": {"contains": "latest"},
                "yaml_has": "spec",
                "custom": "return true",
                "contains": "kind",
                "yaml_valid": True,
            }
        )
        assert node == nodes.All(
            (
                nodes.Contains("kind"),
                nodes.YamlValid(),
                nodes.YamlHas("spec"),
                nodes.Custom("return true"),
                nodes.Not(nodes.Contains("latest")),
            )
        )

    def test_yaml_valid_false_adds_no_condition(self) -> None:
        assert parse_check({"yaml_valid": False}) == nodes.All(())
        assert parse_check({"yaml_valid": False, "contains": "x"}) == nodes.Contains("x")

    def test_combinators_nest(self) -> None:
        node = parse_check({"any": [{"contains": "a"}, {"all": [{"contains": "b"}, {}]}]})
        assert node == nodes.Any((nodes.Contains("a"), nodes.All((nodes.Contains("b"), nodes.All(())))))

    def test_empty_combinator_lists_are_kept(self) -> None:
        assert parse_check({"all": []}) == nodes.All(())
        assert parse_check({"any": []}) == nodes.Any(())

    def test_python_field_names_are_accepted(self) -> None:
        check = StoredCheck(not_={"contains": "x"})
        assert check.to_node() == nodes.Not(nodes.Contains("x"))

    def test_populated_fields(self) -> None:
        check = StoredCheck.model_validate({"custom": "return true", "contains": "a", "yaml_valid": False})
        assert check.populated_fields() == ["contains", "custom"]

    def test_nodes_pass_through(self) -> None:
        node = nodes.Not(nodes.YamlValid())
        assert parse_check(node) is node

    def test_malformed_parameters_are_rejected(self) -> None:
        with pytest.raises(ValidationError):
            parse_check({"yaml_equals": {"value": 3}})
        with pytest.raises(ValidationError):
            parse_check({"yaml_items_have": {"path": "containers", "fields": "name"}})


class TestPureCustom:
    def test_bare_custom_is_pure(self) -> None:
        assert is_pure_custom({"custom": "return true"})
        assert is_pure_custom(StoredCheck(custom="return true"))
        assert is_pure_custom(nodes.Custom("return true"))

    def test_custom_with_other_fields_is_not_pure(self) -> None:
        assert not is_pure_custom({"custom": "return true", "contains": "x"})
        assert not is_pure_custom({"all": [{"custom": "return true"}]})

    def test_fields_that_add_no_condition_still_count(self) -> None:
        check = StoredCheck.model_validate({"custom": "return true", "yaml_valid": False})
        assert check.to_node() == nodes.Custom("return true")
        assert not is_pure_custom(check)

    def test_empty_check_is_not_pure(self) -> None:
        assert not is_pure_custom({})
