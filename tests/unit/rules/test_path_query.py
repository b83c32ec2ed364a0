"""Tests for dot-path lookups into parsed YAML documents."""

import yaml

from labcheck.rules.path_query import UNDEFINED, is_defined, query_path, step


class TestQueryPath:
    def test_nested_mapping_keys(self, deployment_yaml: str) -> None:
        document = yaml.safe_load(deployment_yaml)
        assert query_path(document, "metadata.name") == "web-app"
        assert query_path(document, "spec.replicas") == 3

    def test_numeric_segment_indexes_sequences(self, deployment_yaml: str) -> None:
        document = yaml.safe_load(deployment_yaml)
        assert query_path(document, "spec.template.spec.containers.1.image") == "envoy"
        assert query_path(document, "spec.template.spec.containers.0.ports.0.containerPort") == 80

    def test_missing_key_is_undefined(self, deployment_yaml: str) -> None:
        document = yaml.safe_load(deployment_yaml)
        assert query_path(document, "spec.selector") is UNDEFINED
        assert query_path(document, "spec.selector.matchLabels.app") is UNDEFINED

    def test_out_of_range_and_negative_index_are_undefined(self) -> None:
        document = {"items": ["a", "b"]}
        assert query_path(document, "items.2") is UNDEFINED
        assert query_path(document, "items.-1") is UNDEFINED

    def test_non_integer_segment_on_sequence_is_undefined(self) -> None:
        assert query_path({"items": ["a"]}, "items.name") is UNDEFINED

    def test_descending_into_scalar_is_undefined(self) -> None:
        assert query_path({"kind": "Pod"}, "kind.name") is UNDEFINED
        assert query_path(None, "anything") is UNDEFINED

    def test_null_value_is_defined(self) -> None:
        document = yaml.safe_load("metadata:\n  labels:\n")
        value = query_path(document, "metadata.labels")
        assert value is None
        assert is_defined(value)

    def test_non_string_yaml_keys_match_their_text(self) -> None:
        document = yaml.safe_load("ports:\n  80: http\n  true: yes-key\n")
        assert query_path(document, "ports.80") == "http"
        assert query_path(document, "ports.true") == "yes-key"

    def test_leading_digits_are_enough_for_an_index(self) -> None:
        assert step(["first", "second"], "1st") == "second"

    def test_undefined_is_falsy(self) -> None:
        assert not UNDEFINED
        assert repr(UNDEFINED) == "UNDEFINED"
