"""Tests for turning stored exercises into executable rules and handlers."""

import pytest
from pydantic import ValidationError

from labcheck.core.models import TerminalResponse, ValidationKind, ValidationResult
from labcheck.exercises.hydrator import hydrate_exercise, hydrate_terminal_command, hydrate_validation


class TestHydrateValidation:
    def test_dsl_rule_reports_fail_message(self) -> None:
        rule = hydrate_validation(
            {
                "type": "syntax",
                "errorMessage": "Deployment kind",
                "check": {"contains": "kind: Deployment"},
                "failMessage": "Set kind: Deployment",
            }
        )
        assert rule.kind is ValidationKind.SYNTAX
        assert rule.check("kind: Deployment") == ValidationResult(passed=True)
        assert rule.check("kind: Pod") == ValidationResult(passed=False, error_message="Set kind: Deployment")

    def test_fail_message_is_the_same_whichever_leaf_fails(self) -> None:
        rule = hydrate_validation(
            {
                "type": "semantic",
                "errorMessage": "replicas",
                "check": {"yaml_valid": True, "yaml_equals": {"path": "spec.replicas", "value": 3}},
                "failMessage": "Use 3 replicas",
            }
        )
        assert rule.check("key: value: other").error_message == "Use 3 replicas"
        assert rule.check("spec:\n  replicas: 1\n").error_message == "Use 3 replicas"

    def test_pure_custom_rule_passes_script_message_through(self) -> None:
        rule = hydrate_validation(
            {
                "type": "intention",
                "errorMessage": "custom",
                "check": {"custom": "return {passed: false, errorMessage: 'from the script'}"},
                "failMessage": "generic message",
            }
        )
        assert rule.check("") == ValidationResult(passed=False, error_message="from the script")

    def test_pure_custom_rule_without_message_has_none(self) -> None:
        rule = hydrate_validation(
            {"type": "intention", "errorMessage": "custom", "check": {"custom": "return false"}, "failMessage": "x"}
        )
        assert rule.check("") == ValidationResult(passed=False)

    def test_custom_combined_with_dsl_uses_fail_message(self) -> None:
        rule = hydrate_validation(
            {
                "type": "intention",
                "errorMessage": "mixed",
                "check": {"contains": "kind", "custom": "return {passed: false, errorMessage: 'script'}"},
                "failMessage": "rule message",
            }
        )
        assert rule.check("kind: Pod") == ValidationResult(passed=False, error_message="rule message")

    def test_custom_with_inert_yaml_valid_uses_fail_message(self) -> None:
        rule = hydrate_validation(
            {
                "type": "intention",
                "errorMessage": "mixed",
                "check": {"custom": "return {passed: false, errorMessage: 'script msg'}", "yaml_valid": False},
                "failMessage": "FAIL",
            }
        )
        assert rule.check("") == ValidationResult(passed=False, error_message="FAIL")

    def test_missing_fail_message_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            hydrate_validation({"type": "syntax", "errorMessage": "x", "check": {}})

    def test_unknown_kind_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            hydrate_validation({"type": "style", "errorMessage": "x", "check": {}, "failMessage": "y"})


class TestHydrateTerminalCommand:
    def test_first_matching_response_wins(self) -> None:
        handler = hydrate_terminal_command(
            "kubectl apply -f deployment.yaml",
            [
                {"when": {"yaml_has": "spec.replicas"}, "output": "deployment created", "exitCode": 0},
                {"output": "error: missing replicas", "exitCode": 1},
                {"output": "never reached", "exitCode": 2},
            ],
        )
        assert handler("spec:\n  replicas: 2\n") == TerminalResponse(output="deployment created", exit_code=0)
        assert handler("kind: Pod\n") == TerminalResponse(output="error: missing replicas", exit_code=1)

    def test_unconditional_entry_before_conditions_always_wins(self) -> None:
        handler = hydrate_terminal_command(
            "ls",
            [{"output": "first", "exitCode": 0}, {"when": {"contains": "x"}, "output": "second", "exitCode": 0}],
        )
        assert handler("x").output == "first"

    def test_no_applicable_response_is_empty(self) -> None:
        handler = hydrate_terminal_command("ls", [{"when": {"contains": "never"}, "output": "x", "exitCode": 3}])
        assert handler("code") == TerminalResponse(output="", exit_code=0)

    def test_pure_custom_when_uses_the_script_verdict(self) -> None:
        handler = hydrate_terminal_command(
            "terraform plan",
            [
                {"when": {"custom": "return {passed: contains(code, 'provider'), errorMessage: 'x'}"}, "output": "Plan: 1 to add", "exitCode": 0},
                {"output": "Error: no provider", "exitCode": 1},
            ],
        )
        assert handler('provider "aws" {}').exit_code == 0
        assert handler("").exit_code == 1

    def test_failing_verdict_mapping_does_not_select(self) -> None:
        handler = hydrate_terminal_command(
            "terraform plan",
            [
                {"when": {"custom": "return {passed: false}"}, "output": "selected", "exitCode": 0},
                {"output": "fallback", "exitCode": 1},
            ],
        )
        assert handler("anything") == TerminalResponse(output="fallback", exit_code=1)

    def test_script_when_with_other_fields_runs_as_a_check(self) -> None:
        handler = hydrate_terminal_command(
            "terraform plan",
            [
                {"when": {"custom": "return false", "yaml_valid": False}, "output": "selected", "exitCode": 0},
                {"output": "fallback", "exitCode": 1},
            ],
        )
        assert handler("").output == "fallback"

    def test_empty_when_always_holds(self) -> None:
        handler = hydrate_terminal_command("ls", [{"when": {}, "output": "listing", "exitCode": 0}])
        assert handler("").output == "listing"


class TestHydrateExercise:
    def test_fields_and_order(self, make_exercise) -> None:
        exercise = make_exercise(
            validations=[
                {"type": "syntax", "errorMessage": "a", "check": {"contains": "a"}, "failMessage": "need a"},
                {"type": "semantic", "errorMessage": "b", "check": {"contains": "b"}, "failMessage": "need b"},
            ],
            terminalCommands={
                "kubectl get pods": [{"output": "pods", "exitCode": 0}],
                "kubectl apply": [{"output": "applied", "exitCode": 0}],
            },
            initialCode="apiVersion: v1\n",
            prerequisites=["intro-01"],
        )
        assert exercise.id == "test-01"
        assert [rule.error_message for rule in exercise.validations] == ["a", "b"]
        assert exercise.command_patterns == ["kubectl get pods", "kubectl apply"]
        assert exercise.hints == ("Hint 1", "Hint 2", "Hint 3")
        assert exercise.initial_code == "apiVersion: v1\n"
        assert exercise.prerequisites == ("intro-01",)

    def test_success_message_is_required(self) -> None:
        with pytest.raises(ValidationError):
            hydrate_exercise({"id": "x"})

    def test_empty_id_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            hydrate_exercise({"id": "", "successMessage": "ok"})

    def test_translations(self, make_exercise) -> None:
        exercise = make_exercise(
            i18n={"en": {"title": "English title", "hints": ["H1"], "successMessage": "Well done!"}},
        )
        assert exercise.localized_hints("en") == ("H1",)
        assert exercise.localized_hints("es") == ("Hint 1", "Hint 2", "Hint 3")
        assert exercise.localized_success_message("en") == "Well done!"
        assert exercise.localized_success_message(None) == "Great job!"
        assert exercise.metadata("en")["title"] == "English title"
        assert exercise.metadata()["title"] == "Test Exercise"

    def test_metadata_has_no_executable_parts(self, make_exercise) -> None:
        metadata = make_exercise().metadata()
        assert "validations" not in metadata
        assert "terminalCommands" not in metadata


class TestRoundTrip:
    """Text that satisfies every leaf of a hydrated rule always passes."""

    @pytest.mark.parametrize(
        "check",
        [
            {"contains": "kind: Deployment", "not_contains": "latest"},
            {"match": "replicas:\\s*3", "yaml_valid": True, "yaml_has": "spec.template"},
            {"yaml_equals": {"path": "spec.replicas", "value": 3}, "yaml_is_array": "spec.template.spec.containers"},
            {
                "yaml_items_have": {"path": "spec.template.spec.containers", "fields": ["name", "image"]},
                "yaml_not_has": "spec.selector",
            },
            {"all": [{"contains": "web-app"}, {"not": {"contains": "busybox"}}], "any": [{"contains": "nginx"}, {}]},
            {"custom": "return get(parse_yaml(code), 'metadata.name') == 'web-app'", "contains": "apiVersion"},
        ],
    )
    def test_satisfying_text_passes(self, check: dict, deployment_yaml: str) -> None:
        rule = hydrate_validation({"type": "semantic", "errorMessage": "e", "check": check, "failMessage": "f"})
        assert rule.check(deployment_yaml) == ValidationResult(passed=True)
