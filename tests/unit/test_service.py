"""Tests for the id-based service entry points."""

from pathlib import Path

import pytest

from labcheck import ExerciseService, create_service, hydrate_exercise
from labcheck.core.config import Config

EXERCISE = {
    "id": "k8s-01-invalid-pod",
    "module": "kubernetes",
    "hints": ["Revisa apiVersion", "Revisa kind"],
    "successMessage": "Pod corregido.",
    "validations": [
        {
            "type": "syntax",
            "errorMessage": "apiVersion",
            "check": {"contains": "apiVersion: v1"},
            "failMessage": "Falta apiVersion: v1",
        }
    ],
    "terminalCommands": {"kubectl get pods": [{"output": "No resources found", "exitCode": 0}]},
}


@pytest.fixture
def service() -> ExerciseService:
    exercise = hydrate_exercise(EXERCISE)
    return ExerciseService({exercise.id: exercise}.get)


class TestValidate:
    def test_known_exercise(self, service) -> None:
        verdict = service.validate("k8s-01-invalid-pod", "kind: Pod", failure_count=2)
        assert verdict.passed is False
        assert verdict.summary == "Falta apiVersion: v1"
        assert verdict.next_hint == "Revisa kind"

    def test_unknown_exercise(self, service) -> None:
        verdict = service.validate("missing", "")
        assert verdict.to_response() == {
            "passed": False,
            "results": [],
            "summary": "Ejercicio no encontrado.",
            "hintsUsed": 0,
        }

    def test_unknown_exercise_in_english(self, service) -> None:
        assert service.validate("missing", "", lang="en").summary == "Exercise not found."

    def test_unsupported_language_falls_back_to_default(self) -> None:
        service = ExerciseService(lambda exercise_id: None, default_lang="en")
        assert service.validate("missing", "", lang="fr").summary == "Exercise not found."


class TestExecuteCommand:
    def test_known_exercise(self, service) -> None:
        response = service.execute_command("k8s-01-invalid-pod", "kubectl get pods", "")
        assert response.to_response() == {"output": "No resources found", "exitCode": 0}

    def test_unknown_exercise(self, service) -> None:
        response = service.execute_command("missing", "ls", "", lang="en")
        assert response.to_response() == {"output": 'Error: exercise "missing" not found', "exitCode": 1}


class TestCreateService:
    def test_reads_exercises_from_configured_path(self, tmp_path: Path, monkeypatch) -> None:
        (tmp_path / "pod.yaml").write_text(
            "id: pod-01\nsuccessMessage: Listo\nterminalCommands:\n  kubectl version:\n    - output: v1.30\n      exitCode: 0\n",
            encoding="utf-8",
        )
        monkeypatch.setenv("EXERCISES_PATH", str(tmp_path))
        monkeypatch.setenv("DEFAULT_LANGUAGE", "en")

        service = create_service(Config())

        assert service.validate("pod-01", "").summary == "Listo"
        assert service.execute_command("pod-01", "kubectl version", "").output == "v1.30"
        assert service.execute_command("pod-02", "ls", "").output == 'Error: exercise "pod-02" not found'
