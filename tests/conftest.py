"""
Pytest configuration: project root on sys.path and shared exercise fixtures.
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from labcheck.exercises.hydrator import hydrate_exercise  # noqa: E402

DEPLOYMENT_YAML = """\
apiVersion: apps/v1
kind: Deployment
metadata:
  name: web-app
spec:
  replicas: 3
  template:
    spec:
      containers:
        - name: app
          image: nginx
          ports:
            - containerPort: 80
        - name: sidecar
          image: envoy
"""


@pytest.fixture
def deployment_yaml() -> str:
    return DEPLOYMENT_YAML


@pytest.fixture
def make_exercise():
    """Build a hydrated exercise from authored fields, filling in the required ones."""

    def _make(**overrides):
        definition = {
            "id": "test-01",
            "module": "test",
            "title": "Test Exercise",
            "hints": ["Hint 1", "Hint 2", "Hint 3"],
            "successMessage": "Great job!",
            "validations": [],
            "terminalCommands": {},
        }
        definition.update(overrides)
        return hydrate_exercise(definition)

    return _make
