"""Tests for hint progression."""

import pytest

from labcheck.validation.hints import hint_index, select_hint

HINTS = ["Hint 1", "Hint 2", "Hint 3"]


class TestSelectHint:
    @pytest.mark.parametrize(
        "failure_count,expected",
        [
            (0, (0, None)),
            (1, (0, None)),
            (2, (2, "Hint 2")),
            (3, (2, "Hint 2")),
            (4, (3, "Hint 3")),
            (5, (3, "Hint 3")),
            (100, (3, "Hint 3")),
        ],
    )
    def test_progression(self, failure_count: int, expected: tuple) -> None:
        assert select_hint(HINTS, failure_count, passed=False) == expected

    @pytest.mark.parametrize("failure_count", [0, 2, 10])
    def test_passing_attempt_reveals_nothing(self, failure_count: int) -> None:
        assert select_hint(HINTS, failure_count, passed=True) == (0, None)

    def test_no_hints(self) -> None:
        assert select_hint([], 10, passed=False) == (0, None)

    def test_single_hint(self) -> None:
        assert select_hint(["Only"], 2, passed=False) == (1, "Only")
        assert select_hint(["Only"], 9, passed=False) == (1, "Only")

    def test_index_is_capped(self) -> None:
        assert hint_index(100, 3) == 2
        assert hint_index(2, 3) == 1
