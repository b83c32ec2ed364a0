"""
Hint progression.

One more hint unlocks for every two failed attempts, capped at the last
hint. Nothing is revealed before the second failure or on a passing attempt.
"""

from collections.abc import Sequence

FAILURES_PER_HINT = 2


def hint_index(failure_count: int, hint_total: int) -> int:
    return min(failure_count // FAILURES_PER_HINT, hint_total - 1)


def select_hint(hints: Sequence[str], failure_count: int, passed: bool) -> tuple[int, str | None]:
    """
    Pick the hint to show after a validation attempt.

    Args:
        hints: The exercise's hints, easiest first
        failure_count: Failed attempts so far, as counted by the caller
        passed: Whether this attempt passed

    Returns:
        Tuple of (hints_used, next_hint); (0, None) when nothing is revealed
    """
    if passed or failure_count < FAILURES_PER_HINT or not hints:
        return 0, None
    index = hint_index(failure_count, len(hints))
    return index + 1, hints[index]
