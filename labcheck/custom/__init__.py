"""Custom check scripts: a small interpreted language for checks the DSL cannot express."""

from labcheck.custom.executor import DENYLIST_PATTERNS, check_custom_syntax, run_custom

__all__ = [
    "DENYLIST_PATTERNS",
    "check_custom_syntax",
    "run_custom",
]
