# Check DSL package: node variants, stored shape and path queries.
# The evaluator lives in labcheck.rules.evaluator.

from labcheck.rules.models import StoredCheck, is_pure_custom, parse_check
from labcheck.rules.nodes import CheckNode
from labcheck.rules.path_query import UNDEFINED, query_path

__all__ = [
    "CheckNode",
    "StoredCheck",
    "UNDEFINED",
    "is_pure_custom",
    "parse_check",
    "query_path",
]
