"""Query result errors: code registry, error type, and rendering."""

from rowguard.errors import codes
from rowguard.errors.codes import ErrorMessage, QueryResultErrorCode, lookup
from rowguard.errors.query_result import ABSENT, QueryResultError, is_absent

__all__ = [
    "ABSENT",
    "ErrorMessage",
    "QueryResultError",
    "QueryResultErrorCode",
    "codes",
    "is_absent",
    "lookup",
]
