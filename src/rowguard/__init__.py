"""rowguard: cardinality-checked queries with structured result errors."""

from rowguard.database import Database, ErrorContext
from rowguard.errors import (
    ABSENT,
    QueryResultError,
    QueryResultErrorCode,
    codes,
    is_absent,
)
from rowguard.results import ResultMask, check_result

__all__ = [
    "ABSENT",
    "Database",
    "ErrorContext",
    "QueryResultError",
    "QueryResultErrorCode",
    "ResultMask",
    "check_result",
    "codes",
    "is_absent",
]
