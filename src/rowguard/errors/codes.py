"""Stable registry of query result error codes.

Each code names one way a query result can violate its cardinality
contract. Codes are compared by value (``err.code == codes.NO_DATA``);
the symbolic names are what appear in rendered errors.

- 0 ``noData``: rows were required, none came back
- 1 ``notEmpty``: no rows were expected, some came back
- 2 ``multiple``: at most one row was expected, several came back
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class QueryResultErrorCode(enum.IntEnum):
    NO_DATA = 0
    NOT_EMPTY = 1
    MULTIPLE = 2


@dataclass(frozen=True)
class ErrorMessage:
    name: str
    message: str


# Indexed by code value.
_ERROR_MESSAGES: tuple[ErrorMessage, ...] = (
    ErrorMessage(name="noData", message="No data returned from the query."),
    ErrorMessage(name="notEmpty", message="No return data was expected."),
    ErrorMessage(name="multiple", message="Multiple rows were not expected."),
)

NO_DATA = QueryResultErrorCode.NO_DATA
NOT_EMPTY = QueryResultErrorCode.NOT_EMPTY
MULTIPLE = QueryResultErrorCode.MULTIPLE


def to_code(code: object) -> QueryResultErrorCode:
    """Normalize ``code`` to a registry member.

    Raises ValueError for anything that is not one of the registry codes,
    including bools and out-of-range integers.
    """
    if isinstance(code, bool) or not isinstance(code, int):
        raise ValueError(f"unknown query result error code: {code!r}")
    try:
        return QueryResultErrorCode(code)
    except ValueError as e:
        raise ValueError(f"unknown query result error code: {code!r}") from e


def lookup(code: object) -> ErrorMessage:
    """Return the symbolic name and canonical message for ``code``."""
    return _ERROR_MESSAGES[to_code(code)]


def all_codes() -> list[tuple[QueryResultErrorCode, ErrorMessage]]:
    return [(c, _ERROR_MESSAGES[c]) for c in QueryResultErrorCode]
